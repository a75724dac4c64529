"""localesync — keeps localized card and category records in sync across locales.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
