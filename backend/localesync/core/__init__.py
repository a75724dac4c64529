"""Core Layer — domain types, errors, boundary protocols and pure planning functions.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions in localization_plan.py are pure and deterministic
"""
