"""Localization Planning — pure helpers behind fan-out and category linking.

Invariants:
    - All functions are pure and deterministic; inputs are never mutated
    - Locale order follows the configured order, duplicates collapsed
    - missing_locales never returns a locale in `exclude` (one record per locale per group)
"""

from typing import Any, Iterable


def missing_locales(
    configured: Iterable[str], exclude: Iterable[str | None],
) -> list[str]:
    """Configured locales not present in `exclude`, in configured order."""
    excluded = set(exclude)
    return [
        code for code in dict.fromkeys(configured)
        if code not in excluded
    ]


def build_localized_copies(data: dict, locales: Iterable[str]) -> list[dict]:
    """One shallow copy of `data` per locale, with `locale` replaced."""
    return [{**data, "locale": locale} for locale in locales]


def merge_localization_ids(
    linked_ids: Iterable[int], created_ids: Iterable[int],
) -> list[int]:
    """Already-linked ids first, then newly created ones; no duplicates."""
    return list(dict.fromkeys([*linked_ids, *created_ids]))


def sibling_ids(entry: dict, own_id: int) -> list[int]:
    """Ids in an entry's localization group, excluding the entry itself."""
    return [
        loc["id"] for loc in entry.get("localizations") or []
        if loc.get("id") is not None and loc["id"] != own_id
    ]


def connect_refs(relation_value: Any) -> list[dict]:
    """Normalize a relation payload to a list of {'id': ...} refs.

    Accepts {'connect': [...]} or a bare list of ids / refs. Anything else
    (None, empty dict) yields no refs.
    """
    if isinstance(relation_value, dict):
        items = relation_value.get("connect") or []
    elif isinstance(relation_value, (list, tuple)):
        items = relation_value
    else:
        return []
    return [
        item if isinstance(item, dict) else {"id": item}
        for item in items
    ]


def relation_ids(relation_value: Any) -> list[int]:
    return [
        ref["id"] for ref in connect_refs(relation_value)
        if ref.get("id") is not None
    ]


def index_by_locale(entries: Iterable[dict]) -> dict[str, dict]:
    """Map locale -> entry. The first entry seen for a locale wins."""
    index: dict[str, dict] = {}
    for entry in entries:
        index.setdefault(entry.get("locale"), entry)
    return index


def one_per_locale(
    entries: Iterable[dict], exclude_locale: str | None = None,
) -> list[dict]:
    """First entry for each locale, leaving out `exclude_locale`."""
    return [
        entry for locale, entry in index_by_locale(entries).items()
        if locale != exclude_locale
    ]


def conflicting_locales(
    entries: Iterable[dict], own_locale: str | None,
) -> list[str]:
    """Locales that would appear twice in a group formed by own_locale + entries."""
    seen = {own_locale}
    conflicts: list[str] = []
    for entry in entries:
        locale = entry.get("locale")
        if locale in seen and locale not in conflicts:
            conflicts.append(locale)
        seen.add(locale)
    return conflicts
