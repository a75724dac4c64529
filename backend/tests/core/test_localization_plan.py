"""Localization Planning — tests for the pure helpers behind fan-out and linking.

Tests cover:
    - missing_locales keeps configured order, drops excluded and duplicate codes
    - build_localized_copies replaces only the locale
    - merge_localization_ids puts linked ids first without duplicates
    - sibling_ids never returns the entry's own id
    - connect_refs / relation_ids accept connect dicts and bare lists
    - index_by_locale keeps the first entry per locale
    - one_per_locale / conflicting_locales guard one record per locale per group
"""

from localesync.core.localization_plan import (
    build_localized_copies,
    conflicting_locales,
    connect_refs,
    index_by_locale,
    merge_localization_ids,
    missing_locales,
    one_per_locale,
    relation_ids,
    sibling_ids,
)


# ─── missing_locales ─────────────────────────────────────────────

def test_missing_locales_removes_own_locale():
    assert missing_locales(["pt", "en", "fr"], ["pt"]) == ["en", "fr"]


def test_missing_locales_keeps_configured_order():
    assert missing_locales(["fr", "pt", "en"], ["en"]) == ["fr", "pt"]


def test_missing_locales_collapses_duplicates():
    assert missing_locales(["en", "en", "fr"], []) == ["en", "fr"]


def test_missing_locales_ignores_none_in_exclude():
    assert missing_locales(["pt", "en"], [None]) == ["pt", "en"]


def test_missing_locales_all_covered_is_empty():
    assert missing_locales(["pt", "en"], ["en", "pt"]) == []


# ─── build_localized_copies ──────────────────────────────────────

def test_copies_replace_locale_and_keep_content():
    data = {"titulo": "Hino", "locale": "pt", "localizations": [4]}
    copies = build_localized_copies(data, ["en", "fr"])
    assert copies == [
        {"titulo": "Hino", "locale": "en", "localizations": [4]},
        {"titulo": "Hino", "locale": "fr", "localizations": [4]},
    ]
    assert data["locale"] == "pt"


def test_copies_for_no_locales_is_empty():
    assert build_localized_copies({"locale": "pt"}, []) == []


# ─── merge_localization_ids ──────────────────────────────────────

def test_merge_puts_linked_first():
    assert merge_localization_ids([7, 8], [10, 11]) == [7, 8, 10, 11]


def test_merge_drops_duplicates():
    assert merge_localization_ids([7], [7, 9]) == [7, 9]


def test_merge_with_nothing_linked_is_created_ids():
    assert merge_localization_ids([], [3, 4]) == [3, 4]


# ─── sibling_ids ─────────────────────────────────────────────────

def test_sibling_ids_excludes_own_id():
    entry = {"id": 1, "localizations": [{"id": 1}, {"id": 2}, {"id": 3}]}
    assert sibling_ids(entry, 1) == [2, 3]


def test_sibling_ids_without_group_is_empty():
    assert sibling_ids({"id": 1}, 1) == []
    assert sibling_ids({"id": 1, "localizations": None}, 1) == []


# ─── connect_refs / relation_ids ─────────────────────────────────

def test_connect_refs_from_connect_dict():
    assert connect_refs({"connect": [{"id": 5}, {"id": 6}]}) == [{"id": 5}, {"id": 6}]


def test_connect_refs_from_bare_ids():
    assert connect_refs([5, 6]) == [{"id": 5}, {"id": 6}]


def test_connect_refs_empty_inputs():
    assert connect_refs(None) == []
    assert connect_refs({}) == []
    assert connect_refs({"connect": []}) == []


def test_relation_ids_skips_refs_without_id():
    assert relation_ids({"connect": [{"id": 5}, {}]}) == [5]


# ─── index_by_locale ─────────────────────────────────────────────

def test_index_by_locale_first_entry_wins():
    entries = [
        {"id": 2, "locale": "en"},
        {"id": 3, "locale": "fr"},
        {"id": 4, "locale": "en"},
    ]
    index = index_by_locale(entries)
    assert index["en"]["id"] == 2
    assert index["fr"]["id"] == 3


# ─── one_per_locale / conflicting_locales ───────────────────────

def test_one_per_locale_drops_own_locale_and_repeats():
    entries = [
        {"id": 2, "locale": "pt"},
        {"id": 3, "locale": "en"},
        {"id": 4, "locale": "en"},
        {"id": 5, "locale": "fr"},
    ]
    kept = one_per_locale(entries, exclude_locale="pt")
    assert [e["id"] for e in kept] == [3, 5]


def test_one_per_locale_without_exclusion_keeps_first_per_locale():
    entries = [{"id": 7, "locale": "en"}, {"id": 8, "locale": "en"}]
    assert one_per_locale(entries) == [{"id": 7, "locale": "en"}]


def test_conflicting_locales_reports_own_locale_and_repeats():
    entries = [
        {"id": 2, "locale": "pt"},
        {"id": 3, "locale": "en"},
        {"id": 4, "locale": "en"},
        {"id": 5, "locale": "en"},
    ]
    assert conflicting_locales(entries, "pt") == ["pt", "en"]


def test_conflicting_locales_empty_for_distinct_group():
    entries = [{"id": 3, "locale": "en"}, {"id": 5, "locale": "fr"}]
    assert conflicting_locales(entries, "pt") == []
