"""Localization Fan-out — creates the missing locale copies of a record being created.

Invariants:
    - The new group never holds two records for one locale: locales already
      covered by the record itself or by its linked localizations are skipped
    - Linked ids that no longer exist are dropped, and so are linked entries
      in the record's own locale or in a locale another linked entry holds
    - Any failure yields an empty LocalizationPatch; the primary create proceeds
      with its data unchanged

Design Decisions:
    - Returns a LocalizationPatch instead of editing the pending create; the
      lifecycle binding applies it
    - Lookup-then-insert is not atomic: two concurrent creates for one group can
      both insert the same missing locale. Accepted, not guarded
"""

import logging

from localesync.core.domain_types import LocalizationPatch, entity_uid
from localesync.core.localization_plan import (
    build_localized_copies, merge_localization_ids, missing_locales,
    one_per_locale,
)
from localesync.core.repository_protocols import LocaleService, QueryEngine
from localesync.services.locale_lister import list_locales

_logger = logging.getLogger(__name__)


async def fan_out_localizations(
    engine: QueryEngine,
    locale_service: LocaleService,
    entity_name: str,
    data: dict,
    logger: logging.Logger | None = None,
) -> LocalizationPatch:
    """Insert one copy of `data` per missing locale and return the merged group ids."""
    log = logger or _logger
    uid = entity_uid(entity_name)
    own_locale = data.get("locale")
    requested = list(data.get("localizations") or [])

    try:
        candidates = missing_locales(await list_locales(locale_service), [own_locale])
        linked_ids: list[int] = []

        if requested:
            entries = await engine.query(uid).find_many(
                select=["id", "locale"],
                where={"id": {"$in": requested}},
            )
            kept = one_per_locale(entries, exclude_locale=own_locale)
            linked_ids = [e["id"] for e in kept]
            dropped = [e["id"] for e in entries if e["id"] not in linked_ids]
            if dropped:
                log.warning(
                    f"Dropped linked {uid} {dropped}: locale already in the group",
                    extra={"entity": uid, "locale": own_locale, "action": "fan_out"},
                )
            candidates = missing_locales(candidates, [e["locale"] for e in kept])

        created_ids: list[int] = []
        if candidates:
            created = await engine.query(uid).create_many(
                data=build_localized_copies(data, candidates),
            )
            created_ids = list(created.ids)
            log.info(
                f"Created {created.count} localization(s) of {uid}: {', '.join(candidates)}",
                extra={"entity": uid, "count": created.count, "action": "fan_out"},
            )
        else:
            log.info(
                f"No missing locales for {uid} ({own_locale})",
                extra={"entity": uid, "locale": own_locale, "action": "fan_out"},
            )

        return LocalizationPatch(
            localizations=merge_localization_ids(linked_ids, created_ids),
            created_ids=created_ids,
        )
    except Exception as e:
        log.error(
            f"Localization fan-out failed for {uid}: {e}",
            extra={"entity": uid, "locale": own_locale, "action": "fan_out"},
            exc_info=True,
        )
        return LocalizationPatch()
