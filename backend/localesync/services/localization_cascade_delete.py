"""Localization Cascade Delete — removes the sibling localizations of a record being deleted.

Invariants:
    - The triggering id is never part of the delete_many where clause;
      deleting it is the host's primary operation
    - Failures are logged and reported in the result, never raised
"""

import logging

from localesync.core.domain_types import CascadeDeleteResult, entity_uid
from localesync.core.localization_plan import sibling_ids
from localesync.core.repository_protocols import QueryEngine

_logger = logging.getLogger(__name__)


async def cascade_delete_localizations(
    engine: QueryEngine,
    entity_name: str,
    entry_id: int,
    logger: logging.Logger | None = None,
) -> CascadeDeleteResult:
    log = logger or _logger
    uid = entity_uid(entity_name)
    try:
        query = engine.query(uid)
        entry = await query.find_one(
            select=["id"],
            where={"id": entry_id},
            populate={"localizations": True},
        )
        if entry is None:
            log.info(
                f"{uid} {entry_id} not found, nothing to cascade",
                extra={"entity": uid, "record_id": entry_id},
            )
            return CascadeDeleteResult(uid, entry_id)

        siblings = sibling_ids(entry, entry_id)
        if not siblings:
            log.info(
                f"{uid} {entry_id} has no localizations",
                extra={"entity": uid, "record_id": entry_id},
            )
            return CascadeDeleteResult(uid, entry_id)

        deleted = await query.delete_many(where={"id": {"$in": siblings}})
        log.info(
            f"Deleted {deleted.count} localization(s) of {uid} {entry_id}",
            extra={"entity": uid, "record_id": entry_id, "count": deleted.count},
        )
        return CascadeDeleteResult(uid, entry_id, siblings, deleted.count)
    except Exception as e:
        log.error(
            f"Cascade delete failed for {uid} {entry_id}: {e}",
            extra={"entity": uid, "record_id": entry_id, "action": "cascade_delete"},
            exc_info=True,
        )
        return CascadeDeleteResult(uid, entry_id, failed=True)
