"""Content Service — create/get/delete for localized content, with lifecycle events.

Invariants:
    - create resolves a missing locale to the default locale and rejects
      locales that are not configured
    - beforeCreate runs before the insert and may change params['data'];
      afterCreate sees the final params and the created entry
    - Relation ids and linked localizations are checked before any hook runs:
      a missing related entry raises ResourceNotFoundError, and linked
      localizations that repeat a locale raise LocalizationConflictError
    - delete of an unknown id raises ResourceNotFoundError before any hook runs
    - Returned entries carry their localizations (and other relations) populated
"""

import logging
from dataclasses import dataclass

from localesync.core.domain_types import (
    CascadeDeleteResult, LifecycleAction, LifecycleEvent,
)
from localesync.core.errors import (
    ErrorContext, LocaleNotConfiguredError, LocalizationConflictError,
    ResourceNotFoundError,
)
from localesync.core.localization_plan import conflicting_locales, relation_ids
from localesync.core.repository_protocols import LocaleService, QueryEngine
from localesync.services.lifecycle_dispatch import LifecycleDispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteOutcome:
    entry: dict
    cascade: CascadeDeleteResult | None


class ContentService:
    """Host-side CRUD for localized content types."""

    def __init__(
        self,
        engine: QueryEngine,
        locale_service: LocaleService,
        dispatcher: LifecycleDispatcher,
        populate: dict[str, dict] | None = None,
        relations: dict[str, dict[str, str]] | None = None,
    ):
        self.engine = engine
        self.locale_service = locale_service
        self.dispatcher = dispatcher
        self.populate = populate or {}
        self.relations = relations or {}

    async def _resolve_locale(self, uid: str, locale: str | None) -> str:
        locales = await self.locale_service.find()
        codes = [entry["code"] for entry in locales]
        if locale is None:
            default = next(
                (entry["code"] for entry in locales if entry.get("is_default")),
                codes[0] if codes else None,
            )
            if default is None:
                raise LocaleNotConfiguredError(None, ErrorContext(entity=uid))
            return default
        if locale not in codes:
            raise LocaleNotConfiguredError(locale, ErrorContext(entity=uid))
        return locale

    async def _check_relations(self, uid: str, data: dict) -> None:
        """Reject relation ids that do not exist and same-locale localizations."""
        for field_name, target_uid in self.relations.get(uid, {}).items():
            ids = list(dict.fromkeys(relation_ids(data.get(field_name))))
            if not ids:
                continue
            found = await self.engine.query(target_uid).find_many(
                select=["id", "locale"], where={"id": {"$in": ids}},
            )
            if field_name == "localizations":
                conflicts = conflicting_locales(found, data["locale"])
                if conflicts:
                    raise LocalizationConflictError(
                        conflicts, ErrorContext(entity=uid, debug_info={"ids": ids}),
                    )
                continue
            found_ids = {entry["id"] for entry in found}
            missing = [i for i in ids if i not in found_ids]
            if missing:
                raise ResourceNotFoundError(
                    target_uid, ", ".join(map(str, missing)),
                    ErrorContext(entity=target_uid, record_id=missing[0]),
                )

    async def get(self, uid: str, entry_id: int) -> dict:
        entry = await self.engine.query(uid).find_one(
            where={"id": entry_id}, populate=self.populate.get(uid),
        )
        if entry is None:
            raise ResourceNotFoundError(
                uid, str(entry_id), ErrorContext(entity=uid, record_id=entry_id),
            )
        return entry

    async def create(self, uid: str, data: dict) -> dict:
        data = {**data, "locale": await self._resolve_locale(uid, data.get("locale"))}
        await self._check_relations(uid, data)
        event = LifecycleEvent(
            action=LifecycleAction.BEFORE_CREATE, model=uid, params={"data": data},
        )
        await self.dispatcher.dispatch(event)

        entry = await self.engine.query(uid).create(data=event.params["data"])
        logger.info(
            f"Created {uid} {entry['id']}",
            extra={"entity": uid, "record_id": entry["id"], "locale": entry.get("locale")},
        )

        await self.dispatcher.dispatch(LifecycleEvent(
            action=LifecycleAction.AFTER_CREATE, model=uid,
            params=event.params, result=entry, state=event.state,
        ))
        return await self.get(uid, entry["id"])

    async def delete(self, uid: str, entry_id: int) -> DeleteOutcome:
        query = self.engine.query(uid)
        entry = await query.find_one(where={"id": entry_id})
        if entry is None:
            raise ResourceNotFoundError(
                uid, str(entry_id), ErrorContext(entity=uid, record_id=entry_id),
            )

        event = LifecycleEvent(
            action=LifecycleAction.BEFORE_DELETE, model=uid,
            params={"where": {"id": entry_id}},
        )
        await self.dispatcher.dispatch(event)

        await query.delete_many(where=event.params["where"])
        logger.info(
            f"Deleted {uid} {entry_id}",
            extra={"entity": uid, "record_id": entry_id},
        )

        await self.dispatcher.dispatch(LifecycleEvent(
            action=LifecycleAction.AFTER_DELETE, model=uid,
            params=event.params, result=entry, state=event.state,
        ))
        return DeleteOutcome(entry=entry, cascade=event.state.get("cascade"))
