"""Lifecycle Bindings — wire the localization hooks to the card and category content types.

Invariants:
    - Both content types: fan-out on beforeCreate, cascade delete on beforeDelete
    - Cards additionally run the category linker on afterCreate, after fan-out
      has filled params['data']['localizations']
    - Hook results are stored in event.state under 'localizations',
      'cascade' and 'category_links'

Design Decisions:
    - The procedures return patches; only this layer writes into event.params,
      which is the host's contract for changing a pending operation
"""

from localesync.config import Settings
from localesync.core.domain_types import (
    CARD_MUSICA, CATEGORIA_DE_MUSICA, LifecycleEvent, entity_uid,
)
from localesync.core.repository_protocols import LocaleService, QueryEngine
from localesync.services.category_linker import link_card_categories
from localesync.services.lifecycle_dispatch import LifecycleDispatcher
from localesync.services.localization_cascade_delete import (
    cascade_delete_localizations,
)
from localesync.services.localization_fanout import fan_out_localizations


class LocalizedEntryLifecycle:
    """Keeps a localized content type's groups complete on create and delete."""

    def __init__(
        self, entity_name: str, engine: QueryEngine, locale_service: LocaleService,
    ):
        self.entity_name = entity_name
        self.engine = engine
        self.locale_service = locale_service

    async def before_create(self, event: LifecycleEvent) -> None:
        data = event.params["data"]
        patch = await fan_out_localizations(
            self.engine, self.locale_service, self.entity_name, data,
        )
        event.params["data"] = patch.apply(data)
        event.state["localizations"] = patch

    async def before_delete(self, event: LifecycleEvent) -> None:
        entry_id = event.params["where"]["id"]
        event.state["cascade"] = await cascade_delete_localizations(
            self.engine, self.entity_name, entry_id,
        )


class CardMusicaLifecycle(LocalizedEntryLifecycle):
    """Card lifecycle: localized entry plus per-locale category links."""

    def __init__(
        self, engine: QueryEngine, locale_service: LocaleService, settings: Settings,
    ):
        super().__init__(CARD_MUSICA, engine, locale_service)
        self.on_error = settings.category_link_error_policy

    async def after_create(self, event: LifecycleEvent) -> None:
        event.state["category_links"] = await link_card_categories(
            self.engine, self.entity_name, event.params["data"],
            on_error=self.on_error,
        )


def build_lifecycles(
    engine: QueryEngine, locale_service: LocaleService, settings: Settings,
) -> LifecycleDispatcher:
    dispatcher = LifecycleDispatcher()
    dispatcher.subscribe(
        entity_uid(CARD_MUSICA),
        CardMusicaLifecycle(engine, locale_service, settings),
    )
    dispatcher.subscribe(
        entity_uid(CATEGORIA_DE_MUSICA),
        LocalizedEntryLifecycle(CATEGORIA_DE_MUSICA, engine, locale_service),
    )
    return dispatcher
