"""Lifecycle Dispatch & Bindings — tests for event routing and patch application.

Tests cover:
    - Dispatcher calls only subscribers of the event's model that define the handler
    - Subscribers run in subscription order
    - beforeCreate binding writes the fan-out result into params['data']
    - beforeDelete binding stores the cascade result in event.state
    - Card afterCreate links categories; categories have no afterCreate hook
"""

from localesync.config import Settings
from localesync.core.domain_types import LifecycleAction, LifecycleEvent
from localesync.services.lifecycle_dispatch import LifecycleDispatcher
from localesync.services.lifecycles import build_lifecycles

CARD_UID = "api::card-musica.card-musica"
CATEGORY_UID = "api::categoria-de-musica.categoria-de-musica"


class _Recorder:
    def __init__(self, name: str, log: list):
        self.name = name
        self.log = log

    async def before_create(self, event):
        self.log.append(self.name)


class _DeleteOnly:
    async def before_delete(self, event):
        event.state["seen"] = True


# ─── LifecycleDispatcher ─────────────────────────────────────────

async def test_dispatch_runs_subscribers_in_order():
    log: list[str] = []
    dispatcher = LifecycleDispatcher()
    dispatcher.subscribe(CARD_UID, _Recorder("first", log))
    dispatcher.subscribe(CARD_UID, _Recorder("second", log))

    await dispatcher.dispatch(LifecycleEvent(
        LifecycleAction.BEFORE_CREATE, CARD_UID, {"data": {}},
    ))

    assert log == ["first", "second"]


async def test_dispatch_skips_missing_handlers_and_other_models():
    log: list[str] = []
    dispatcher = LifecycleDispatcher()
    dispatcher.subscribe(CARD_UID, _DeleteOnly())
    dispatcher.subscribe(CATEGORY_UID, _Recorder("category", log))

    event = await dispatcher.dispatch(LifecycleEvent(
        LifecycleAction.BEFORE_CREATE, CARD_UID, {"data": {}},
    ))

    assert log == []
    assert event.state == {}


# ─── Bindings ────────────────────────────────────────────────────

async def test_before_create_applies_fan_out_patch(fake_engine, fake_locales):
    dispatcher = build_lifecycles(fake_engine, fake_locales, Settings())
    event = LifecycleEvent(
        LifecycleAction.BEFORE_CREATE, CATEGORY_UID,
        {"data": {"nome": "Louvor", "locale": "pt", "localizations": []}},
    )

    await dispatcher.dispatch(event)

    created = [r["id"] for r in fake_engine.rows(CATEGORY_UID)]
    assert event.params["data"]["localizations"] == created
    assert event.state["localizations"].created_ids == created


async def test_before_delete_stores_cascade_result(fake_engine, fake_locales):
    ids = [
        fake_engine.seed(CATEGORY_UID, nome="Louvor", locale="pt"),
        fake_engine.seed(CATEGORY_UID, nome="Praise", locale="en"),
    ]
    fake_engine.link_group(CATEGORY_UID, ids)
    dispatcher = build_lifecycles(fake_engine, fake_locales, Settings())
    event = LifecycleEvent(
        LifecycleAction.BEFORE_DELETE, CATEGORY_UID, {"where": {"id": ids[0]}},
    )

    await dispatcher.dispatch(event)

    assert event.state["cascade"].sibling_ids == [ids[1]]


async def test_card_after_create_links_categories(fake_engine, fake_locales):
    cats = [
        fake_engine.seed(CATEGORY_UID, nome="Louvor", locale="pt"),
        fake_engine.seed(CATEGORY_UID, nome="Praise", locale="en"),
    ]
    fake_engine.link_group(CATEGORY_UID, cats)
    en_card = fake_engine.seed(CARD_UID, titulo="Hymn", locale="en")
    dispatcher = build_lifecycles(fake_engine, fake_locales, Settings())
    event = LifecycleEvent(
        LifecycleAction.AFTER_CREATE, CARD_UID,
        {"data": {
            "locale": "pt",
            "categoria_de_musicas": {"connect": [{"id": cats[0]}]},
            "localizations": [en_card],
        }},
    )

    await dispatcher.dispatch(event)

    assert event.state["category_links"].linked == [(cats[1], en_card)]


async def test_category_has_no_after_create_hook(fake_engine, fake_locales):
    dispatcher = build_lifecycles(fake_engine, fake_locales, Settings())
    event = LifecycleEvent(
        LifecycleAction.AFTER_CREATE, CATEGORY_UID, {"data": {"locale": "pt"}},
    )
    await dispatcher.dispatch(event)
    assert fake_engine.calls == []
