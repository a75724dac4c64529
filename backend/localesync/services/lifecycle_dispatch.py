"""Lifecycle Dispatcher — routes host lifecycle events to per-content-type subscribers.

Invariants:
    - A subscriber handles an action only if it defines the matching method
      (before_create, after_create, before_delete, after_delete)
    - Subscribers run in subscription order and are awaited one at a time
    - Exceptions raised by a subscriber propagate to the host operation
"""

import logging

from localesync.core.domain_types import LifecycleAction, LifecycleEvent

logger = logging.getLogger(__name__)

_HANDLER_NAMES = {
    LifecycleAction.BEFORE_CREATE: "before_create",
    LifecycleAction.AFTER_CREATE: "after_create",
    LifecycleAction.BEFORE_DELETE: "before_delete",
    LifecycleAction.AFTER_DELETE: "after_delete",
}


class LifecycleDispatcher:
    """Registry of lifecycle subscribers keyed by content-type uid."""

    def __init__(self):
        self._subscribers: dict[str, list[object]] = {}

    def subscribe(self, uid: str, subscriber: object) -> None:
        self._subscribers.setdefault(uid, []).append(subscriber)

    async def dispatch(self, event: LifecycleEvent) -> LifecycleEvent:
        name = _HANDLER_NAMES[event.action]
        for subscriber in self._subscribers.get(event.model, []):
            handler = getattr(subscriber, name, None)
            if handler is None:
                continue
            logger.debug(
                f"{event.action.value} -> {type(subscriber).__name__}",
                extra={"entity": event.model, "action": event.action.value},
            )
            await handler(event)
        return event
