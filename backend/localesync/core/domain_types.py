"""Domain Types — identifiers, lifecycle actions and result records shared by the hooks.

Invariants:
    - Content-type uids follow the host convention api::<name>.<name>
    - Result records are plain dataclasses; they never hold store handles
    - LocalizationPatch.apply never mutates its input

Design Decisions:
    - Procedures return these records and the lifecycle bindings apply them,
      instead of hooks writing into shared event params
    - str Enums for lifecycle actions: values match the host event names
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ─── Content Types ───────────────────────────────────────────────

CARD_MUSICA = "card-musica"
CATEGORIA_DE_MUSICA = "categoria-de-musica"


def entity_uid(entity_name: str) -> str:
    """Build the host uid for a content type, e.g. api::card-musica.card-musica."""
    return f"api::{entity_name}.{entity_name}"


# ─── Enums ───────────────────────────────────────────────────────

class LifecycleAction(str, Enum):
    """Host lifecycle events the bindings subscribe to."""
    BEFORE_CREATE = "beforeCreate"
    AFTER_CREATE = "afterCreate"
    BEFORE_DELETE = "beforeDelete"
    AFTER_DELETE = "afterDelete"


class LinkErrorPolicy(str, Enum):
    """What CategoryLinker does when one sibling link fails."""
    CONTINUE = "continue"
    ABORT = "abort"


# ─── Events ──────────────────────────────────────────────────────

@dataclass
class LifecycleEvent:
    """A pending host operation. params carries data (create) or where (delete)."""
    action: LifecycleAction
    model: str
    params: dict[str, Any]
    result: dict | None = None
    state: dict[str, Any] = field(default_factory=dict)


# ─── Store Results ───────────────────────────────────────────────

@dataclass(frozen=True)
class CreateManyResult:
    count: int
    ids: list[int]


@dataclass(frozen=True)
class DeleteManyResult:
    count: int


# ─── Hook Results ────────────────────────────────────────────────

@dataclass(frozen=True)
class LocalizationPatch:
    """Outcome of a fan-out. localizations=None means leave the create untouched."""
    localizations: list[int] | None = None
    created_ids: list[int] = field(default_factory=list)

    def apply(self, data: dict) -> dict:
        if self.localizations is None:
            return data
        return {**data, "localizations": list(self.localizations)}


@dataclass(frozen=True)
class CascadeDeleteResult:
    entity_uid: str
    entry_id: int
    sibling_ids: list[int] = field(default_factory=list)
    deleted_count: int = 0
    failed: bool = False


@dataclass
class CategoryLinkReport:
    """Per-pass record of which sibling cards were linked, skipped or failed."""
    source_category_id: int | None = None
    linked: list[tuple[int, int]] = field(default_factory=list)
    skipped_card_ids: list[int] = field(default_factory=list)
    failed_card_ids: list[int] = field(default_factory=list)
    aborted: bool = False
