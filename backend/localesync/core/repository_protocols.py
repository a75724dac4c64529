"""Boundary Protocols — contracts between the hooks and the content store.

Invariants:
    - Hooks never import from infrastructure/; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the host via dependency injection

Design Decisions:
    - Protocol over ABC: the SQL adapter and the in-memory test fake both
      satisfy these structurally
    - Keyword-only arguments mirror the host query API (where / select / populate / data)
"""

from typing import Protocol

from localesync.core.domain_types import CreateManyResult, DeleteManyResult


class EntityQuery(Protocol):
    """Query surface for one content type or join table."""
    async def find_one(
        self, *, where: dict, select: list[str] | None = None,
        populate: dict | None = None,
    ) -> dict | None: ...
    async def find_many(
        self, *, where: dict, select: list[str] | None = None,
        populate: dict | None = None,
    ) -> list[dict]: ...
    async def create_many(self, *, data: list[dict]) -> CreateManyResult: ...
    async def delete_many(self, *, where: dict) -> DeleteManyResult: ...
    async def create(self, *, data: dict) -> dict: ...


class QueryEngine(Protocol):
    """Resolves a content-type uid or join-table name to its query surface."""
    def query(self, uid: str) -> EntityQuery: ...


class LocaleService(Protocol):
    """Locale configuration. Each item carries at least a 'code' key."""
    async def find(self) -> list[dict]: ...
