"""SQL Query Engine — host query API (find/create/delete) over SQLAlchemy async sessions.

Invariants:
    - Every returned entry is a plain dict and always carries 'id'
    - Write operations commit on success and roll back on SQLAlchemyError,
      which is re-raised as DatabaseError
    - create_many inserts scalar columns only; relation keys in the payload are ignored
    - create applies relations: 'localizations' replaces the group links with a
      symmetric set, other relations connect the given ids
    - Bulk operations never trigger lifecycle events

Design Decisions:
    - Each operation is its own unit of work: a hook that fails and is caught
      leaves the session usable for the host's primary operation
    - Join tables (e.g. categoria_de_musicas_card_musica_links) are addressed by
      table name, the same way the host exposes them
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import Table, delete, insert, or_
from sqlalchemy import select as sql_select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from localesync.core.domain_types import CreateManyResult, DeleteManyResult
from localesync.core.errors import DatabaseError, ErrorContext, QueryError
from localesync.core.localization_plan import relation_ids
from localesync.infrastructure.content_types import (
    CONTENT_TYPES, JOIN_TABLES, ContentTypeSpec, RelationSpec,
)
from localesync.infrastructure.where_clause import compile_where

logger = logging.getLogger(__name__)


class SqlTableQuery:
    """Query surface over a single table (join tables use this directly)."""

    def __init__(self, db: AsyncSession, table: Table):
        self.db = db
        self.table = table

    @asynccontextmanager
    async def _guard(
        self, operation: str, commit: bool = False,
    ) -> AsyncGenerator[None, None]:
        try:
            yield
            if commit:
                await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Query {operation} on {self.table.name} failed: {e}",
                extra={"entity": self.table.name, "action": operation},
            )
            raise DatabaseError(
                type(e).__name__, operation,
                ErrorContext(entity=self.table.name),
            ) from e

    def _columns(self, select: list[str] | None) -> list:
        if not select:
            return list(self.table.c)
        names = list(dict.fromkeys(select))
        if "id" in self.table.c and "id" not in names:
            names.insert(0, "id")
        unknown = [n for n in names if n not in self.table.c]
        if unknown:
            raise QueryError(
                f"Unknown field(s) {', '.join(unknown)} on {self.table.name}",
            )
        return [self.table.c[n] for n in names]

    def _scalar_values(self, data: dict) -> dict:
        return {
            key: value for key, value in data.items()
            if key in self.table.c and key != "id"
        }

    async def _fetch(
        self, where: dict, select: list[str] | None, limit: int | None = None,
    ) -> list[dict]:
        stmt = sql_select(*self._columns(select)).where(
            *compile_where(self.table, where),
        )
        if "id" in self.table.c:
            stmt = stmt.order_by(self.table.c.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._guard("find"):
            result = await self.db.execute(stmt)
            return [dict(row._mapping) for row in result]

    async def find_one(
        self, *, where: dict, select: list[str] | None = None,
        populate: dict | None = None,
    ) -> dict | None:
        rows = await self.find_many(
            where=where, select=select, populate=populate, limit=1,
        )
        return rows[0] if rows else None

    async def find_many(
        self, *, where: dict, select: list[str] | None = None,
        populate: dict | None = None, limit: int | None = None,
    ) -> list[dict]:
        if populate:
            raise QueryError(f"{self.table.name} has no relations to populate")
        return await self._fetch(where, select, limit)

    async def create(self, *, data: dict) -> dict:
        values = self._scalar_values(data)
        async with self._guard("create", commit=True):
            result = await self.db.execute(insert(self.table).values(**values))
            pk = result.inserted_primary_key
        if "id" in self.table.c:
            values["id"] = pk[0]
        return values

    async def create_many(self, *, data: list[dict]) -> CreateManyResult:
        ids: list[int] = []
        if not data:
            return CreateManyResult(count=0, ids=ids)
        async with self._guard("create_many", commit=True):
            for item in data:
                result = await self.db.execute(
                    insert(self.table).values(**self._scalar_values(item)),
                )
                ids.append(result.inserted_primary_key[0])
        return CreateManyResult(count=len(ids), ids=ids)

    async def delete_many(self, *, where: dict) -> DeleteManyResult:
        clauses = compile_where(self.table, where)
        if not clauses:
            raise QueryError(f"delete_many on {self.table.name} requires a where clause")
        async with self._guard("delete_many", commit=True):
            result = await self.db.execute(delete(self.table).where(*clauses))
        return DeleteManyResult(count=result.rowcount)


class SqlEntityQuery(SqlTableQuery):
    """Query surface for a registered content type, relation-aware."""

    def __init__(self, engine: "SqlQueryEngine", spec: ContentTypeSpec):
        super().__init__(engine.db, spec.table)
        self.engine = engine
        self.spec = spec

    def _relation(self, field_name: str) -> RelationSpec:
        relation = self.spec.relations.get(field_name)
        if relation is None:
            raise QueryError(f"Unknown relation '{field_name}' on {self.spec.uid}")
        return relation

    async def find_many(
        self, *, where: dict, select: list[str] | None = None,
        populate: dict | None = None, limit: int | None = None,
    ) -> list[dict]:
        entries = await self._fetch(where, select, limit)
        for field_name, wanted in (populate or {}).items():
            if wanted:
                await self._populate(entries, field_name, wanted)
        return entries

    async def _populate(self, entries: list[dict], field_name: str, wanted) -> None:
        relation = self._relation(field_name)
        link = relation.table
        target = self.engine.query(relation.target_uid)
        target_select = wanted.get("select") if isinstance(wanted, dict) else None
        for entry in entries:
            async with self._guard("populate"):
                result = await self.db.execute(
                    sql_select(link.c[relation.target_column])
                    .where(link.c[relation.owner_column] == entry["id"]),
                )
                ids = list(result.scalars())
            entry[field_name] = await target.find_many(
                where={"id": {"$in": ids}}, select=target_select,
            ) if ids else []

    async def create(self, *, data: dict) -> dict:
        values = self._scalar_values(data)
        async with self._guard("create", commit=True):
            result = await self.db.execute(insert(self.table).values(**values))
            entry_id = result.inserted_primary_key[0]
            for field_name, relation in self.spec.relations.items():
                if field_name not in data:
                    continue
                ids = relation_ids(data[field_name])
                if field_name == "localizations":
                    await self._sync_group(relation, entry_id, ids)
                elif ids:
                    await self.db.execute(insert(relation.table), [
                        {relation.owner_column: entry_id, relation.target_column: i}
                        for i in dict.fromkeys(ids)
                    ])
        return await self.find_one(where={"id": entry_id})

    async def _sync_group(
        self, relation: RelationSpec, entry_id: int, member_ids: list[int],
    ) -> None:
        """Make entry_id and the existing member_ids one mutually linked group."""
        existing = await self.db.execute(
            sql_select(self.table.c.id).where(self.table.c.id.in_(member_ids)),
        )
        group = list(dict.fromkeys([entry_id, *existing.scalars()]))
        if len(group) < 2:
            return
        link = relation.table
        owner = link.c[relation.owner_column]
        target = link.c[relation.target_column]
        await self.db.execute(
            delete(link).where(or_(owner.in_(group), target.in_(group))),
        )
        await self.db.execute(insert(link), [
            {relation.owner_column: a, relation.target_column: b}
            for a in group for b in group if a != b
        ])


class SqlQueryEngine:
    """Resolves uids and join-table names to SQL-backed query surfaces."""

    def __init__(
        self,
        db: AsyncSession,
        content_types: dict[str, ContentTypeSpec] = CONTENT_TYPES,
        join_tables: dict[str, Table] = JOIN_TABLES,
    ):
        self.db = db
        self._content_types = content_types
        self._join_tables = join_tables

    def query(self, uid: str) -> SqlTableQuery:
        spec = self._content_types.get(uid)
        if spec is not None:
            return SqlEntityQuery(self, spec)
        table = self._join_tables.get(uid)
        if table is not None:
            return SqlTableQuery(self.db, table)
        raise QueryError(f"Unknown content type '{uid}'")
