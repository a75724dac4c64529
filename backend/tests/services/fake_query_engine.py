"""In-memory query engine and locale service for hook tests.

Invariants:
    - Rows live in plain dicts keyed by id; ids are assigned per table from 1
    - Every call is recorded in engine.calls as (uid, operation, kwargs)
    - fail(uid, operation, when) makes matching calls raise FakeStoreError
    - Localization groups are stored per row under '_localizations' (ids only)
"""

from typing import Callable

from localesync.core.domain_types import CreateManyResult, DeleteManyResult


class FakeStoreError(RuntimeError):
    pass


def _matches(row: dict, where: dict) -> bool:
    for field_name, condition in where.items():
        value = row.get(field_name)
        if not isinstance(condition, dict):
            if value != condition:
                return False
            continue
        for op, expected in condition.items():
            if op == "$eq" and value != expected:
                return False
            if op == "$ne" and value == expected:
                return False
            if op == "$in" and value not in expected:
                return False
            if op == "$notIn" and value in expected:
                return False
    return True


def _public(row: dict, select: list[str] | None = None) -> dict:
    visible = {k: v for k, v in row.items() if not k.startswith("_")}
    if select:
        visible = {k: v for k, v in visible.items() if k in select or k == "id"}
    return visible


class FakeQuery:
    def __init__(self, engine: "FakeQueryEngine", uid: str):
        self.engine = engine
        self.uid = uid

    @property
    def rows(self) -> dict[int, dict]:
        return self.engine.tables.setdefault(self.uid, {})

    def _record(self, operation: str, **kwargs) -> None:
        self.engine.calls.append((self.uid, operation, kwargs))
        check = self.engine.failures.get((self.uid, operation))
        if check is not None and check(kwargs):
            raise FakeStoreError(f"{operation} on {self.uid} failed")

    def _insert(self, data: dict) -> int:
        new_id = self.engine.next_id(self.uid)
        self.rows[new_id] = {**data, "id": new_id}
        return new_id

    async def find_one(self, *, where, select=None, populate=None):
        self._record("find_one", where=where, select=select, populate=populate)
        for row in self.rows.values():
            if _matches(row, where):
                entry = _public(row, select)
                if populate and populate.get("localizations"):
                    entry["localizations"] = [
                        _public(self.rows[i]) for i in row.get("_localizations", [])
                        if i in self.rows
                    ]
                return entry
        return None

    async def find_many(self, *, where, select=None, populate=None):
        self._record("find_many", where=where, select=select)
        return [
            _public(row, select) for row in self.rows.values()
            if _matches(row, where)
        ]

    async def create_many(self, *, data):
        self._record("create_many", data=data)
        ids = [self._insert(item) for item in data]
        return CreateManyResult(count=len(ids), ids=ids)

    async def delete_many(self, *, where):
        self._record("delete_many", where=where)
        doomed = [i for i, row in self.rows.items() if _matches(row, where)]
        for i in doomed:
            del self.rows[i]
        return DeleteManyResult(count=len(doomed))

    async def create(self, *, data):
        self._record("create", data=data)
        return _public(self.rows[self._insert(data)])


class FakeQueryEngine:
    """QueryEngine double: tables keyed by uid or join-table name."""

    def __init__(self):
        self.tables: dict[str, dict[int, dict]] = {}
        self.calls: list[tuple[str, str, dict]] = []
        self.failures: dict[tuple[str, str], Callable[[dict], bool]] = {}
        self._ids: dict[str, int] = {}

    def next_id(self, uid: str) -> int:
        self._ids[uid] = self._ids.get(uid, 0) + 1
        return self._ids[uid]

    def query(self, uid: str) -> FakeQuery:
        return FakeQuery(self, uid)

    def seed(self, uid: str, **fields) -> int:
        return FakeQuery(self, uid)._insert(fields)

    def link_group(self, uid: str, ids: list[int]) -> None:
        """Mark `ids` as one localization group (each row lists the others)."""
        for i in ids:
            self.tables[uid][i]["_localizations"] = [j for j in ids if j != i]

    def fail(
        self, uid: str, operation: str,
        when: Callable[[dict], bool] = lambda kwargs: True,
    ) -> None:
        self.failures[(uid, operation)] = when

    def calls_to(self, uid: str, operation: str | None = None) -> list[dict]:
        return [
            kwargs for call_uid, op, kwargs in self.calls
            if call_uid == uid and (operation is None or op == operation)
        ]

    def rows(self, uid: str) -> list[dict]:
        return [_public(row) for row in self.tables.get(uid, {}).values()]


class FakeLocaleService:
    def __init__(self, codes: list[str], fail: bool = False):
        self.codes = codes
        self.should_fail = fail
        self.calls = 0

    async def find(self) -> list[dict]:
        self.calls += 1
        if self.should_fail:
            raise FakeStoreError("locale service unreachable")
        return [
            {"code": code, "name": code, "is_default": index == 0}
            for index, code in enumerate(self.codes)
        ]
