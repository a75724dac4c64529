"""Where Clause Compiler — host-style filter dicts to SQLAlchemy expressions.

Invariants:
    - {field: value} compiles to equality; {field: {op: value}} to the operator
    - Several operators on one field are ANDed
    - Unknown fields or operators raise QueryError (never silently ignored)
"""

from typing import Any, Callable

from sqlalchemy import ColumnElement, Table

from localesync.core.errors import QueryError

_OPERATORS: dict[str, Callable[[Any, Any], ColumnElement]] = {
    "$eq": lambda col, v: col == v,
    "$ne": lambda col, v: col != v,
    "$in": lambda col, v: col.in_(list(v)),
    "$notIn": lambda col, v: col.not_in(list(v)),
    "$null": lambda col, v: col.is_(None) if v else col.is_not(None),
}


def compile_where(table: Table, where: dict | None) -> list[ColumnElement]:
    """Compile a where dict against `table` into a list of AND-ed clauses."""
    clauses: list[ColumnElement] = []
    for field_name, condition in (where or {}).items():
        if field_name not in table.c:
            raise QueryError(f"Unknown field '{field_name}' on {table.name}")
        column = table.c[field_name]
        if not isinstance(condition, dict):
            clauses.append(column == condition)
            continue
        for op, value in condition.items():
            build = _OPERATORS.get(op)
            if build is None:
                raise QueryError(f"Unsupported where operator '{op}'")
            clauses.append(build(column, value))
    return clauses
