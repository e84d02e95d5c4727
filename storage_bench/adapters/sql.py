r"""
Shared SQL implementation for relational adapters.

Builds parameterised SQL for the capability set once; concrete adapters
only supply the driver calls, the placeholder style and the DDL.

    from storage_bench.adapters.sql import compile_predicate

    clause, params = compile_predicate(Comparison("age", "gte", 30), columns=USERS.columns)
    # ("age >= ?", [30])
"""

from abc import abstractmethod
from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from storage_bench.adapters.base import BaseAdapter
from storage_bench.predicates import And, Between, Comparison, Or, Pattern, Predicate, Reducer
from storage_bench.types import EntityKind

__all__ = [
    "POSTS",
    "SQLAdapter",
    "TABLES",
    "TableSchema",
    "USERS",
    "compile_predicate",
    "escape_like",
]

LIKE_ESCAPE = "!"
_PARENT_PREFIX = "__parent_"

_SQL_OPS = {
    "eq": "=",
    "lt": "<",
    "lte": "<=",
    "gt": ">",
    "gte": ">=",
}


@dataclass(frozen=True, slots=True)
class TableSchema:
    """Table name and column list (primary key first)."""

    name: str
    columns: tuple[str, ...]

    @property
    def data_columns(self) -> tuple[str, ...]:
        """Columns supplied on insert (everything but the generated id)."""
        return self.columns[1:]


USERS = TableSchema("users", ("id", "name", "email", "age"))
POSTS = TableSchema("posts", ("id", "user_id", "title", "content", "created_at", "likes"))

TABLES: dict[EntityKind, TableSchema] = {
    EntityKind.USERS: USERS,
    EntityKind.POSTS: POSTS,
}


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so ``text`` matches literally."""
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return text


def _column(field: str, columns: Sequence[str]) -> str:
    if field not in columns:
        msg = f"Unknown column '{field}'. Valid columns: {', '.join(columns)}"
        raise ValueError(msg)
    return field


def compile_predicate(
    predicate: Predicate,
    *,
    columns: Sequence[str],
    placeholder: str = "?",
) -> tuple[str, list[Any]]:
    """Translate a predicate into a WHERE clause and its parameters.

    Args:
        predicate: Predicate tree to translate.
        columns: Valid column names; anything else raises ValueError.
        placeholder: Driver parameter marker ("?" for DuckDB, "%s" for psycopg).

    Returns:
        Tuple of (clause, params).
    """
    if isinstance(predicate, Comparison):
        col = _column(predicate.field, columns)
        return f"{col} {_SQL_OPS[predicate.op]} {placeholder}", [predicate.value]

    if isinstance(predicate, Between):
        col = _column(predicate.field, columns)
        return f"{col} BETWEEN {placeholder} AND {placeholder}", [predicate.lower, predicate.upper]

    if isinstance(predicate, Pattern):
        col = _column(predicate.field, columns)
        escaped = escape_like(predicate.text)
        value = f"%{escaped}" if predicate.mode == "endswith" else f"%{escaped}%"
        return f"{col} LIKE {placeholder} ESCAPE '{LIKE_ESCAPE}'", [value]

    if isinstance(predicate, And):
        joiner = " OR " if isinstance(predicate, Or) else " AND "
        parts: list[str] = []
        params: list[Any] = []
        for clause in predicate.clauses:
            sql, clause_params = compile_predicate(clause, columns=columns, placeholder=placeholder)
            parts.append(sql)
            params.extend(clause_params)
        return f"({joiner.join(parts)})", params

    msg = f"Unsupported predicate: {predicate!r}"
    raise TypeError(msg)


def _to_number(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


class SQLAdapter(BaseAdapter):
    """Base class for relational adapters.

    Subclasses implement ``_fetch``, ``_write`` and ``_schema_statements``
    and set ``placeholder`` to their driver's parameter marker.
    """

    placeholder: str = "?"

    @abstractmethod
    def _fetch(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Run a query and return rows as dicts."""
        ...

    @abstractmethod
    def _write(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a DML statement and return the affected row count."""
        ...

    @abstractmethod
    def _schema_statements(self) -> list[str]:
        """DDL statements creating tables and indexes if missing."""
        ...

    def _where(self, schema: TableSchema, predicate: Predicate | None) -> tuple[str, list[Any]]:
        if predicate is None:
            return "", []
        clause, params = compile_predicate(predicate, columns=schema.columns, placeholder=self.placeholder)
        return f" WHERE {clause}", params

    def _select(self, schema: TableSchema) -> str:
        return f"SELECT {', '.join(schema.columns)} FROM {schema.name}"

    def clear(self, kind: EntityKind) -> None:
        self._require_connection()
        self._write(f"DELETE FROM {TABLES[kind].name}")

    def bulk_insert(
        self,
        kind: EntityKind,
        records: Sequence[dict[str, Any]],
        *,
        batch_size: int = 1000,
    ) -> list[Any]:
        self._require_connection()
        schema = TABLES[kind]
        columns = schema.data_columns
        row_marker = "(" + ", ".join([self.placeholder] * len(columns)) + ")"

        ids: list[Any] = []
        for i in range(0, len(records), batch_size):
            batch = records[i : i + batch_size]
            params: list[Any] = []
            for record in batch:
                params.extend(record.get(col) for col in columns)

            sql = (
                f"INSERT INTO {schema.name} ({', '.join(columns)}) "
                f"VALUES {', '.join([row_marker] * len(batch))} RETURNING id"
            )
            ids.extend(row["id"] for row in self._fetch(sql, params))

        return ids

    def find_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        self._require_connection()
        return self._fetch(self._select(TABLES[kind]))

    def find(self, kind: EntityKind, predicate: Predicate) -> list[dict[str, Any]]:
        self._require_connection()
        schema = TABLES[kind]
        where, params = self._where(schema, predicate)
        return self._fetch(self._select(schema) + where, params)

    def find_sorted(
        self,
        kind: EntityKind,
        sort_keys: Sequence[str],
        *,
        limit: int,
    ) -> list[dict[str, Any]]:
        self._require_connection()
        schema = TABLES[kind]
        order = ", ".join(f"{_column(key, schema.columns)} ASC" for key in sort_keys)
        sql = f"{self._select(schema)} ORDER BY {order} LIMIT {self.placeholder}"
        return self._fetch(sql, [limit])

    def find_page(self, kind: EntityKind, *, offset: int, limit: int) -> list[dict[str, Any]]:
        self._require_connection()
        sql = f"{self._select(TABLES[kind])} LIMIT {self.placeholder} OFFSET {self.placeholder}"
        return self._fetch(sql, [limit, offset])

    def count(self, kind: EntityKind, predicate: Predicate | None = None) -> int:
        self._require_connection()
        schema = TABLES[kind]
        where, params = self._where(schema, predicate)
        rows = self._fetch(f"SELECT COUNT(*) AS n FROM {schema.name}{where}", params)
        return int(rows[0]["n"]) if rows else 0

    def aggregate(self, kind: EntityKind, reducers: Mapping[str, Reducer]) -> dict[str, Any]:
        self._require_connection()
        schema = TABLES[kind]

        select: list[str] = []
        for key, reducer in reducers.items():
            if not key.isidentifier():
                msg = f"Invalid aggregate alias '{key}'"
                raise ValueError(msg)
            if reducer.func == "count":
                expr = "COUNT(*)"
            else:
                expr = f"{reducer.func.upper()}({_column(reducer.field, schema.columns)})"  # type: ignore[arg-type]
            select.append(f'{expr} AS "{key}"')

        rows = self._fetch(f"SELECT {', '.join(select)} FROM {schema.name}")
        row = rows[0] if rows else {}
        result: dict[str, Any] = {}
        for key, reducer in reducers.items():
            value = _to_number(row.get(key))
            if reducer.func == "count":
                value = int(value or 0)
            result[key] = value
        return result

    def find_related(self, child_kind: EntityKind, foreign_key: str, parent_id: Any) -> list[dict[str, Any]]:
        self._require_connection()
        schema = TABLES[child_kind]
        col = _column(foreign_key, schema.columns)
        return self._fetch(f"{self._select(schema)} WHERE {col} = {self.placeholder}", [parent_id])

    def join_lookup(
        self,
        kind: EntityKind,
        predicate: Predicate,
        *,
        limit: int,
        related_kind: EntityKind,
        local_key: str,
        foreign_key: str,
        as_field: str,
    ) -> list[dict[str, Any]]:
        self._require_connection()
        schema = TABLES[kind]
        related = TABLES[related_kind]
        _column(local_key, schema.columns)
        fk = _column(foreign_key, related.columns)

        where, params = self._where(schema, predicate)
        rows = self._fetch(f"{self._select(schema)}{where} LIMIT {self.placeholder}", [*params, limit])
        keys = [row[local_key] for row in rows]

        grouped: dict[Any, list[dict[str, Any]]] = defaultdict(list)
        if keys:
            markers = ", ".join([self.placeholder] * len(keys))
            for child in self._fetch(f"{self._select(related)} WHERE {fk} IN ({markers})", keys):
                grouped[child[foreign_key]].append(child)

        for row in rows:
            row[as_field] = grouped.get(row[local_key], [])
        return rows

    def join_lookup_inverse(
        self,
        kind: EntityKind,
        predicate: Predicate,
        *,
        limit: int,
        related_kind: EntityKind,
        local_key: str,
        foreign_key: str,
        as_field: str,
    ) -> list[dict[str, Any]]:
        self._require_connection()
        schema = TABLES[kind]
        parent = TABLES[related_kind]
        lk = _column(local_key, schema.columns)
        fk = _column(foreign_key, parent.columns)

        where, params = self._where(schema, predicate)
        child_cols = ", ".join(f"c.{col}" for col in schema.columns)
        parent_cols = ", ".join(f'p.{col} AS "{_PARENT_PREFIX}{col}"' for col in parent.columns)
        sql = (
            f"SELECT {child_cols}, {parent_cols} "
            f"FROM ({self._select(schema)}{where} LIMIT {self.placeholder}) AS c "
            f"JOIN {parent.name} AS p ON c.{lk} = p.{fk}"
        )

        results: list[dict[str, Any]] = []
        for row in self._fetch(sql, [*params, limit]):
            child = {col: row[col] for col in schema.columns}
            child[as_field] = {col: row[f"{_PARENT_PREFIX}{col}"] for col in parent.columns}
            results.append(child)
        return results

    def bulk_update(self, kind: EntityKind, predicate: Predicate, values: Mapping[str, Any]) -> int:
        self._require_connection()
        schema = TABLES[kind]
        assignments = ", ".join(f"{_column(col, schema.data_columns)} = {self.placeholder}" for col in values)
        where, params = self._where(schema, predicate)
        return self._write(f"UPDATE {schema.name} SET {assignments}{where}", [*values.values(), *params])

    def bulk_delete(self, kind: EntityKind, predicate: Predicate) -> int:
        self._require_connection()
        schema = TABLES[kind]
        where, params = self._where(schema, predicate)
        return self._write(f"DELETE FROM {schema.name}{where}", params)
