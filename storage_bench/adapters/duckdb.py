r"""
DuckDB embedded relational adapter.

Runs the relational workload in-process, without a server. Useful for
local comparisons and as the reference backend in tests.

Requires: pip install duckdb

Environment variables:
    STORAGE_BENCH_DUCKDB_PATH: Database path (default: :memory:)

    from storage_bench.adapters.duckdb import DuckDBAdapter

    adapter = DuckDBAdapter()
    adapter.connect()  # In-memory by default
"""

from collections.abc import Sequence
from typing import Any

from storage_bench.adapters.base import AdapterRegistry
from storage_bench.adapters.sql import SQLAdapter
from storage_bench.config import get_env

__all__ = ["DuckDBAdapter"]


@AdapterRegistry.register("duckdb")
class DuckDBAdapter(SQLAdapter):
    """DuckDB embedded database adapter."""

    placeholder = "?"

    def __init__(self) -> None:
        self._conn: Any = None
        self._connected = False

    @property
    def name(self) -> str:
        return "DuckDB"

    @property
    def version(self) -> str:
        try:
            import duckdb

            return duckdb.__version__
        except ImportError:
            return "unknown"

    def connect(self, *, uri: str | None = None, **kwargs: Any) -> None:
        try:
            import duckdb
        except ImportError as e:
            msg = "duckdb package not installed. Install with: pip install duckdb"
            raise ImportError(msg) from e

        path = uri or kwargs.get("path") or get_env("DUCKDB_PATH", default=":memory:")

        self._conn = duckdb.connect(path)
        self._connected = True
        for statement in self._schema_statements():
            self._conn.execute(statement)

    def _schema_statements(self) -> list[str]:
        # DuckDB does not support ON DELETE actions, so posts.user_id is unconstrained
        return [
            "CREATE SEQUENCE IF NOT EXISTS users_id_seq START 1",
            "CREATE SEQUENCE IF NOT EXISTS posts_id_seq START 1",
            """
            CREATE TABLE IF NOT EXISTS users (
                id BIGINT PRIMARY KEY DEFAULT nextval('users_id_seq'),
                name VARCHAR,
                email VARCHAR,
                age INTEGER
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS posts (
                id BIGINT PRIMARY KEY DEFAULT nextval('posts_id_seq'),
                user_id BIGINT,
                title VARCHAR,
                content VARCHAR,
                created_at TIMESTAMP,
                likes INTEGER
            )
            """,
            "CREATE INDEX IF NOT EXISTS idx_posts_user_id ON posts(user_id)",
        ]

    def disconnect(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None
        self._connected = False

    def _fetch(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        result = self._conn.execute(sql, list(params))
        columns = [desc[0] for desc in result.description] if result.description else []
        rows = result.fetchall()
        return [dict(zip(columns, row, strict=False)) for row in rows]

    def _write(self, sql: str, params: Sequence[Any] = ()) -> int:
        result = self._conn.execute(sql, list(params))
        # DML statements yield a single row holding the affected count
        row = result.fetchone() if result.description else None
        return int(row[0]) if row else 0
