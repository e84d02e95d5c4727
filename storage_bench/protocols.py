r"""
Protocol definitions for storage adapters and suite queries.

All adapters must implement the StorageAdapter protocol.
All suite queries must implement the SuiteQuery protocol.

    from storage_bench.protocols import StorageAdapter

    def run(adapter: StorageAdapter) -> None:
        ...
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from storage_bench.predicates import Predicate, Reducer
from storage_bench.types import EntityKind, MemorySnapshot

__all__ = [
    "StorageAdapter",
    "SuiteQuery",
]


@runtime_checkable
class StorageAdapter(Protocol):
    """Protocol for storage backend adapters.

    Each backend (MongoDB, PostgreSQL, DuckDB) implements this capability
    set so the runner and query suite never touch native query syntax.
    """

    @property
    def name(self) -> str:
        """Human-readable backend label."""
        ...

    @property
    def version(self) -> str:
        """Backend version string."""
        ...

    @property
    def connected(self) -> bool:
        """Whether adapter is currently connected."""
        ...

    def connect(self, *, uri: str | None = None, **kwargs: Any) -> None:
        """Establish connection to the backend."""
        ...

    def disconnect(self) -> None:
        """Close connection to the backend."""
        ...

    def clear(self, kind: EntityKind) -> None:
        """Remove every record of a kind."""
        ...

    def bulk_insert(
        self,
        kind: EntityKind,
        records: Sequence[dict[str, Any]],
        *,
        batch_size: int = 1000,
    ) -> list[Any]:
        """Insert records and return backend-assigned ids in input order."""
        ...

    def find_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        """Return every record of a kind."""
        ...

    def find(self, kind: EntityKind, predicate: Predicate) -> list[dict[str, Any]]:
        """Return records matching a predicate."""
        ...

    def find_sorted(
        self,
        kind: EntityKind,
        sort_keys: Sequence[str],
        *,
        limit: int,
    ) -> list[dict[str, Any]]:
        """Return records sorted ascending by the given keys, capped at limit."""
        ...

    def find_page(self, kind: EntityKind, *, offset: int, limit: int) -> list[dict[str, Any]]:
        """Return one offset-based page of records."""
        ...

    def count(self, kind: EntityKind, predicate: Predicate | None = None) -> int:
        """Count records, optionally filtered."""
        ...

    def aggregate(self, kind: EntityKind, reducers: Mapping[str, Reducer]) -> dict[str, Any]:
        """Compute reducers across all records, returning one summary row."""
        ...

    def find_related(self, child_kind: EntityKind, foreign_key: str, parent_id: Any) -> list[dict[str, Any]]:
        """Return child records whose foreign key equals parent_id."""
        ...

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
        """Filtered, limited rows each augmented with their related rows (list)."""
        ...

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
        """Filtered, limited rows each augmented with exactly one parent row."""
        ...

    def bulk_update(self, kind: EntityKind, predicate: Predicate, values: Mapping[str, Any]) -> int:
        """Set fields on all matching records, returning the number matched."""
        ...

    def bulk_delete(self, kind: EntityKind, predicate: Predicate) -> int:
        """Delete all matching records, returning the number removed."""
        ...

    def random_id(self, kind: EntityKind) -> Any:
        """Return the id of a uniformly chosen existing record."""
        ...

    def measure_memory(self) -> MemorySnapshot:
        """Snapshot memory usage for before/after deltas."""
        ...


@runtime_checkable
class SuiteQuery(Protocol):
    """Protocol for query suite entries."""

    @property
    def name(self) -> str:
        """Query name used as the result key."""
        ...

    def prepare(self, adapter: StorageAdapter) -> None:
        """Untimed preparation (e.g. picking a random parent row)."""
        ...

    def execute(self, adapter: StorageAdapter) -> Any:
        """Timed execution returning a QueryOutcome."""
        ...
