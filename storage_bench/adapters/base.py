r"""
Base adapter implementation with common functionality.

Provides default implementations and helper methods
that can be shared across storage adapters.

    from storage_bench.adapters.base import BaseAdapter

    class MyAdapter(BaseAdapter):
        def connect(self, *, uri: str | None = None, **kwargs) -> None:
            ...
"""

import random
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from storage_bench.errors import BackendOperationError, EmptyCollectionError
from storage_bench.predicates import And, Between, Comparison, ComparisonOp, Or, Pattern, PatternMode, Predicate, Reducer
from storage_bench.types import EntityKind, MemorySnapshot
from storage_bench.utils.memory import measure_memory

__all__ = ["BaseAdapter", "AdapterRegistry"]


class AdapterRegistry:
    """Registry for storage adapters."""

    _adapters: dict[str, type["BaseAdapter"]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register an adapter class."""

        def decorator(adapter_cls: type["BaseAdapter"]) -> type["BaseAdapter"]:
            cls._adapters[name] = adapter_cls
            return adapter_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type["BaseAdapter"] | None:
        """Get adapter class by name."""
        return cls._adapters.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered adapter names."""
        return list(cls._adapters.keys())

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> "BaseAdapter":
        """Create adapter instance by name."""
        adapter_cls = cls.get(name)
        if adapter_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown adapter '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return adapter_cls(**kwargs)


class BaseAdapter(ABC):
    """Base class for storage adapters.

    Subclasses translate the abstract capability set into native
    operations. Convenience finders, random row selection and memory
    measurement are implemented here in terms of the abstract methods.
    """

    _connected: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend label."""
        ...

    @property
    def version(self) -> str:
        """Backend version string."""
        return "unknown"

    @property
    def connected(self) -> bool:
        """Whether adapter is currently connected."""
        return self._connected

    @abstractmethod
    def connect(self, *, uri: str | None = None, **kwargs: Any) -> None:
        """Establish connection to the backend."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the backend."""
        ...

    def _require_connection(self) -> None:
        if not self._connected:
            msg = f"{self.name} adapter is not connected"
            raise BackendOperationError(msg)

    @abstractmethod
    def clear(self, kind: EntityKind) -> None:
        """Remove every record of a kind. Idempotent."""
        ...

    @abstractmethod
    def bulk_insert(
        self,
        kind: EntityKind,
        records: Sequence[dict[str, Any]],
        *,
        batch_size: int = 1000,
    ) -> list[Any]:
        """Insert records and return backend-assigned ids in input order."""
        ...

    @abstractmethod
    def find_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        """Return every record of a kind."""
        ...

    @abstractmethod
    def find(self, kind: EntityKind, predicate: Predicate) -> list[dict[str, Any]]:
        """Return records matching a predicate."""
        ...

    def find_by_range(self, kind: EntityKind, field: str, op: ComparisonOp, bound: Any) -> list[dict[str, Any]]:
        """Single-bound numeric filter, e.g. ``find_by_range(USERS, "age", "gte", 30)``."""
        return self.find(kind, Comparison(field, op, bound))

    def find_between(self, kind: EntityKind, field: str, lower: Any, upper: Any) -> list[dict[str, Any]]:
        """Inclusive two-bound numeric filter."""
        return self.find(kind, Between(field, lower, upper))

    def find_by_pattern(
        self,
        kind: EntityKind,
        field: str,
        text: str,
        *,
        mode: PatternMode = "endswith",
    ) -> list[dict[str, Any]]:
        """Literal suffix or substring match on a string field."""
        return self.find(kind, Pattern(field, text, mode))

    def find_compound(self, kind: EntityKind, *predicates: Predicate, any_of: bool = False) -> list[dict[str, Any]]:
        """Combine predicates with AND (default) or OR."""
        combined = Or(*predicates) if any_of else And(*predicates)
        return self.find(kind, combined)

    @abstractmethod
    def find_sorted(
        self,
        kind: EntityKind,
        sort_keys: Sequence[str],
        *,
        limit: int,
    ) -> list[dict[str, Any]]:
        """Return records sorted ascending by the given keys, capped at limit."""
        ...

    @abstractmethod
    def find_page(self, kind: EntityKind, *, offset: int, limit: int) -> list[dict[str, Any]]:
        """Return one offset-based page of records."""
        ...

    @abstractmethod
    def count(self, kind: EntityKind, predicate: Predicate | None = None) -> int:
        """Count records without materializing them."""
        ...

    @abstractmethod
    def aggregate(self, kind: EntityKind, reducers: Mapping[str, Reducer]) -> dict[str, Any]:
        """Compute reducers across all records, returning one summary row.

        Keys of the returned row are the keys of ``reducers``. On an empty
        collection numeric reducers are None and ``count`` reducers are 0.
        """
        ...

    @abstractmethod
    def find_related(self, child_kind: EntityKind, foreign_key: str, parent_id: Any) -> list[dict[str, Any]]:
        """Return child records whose foreign key equals parent_id."""
        ...

    @abstractmethod
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
        """Filter and limit ``kind`` rows, then attach related rows as a list.

        Each returned row carries ``as_field``: every ``related_kind`` row
        whose ``foreign_key`` equals the row's ``local_key`` (possibly empty).
        """
        ...

    @abstractmethod
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
        """Filter and limit ``kind`` rows, then attach their single parent row.

        ``local_key`` is the reference on ``kind`` rows and ``foreign_key``
        the key on ``related_kind`` rows. Inner join semantics: rows whose
        parent cannot be found are dropped.
        """
        ...

    @abstractmethod
    def bulk_update(self, kind: EntityKind, predicate: Predicate, values: Mapping[str, Any]) -> int:
        """Set fields on all matching records, returning the number matched."""
        ...

    @abstractmethod
    def bulk_delete(self, kind: EntityKind, predicate: Predicate) -> int:
        """Delete all matching records, returning the number removed."""
        ...

    def random_id(self, kind: EntityKind) -> Any:
        """Return the id of a uniformly chosen existing record.

        Default implementation counts the collection and fetches a
        single-row page at a random offset.

        Raises:
            EmptyCollectionError: If the collection has no records.
        """
        total = self.count(kind)
        if total == 0:
            raise EmptyCollectionError(kind)

        rows = self.find_page(kind, offset=random.randrange(total), limit=1)
        if not rows:
            raise EmptyCollectionError(kind)
        return rows[0]["id"]

    def measure_memory(self) -> MemorySnapshot:
        """Snapshot memory usage of the benchmark process.

        Override to report backend-side memory where it can be observed.
        """
        return measure_memory()

    def __enter__(self) -> "BaseAdapter":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - disconnect."""
        if self._connected:
            self.disconnect()

    def __repr__(self) -> str:
        status = "connected" if self._connected else "disconnected"
        return f"{self.__class__.__name__}({self.name}, {status})"
