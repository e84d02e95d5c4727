r"""
Base query implementation for the benchmark suite.

A suite query has an untimed ``prepare`` step and a timed ``execute``
step, mirroring the setup/run split of a benchmark iteration.

    from storage_bench.queries.base import BaseQuery, QueryRegistry

    @QueryRegistry.register("myQuery")
    class MyQuery(BaseQuery):
        ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from storage_bench.protocols import StorageAdapter

__all__ = ["BaseQuery", "QueryOutcome", "QueryRegistry"]


@dataclass(frozen=True, slots=True)
class QueryOutcome:
    """What a query produced: a row count, or a scalar result row."""

    count: int | None = None
    result: dict[str, Any] | None = None


class QueryRegistry:
    """Registry for suite queries."""

    _queries: dict[str, type[BaseQuery]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a query class under its result key."""

        def decorator(query_cls: type[BaseQuery]) -> type[BaseQuery]:
            query_cls.query_name = name
            cls._queries[name] = query_cls
            return query_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BaseQuery] | None:
        """Get query class by name."""
        return cls._queries.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered query names."""
        return list(cls._queries.keys())

    @classmethod
    def create(cls, name: str) -> BaseQuery:
        """Create query instance by name."""
        query_cls = cls.get(name)
        if query_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown query '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return query_cls()


class BaseQuery(ABC):
    """Base class for suite queries."""

    query_name: str = ""
    # Single-row results have no meaningful per-item rate
    reports_throughput: bool = True

    @property
    def name(self) -> str:
        """Query name used as the result key."""
        return self.query_name or type(self).__name__

    @property
    def description(self) -> str:
        """Human-readable description."""
        return self.__class__.__doc__ or self.name

    def prepare(self, adapter: StorageAdapter) -> None:
        """Untimed preparation before ``execute``."""
        pass

    @abstractmethod
    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        """Run the query; only this call is timed."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"
