r"""
Core types for storage backend benchmarks.

    from storage_bench.types import EntityKind, FullBenchmarkResult

    result = runner.run_full(count=1000)
    print(result.to_dict()["totalTime"])
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

__all__ = [
    "EntityKind",
    "SectionMetrics",
    "DurationStats",
    "MemorySnapshot",
    "WorkloadConfig",
    "FullBenchmarkResult",
    "StressBenchmarkResult",
]


class EntityKind(StrEnum):
    """Entity collections managed by the benchmark."""

    USERS = "users"
    POSTS = "posts"


@dataclass(frozen=True, slots=True)
class SectionMetrics:
    """Measurements for one timed section of a pass.

    Attributes:
        time: Elapsed time in milliseconds.
        count: Number of records processed or returned.
        throughput: Records per second, None when not meaningful.
        memory_used: Heap delta in megabytes (insert section only).
        result: Scalar result payload (aggregation only).
    """

    time: float
    count: int | None = None
    throughput: int | None = None
    memory_used: float | None = None
    result: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.count is not None:
            data["count"] = self.count
        if self.result is not None:
            data["result"] = self.result
        data["time"] = self.time
        if self.throughput is not None:
            data["throughput"] = self.throughput
        if self.memory_used is not None:
            data["memoryUsed"] = self.memory_used
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SectionMetrics":
        return cls(
            time=data.get("time", 0.0),
            count=data.get("count"),
            throughput=data.get("throughput"),
            memory_used=data.get("memoryUsed"),
            result=data.get("result"),
        )


@dataclass(frozen=True, slots=True)
class DurationStats:
    """Summary of repeated duration samples, in milliseconds."""

    min: float
    max: float
    avg: float
    median: float

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max, "avg": self.avg, "median": self.median}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DurationStats":
        return cls(
            min=data.get("min", 0.0),
            max=data.get("max", 0.0),
            avg=data.get("avg", 0.0),
            median=data.get("median", 0.0),
        )


@dataclass(frozen=True, slots=True)
class MemorySnapshot:
    """Process memory snapshot in megabytes (2 decimal places)."""

    heap_used: float
    heap_total: float
    external: float

    def to_dict(self) -> dict[str, float]:
        return {"heapUsed": self.heap_used, "heapTotal": self.heap_total, "external": self.external}


@dataclass(frozen=True, slots=True)
class WorkloadConfig:
    """Workload preset for benchmark passes.

    Attributes:
        name: Preset name (small, medium, large).
        count: Users inserted by a full pass.
        posts_per_user: Posts generated per inserted user.
        iterations: Stress iterations.
        batch_size: Users inserted per stress iteration.
    """

    name: str
    count: int
    posts_per_user: int
    iterations: int = 10
    batch_size: int = 100


@dataclass(frozen=True, slots=True)
class FullBenchmarkResult:
    """Result of one full benchmark pass against a single backend.

    Attributes:
        database: Backend label (e.g. MongoDB, PostgreSQL).
        insert: User bulk insert, with memory delta.
        insert_related: Post generation and bulk insert.
        read: Full scan of users.
        queries: Query suite results in execution order.
        update: Bulk update of users younger than 25.
        delete: Bulk delete of users aged 65 and over.
        total_time: Sum of all section times except insert_related.
    """

    database: str
    insert: SectionMetrics
    insert_related: SectionMetrics
    read: SectionMetrics
    queries: dict[str, SectionMetrics]
    update: SectionMetrics
    delete: SectionMetrics
    total_time: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "insert": self.insert.to_dict(),
            "insertRelated": self.insert_related.to_dict(),
            "read": self.read.to_dict(),
            "queries": {name: metrics.to_dict() for name, metrics in self.queries.items()},
            "update": self.update.to_dict(),
            "delete": self.delete.to_dict(),
            "database": self.database,
            "totalTime": self.total_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FullBenchmarkResult":
        """Rebuild a result from its ``to_dict`` form (e.g. a saved report)."""
        return cls(
            database=data.get("database", ""),
            insert=SectionMetrics.from_dict(data.get("insert", {})),
            insert_related=SectionMetrics.from_dict(data.get("insertRelated", {})),
            read=SectionMetrics.from_dict(data.get("read", {})),
            queries={name: SectionMetrics.from_dict(m) for name, m in data.get("queries", {}).items()},
            update=SectionMetrics.from_dict(data.get("update", {})),
            delete=SectionMetrics.from_dict(data.get("delete", {})),
            total_time=data.get("totalTime", 0.0),
        )


@dataclass(frozen=True, slots=True)
class StressBenchmarkResult:
    """Result of a repeated insert/read stress pass."""

    database: str
    iterations: int
    batch_size: int
    insert_stats: DurationStats
    read_stats: DurationStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "database": self.database,
            "iterations": self.iterations,
            "batchSize": self.batch_size,
            "insertStats": self.insert_stats.to_dict(),
            "readStats": self.read_stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StressBenchmarkResult":
        return cls(
            database=data.get("database", ""),
            iterations=data.get("iterations", 0),
            batch_size=data.get("batchSize", 0),
            insert_stats=DurationStats.from_dict(data.get("insertStats", {})),
            read_stats=DurationStats.from_dict(data.get("readStats", {})),
        )
