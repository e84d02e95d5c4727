r"""
storage-bench: benchmark harness for document and relational stores.

Runs an identical synthetic users/posts workload against MongoDB,
PostgreSQL and DuckDB: bulk insert, point/range/pattern queries,
relationship joins, aggregation, pagination, update and delete.

    from storage_bench import run_full_benchmark
    from storage_bench.adapters import PostgresAdapter

    adapter = PostgresAdapter()
    adapter.connect()
    result = run_full_benchmark(adapter, count=1000, posts_per_user=3)
    print(result.to_dict())
"""

from storage_bench.config import DEFAULT_WORKLOAD, WORKLOADS, get_workload
from storage_bench.errors import BackendOperationError, BenchmarkError, EmptyCollectionError, InputValidationError
from storage_bench.runner import BenchmarkRunner, compute_stats, run_full_benchmark, run_stress_benchmark
from storage_bench.types import (
    DurationStats,
    EntityKind,
    FullBenchmarkResult,
    MemorySnapshot,
    SectionMetrics,
    StressBenchmarkResult,
    WorkloadConfig,
)

__all__ = [
    "BackendOperationError",
    "BenchmarkError",
    "BenchmarkRunner",
    "DEFAULT_WORKLOAD",
    "DurationStats",
    "EmptyCollectionError",
    "EntityKind",
    "FullBenchmarkResult",
    "InputValidationError",
    "MemorySnapshot",
    "SectionMetrics",
    "StressBenchmarkResult",
    "WORKLOADS",
    "WorkloadConfig",
    "compute_stats",
    "get_workload",
    "run_full_benchmark",
    "run_stress_benchmark",
]

__version__ = "0.1.0"
