r"""
Benchmark runner driving the workload against one storage adapter.

A full pass runs, strictly in order: clear, insert users, insert posts,
read users, the query suite, update, delete. A stress pass repeats
clear/insert/read and reports distributional statistics.

    from storage_bench.adapters import DuckDBAdapter
    from storage_bench.runner import BenchmarkRunner

    with DuckDBAdapter() as adapter:
        adapter.connect()
        result = BenchmarkRunner(adapter).run_full(count=500)
"""

from collections.abc import Callable, Sequence
from typing import Any

from storage_bench.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_COUNT,
    DEFAULT_ITERATIONS,
    DEFAULT_POSTS_PER_USER,
    coerce_int,
)
from storage_bench.datasets import SyntheticDataGenerator
from storage_bench.predicates import Comparison
from storage_bench.protocols import StorageAdapter
from storage_bench.queries import BaseQuery, QueryOutcome, default_suite
from storage_bench.runner.stats import compute_stats, throughput
from storage_bench.runner.timing import TimerResult, measure_time, to_ms
from storage_bench.types import EntityKind, FullBenchmarkResult, SectionMetrics, StressBenchmarkResult

__all__ = [
    "BenchmarkRunner",
    "ProgressCallback",
    "run_full_benchmark",
    "run_stress_benchmark",
]

ProgressCallback = Callable[[str, str, str], None]

UPDATE_BELOW_AGE = 25
DELETE_FROM_AGE = 65


class BenchmarkRunner:
    """Runs full and stress benchmark passes against a single adapter.

    The runner holds no state between passes. Adapter errors propagate
    immediately and abort the pass; no partial result is returned.
    """

    def __init__(
        self,
        adapter: StorageAdapter,
        *,
        generator: SyntheticDataGenerator | None = None,
        queries: Sequence[BaseQuery] | None = None,
        insert_batch_size: int = 1000,
    ) -> None:
        """Initialize runner.

        Args:
            adapter: Connected storage adapter.
            generator: Data generator (a fresh unseeded one by default).
            queries: Query suite override (the standard suite by default).
            insert_batch_size: Records per native bulk insert call.
        """
        self._adapter = adapter
        self._generator = generator or SyntheticDataGenerator()
        self._queries = queries
        self._insert_batch_size = insert_batch_size
        self._progress_callback: ProgressCallback | None = None

    @property
    def adapter(self) -> StorageAdapter:
        return self._adapter

    def set_progress_callback(self, callback: ProgressCallback) -> None:
        """Set callback for progress updates: (database, section, status)."""
        self._progress_callback = callback

    def _notify(self, section: str, status: str) -> None:
        if self._progress_callback:
            self._progress_callback(self._adapter.name, section, status)

    def _timed(self, section: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> TimerResult:
        self._notify(section, "running")
        timed = measure_time(func, *args, **kwargs)
        self._notify(section, "done")
        return timed

    def run_full(self, count: Any = None, posts_per_user: Any = None) -> FullBenchmarkResult:
        """Run one full benchmark pass.

        Args:
            count: Users to insert (default 1000; invalid values fall back).
            posts_per_user: Posts per user (default 3; invalid values fall back).

        Returns:
            FullBenchmarkResult for this pass.

        Raises:
            EmptyCollectionError: If ``count`` is 0 (userPosts needs a user).
        """
        count = coerce_int(count, default=DEFAULT_COUNT)
        posts_per_user = coerce_int(posts_per_user, default=DEFAULT_POSTS_PER_USER)
        adapter = self._adapter

        adapter.clear(EntityKind.POSTS)
        adapter.clear(EntityKind.USERS)

        # Insert users
        users = self._generator.generate_users(count)
        memory_before = adapter.measure_memory()
        timed = self._timed(
            "insert", adapter.bulk_insert, EntityKind.USERS, users, batch_size=self._insert_batch_size
        )
        memory_after = adapter.measure_memory()
        user_ids: list[Any] = timed.result
        insert = SectionMetrics(
            time=timed.elapsed_ms,
            count=count,
            throughput=throughput(count, timed.elapsed_ms),
            memory_used=round(memory_after.heap_used - memory_before.heap_used, 2),
        )

        # Insert related posts; generation is part of the timed section
        timed = self._timed("insertRelated", self._insert_posts, user_ids, posts_per_user)
        posts_inserted: int = timed.result
        insert_related = SectionMetrics(
            time=timed.elapsed_ms,
            count=posts_inserted,
            throughput=throughput(posts_inserted, timed.elapsed_ms),
        )

        # Read
        timed = self._timed("read", adapter.find_all, EntityKind.USERS)
        read_count = len(timed.result)
        read = SectionMetrics(
            time=timed.elapsed_ms,
            count=read_count,
            throughput=throughput(read_count, timed.elapsed_ms),
        )

        queries = self._run_queries()

        # Update and delete
        timed = self._timed(
            "update",
            adapter.bulk_update,
            EntityKind.USERS,
            Comparison("age", "lt", UPDATE_BELOW_AGE),
            {"age": UPDATE_BELOW_AGE},
        )
        update = SectionMetrics(time=timed.elapsed_ms)

        timed = self._timed("delete", adapter.bulk_delete, EntityKind.USERS, Comparison("age", "gte", DELETE_FROM_AGE))
        delete = SectionMetrics(time=timed.elapsed_ms)

        # insertRelated is not part of the total
        total_time = (
            insert.time
            + read.time
            + sum(metrics.time for metrics in queries.values())
            + update.time
            + delete.time
        )

        return FullBenchmarkResult(
            database=adapter.name,
            insert=insert,
            insert_related=insert_related,
            read=read,
            queries=queries,
            update=update,
            delete=delete,
            total_time=round(total_time, 3),
        )

    def _insert_posts(self, user_ids: Sequence[Any], posts_per_user: int) -> int:
        posts: list[dict[str, Any]] = []
        for user_id in user_ids:
            posts.extend(self._generator.generate_posts_for_user(user_id, posts_per_user))
        self._adapter.bulk_insert(EntityKind.POSTS, posts, batch_size=self._insert_batch_size)
        return len(posts)

    def _run_queries(self) -> dict[str, SectionMetrics]:
        suite = self._queries if self._queries is not None else default_suite()
        results: dict[str, SectionMetrics] = {}

        for query in suite:
            query.prepare(self._adapter)
            timed = self._timed(query.name, query.execute, self._adapter)
            results[query.name] = _query_metrics(query, timed.result, timed.elapsed_ms)

        return results

    def run_stress(self, iterations: Any = None, batch_size: Any = None) -> StressBenchmarkResult:
        """Repeat clear/insert/read and summarize the durations.

        Args:
            iterations: Number of cycles (default 10, at least 1).
            batch_size: Users inserted per cycle (default 100).

        Returns:
            StressBenchmarkResult with insert and read statistics.
        """
        iterations = coerce_int(iterations, default=DEFAULT_ITERATIONS, minimum=1)
        batch_size = coerce_int(batch_size, default=DEFAULT_BATCH_SIZE)
        adapter = self._adapter

        insert_times: list[float] = []
        read_times: list[float] = []

        for i in range(iterations):
            adapter.clear(EntityKind.USERS)
            users = self._generator.generate_users(batch_size)

            timed = self._timed(
                f"stress[{i}].insert",
                adapter.bulk_insert,
                EntityKind.USERS,
                users,
                batch_size=self._insert_batch_size,
            )
            insert_times.append(to_ms(timed.elapsed_ns))

            timed = self._timed(f"stress[{i}].read", adapter.find_all, EntityKind.USERS)
            read_times.append(to_ms(timed.elapsed_ns))

        return StressBenchmarkResult(
            database=adapter.name,
            iterations=iterations,
            batch_size=batch_size,
            insert_stats=compute_stats(insert_times),
            read_stats=compute_stats(read_times),
        )


def _query_metrics(query: BaseQuery, outcome: QueryOutcome, time_ms: float) -> SectionMetrics:
    if outcome.result is not None:
        return SectionMetrics(time=time_ms, result=outcome.result)
    if not query.reports_throughput:
        return SectionMetrics(time=time_ms, count=outcome.count)
    count = outcome.count or 0
    return SectionMetrics(time=time_ms, count=count, throughput=throughput(count, time_ms))


def run_full_benchmark(
    adapter: StorageAdapter,
    count: Any = DEFAULT_COUNT,
    posts_per_user: Any = DEFAULT_POSTS_PER_USER,
    **kwargs: Any,
) -> FullBenchmarkResult:
    """Run a full pass with a one-off runner."""
    return BenchmarkRunner(adapter, **kwargs).run_full(count, posts_per_user)


def run_stress_benchmark(
    adapter: StorageAdapter,
    iterations: Any = DEFAULT_ITERATIONS,
    batch_size: Any = DEFAULT_BATCH_SIZE,
    **kwargs: Any,
) -> StressBenchmarkResult:
    """Run a stress pass with a one-off runner."""
    return BenchmarkRunner(adapter, **kwargs).run_stress(iterations, batch_size)
