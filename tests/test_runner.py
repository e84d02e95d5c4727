r"""
Tests for storage_bench.runner harness, end to end on DuckDB.
"""

import pytest

from storage_bench.datasets import SyntheticDataGenerator
from storage_bench.errors import BackendOperationError, EmptyCollectionError
from storage_bench.predicates import Comparison
from storage_bench.queries import SUITE_ORDER, QueryRegistry
from storage_bench.runner import BenchmarkRunner, run_full_benchmark, run_stress_benchmark
from storage_bench.types import EntityKind, FullBenchmarkResult, StressBenchmarkResult

USERS = EntityKind.USERS
POSTS = EntityKind.POSTS


class FixedAgeGenerator(SyntheticDataGenerator):
    """Generator cycling through known ages so update/delete counts are exact."""

    AGES = (18, 24, 25, 40, 64, 65, 70)

    def generate_users(self, count):
        users = super().generate_users(count)
        for i, user in enumerate(users):
            user["age"] = self.AGES[i % len(self.AGES)]
        return users


class YoungGenerator(SyntheticDataGenerator):
    """Generator whose users are all below the update threshold."""

    def generate_users(self, count):
        users = super().generate_users(count)
        for user in users:
            user["age"] = 20
        return users


class TestRunFull:
    @pytest.fixture
    def result(self, duckdb_adapter) -> FullBenchmarkResult:
        runner = BenchmarkRunner(duckdb_adapter, generator=FixedAgeGenerator(seed=1))
        return runner.run_full(count=50, posts_per_user=2)

    def test_database_label(self, result):
        assert result.database == "DuckDB"

    def test_insert_sections(self, result):
        assert result.insert.count == 50
        assert result.insert.memory_used is not None
        assert result.insert_related.count == 100
        assert result.insert_related.memory_used is None

    def test_read(self, result):
        assert result.read.count == 50
        assert result.read.time >= 0

    def test_queries_in_order(self, result):
        assert list(result.queries) == list(SUITE_ORDER)

    def test_query_shapes(self, result):
        aggregation = result.queries["aggregation"].to_dict()
        assert set(aggregation) == {"result", "time"}
        assert aggregation["result"]["totalUsers"] == 50

        count = result.queries["count"].to_dict()
        assert set(count) == {"count", "time"}

        assert result.queries["userPosts"].count == 2
        assert result.queries["sortQuery"].count == 50
        assert result.queries["pagination"].count == 0

    def test_total_time_excludes_insert_related(self, result):
        expected = (
            result.insert.time
            + result.read.time
            + sum(m.time for m in result.queries.values())
            + result.update.time
            + result.delete.time
        )
        assert result.total_time == pytest.approx(expected, abs=1e-3)

    def test_update_and_delete_applied(self, result, duckdb_adapter):
        assert duckdb_adapter.count(USERS, Comparison("age", "lt", 25)) == 0
        assert duckdb_adapter.count(USERS, Comparison("age", "gte", 65)) == 0
        # 50 users cycling 7 ages: 65 and 70 appear 7 times each
        assert duckdb_adapter.count(USERS) == 36

    def test_update_and_delete_report_time_only(self, result):
        assert result.update.to_dict() == {"time": result.update.time}
        assert result.delete.to_dict() == {"time": result.delete.time}

    def test_clears_previous_pass(self, duckdb_adapter):
        runner = BenchmarkRunner(duckdb_adapter)
        runner.run_full(count=10, posts_per_user=1)
        result = runner.run_full(count=10, posts_per_user=1)

        assert result.read.count == 10
        assert duckdb_adapter.count(POSTS) == 10


class TestRunFullYoungUsers:
    def test_update_raises_ages_without_removing_rows(self, duckdb_adapter):
        runner = BenchmarkRunner(duckdb_adapter, generator=YoungGenerator(seed=5))
        result = runner.run_full(count=12, posts_per_user=1)

        assert result.queries["count"].count == 0
        users = duckdb_adapter.find_all(USERS)
        assert len(users) == 12
        assert {user["age"] for user in users} == {25}


class TestRunFullInputs:
    def test_lenient_strings(self, duckdb_adapter):
        result = BenchmarkRunner(duckdb_adapter).run_full("12abc", "1")

        assert result.insert.count == 12
        assert result.insert_related.count == 12

    def test_zero_posts(self, duckdb_adapter):
        result = BenchmarkRunner(duckdb_adapter).run_full(count=5, posts_per_user=0)

        assert result.insert_related.count == 0
        assert result.queries["userPosts"].count == 0
        assert result.queries["popularPosts"].count == 0

    def test_zero_count_fails_at_user_posts(self, duckdb_adapter):
        with pytest.raises(EmptyCollectionError):
            BenchmarkRunner(duckdb_adapter).run_full(count=0)

    def test_errors_propagate(self, duckdb_adapter):
        duckdb_adapter.disconnect()
        with pytest.raises(BackendOperationError):
            BenchmarkRunner(duckdb_adapter).run_full(count=5)


class TestProgress:
    def test_callback_sections(self, duckdb_adapter):
        events = []
        runner = BenchmarkRunner(duckdb_adapter)
        runner.set_progress_callback(lambda db, section, status: events.append((db, section, status)))
        runner.run_full(count=5, posts_per_user=1)

        done = [section for _, section, status in events if status == "done"]
        assert done == ["insert", "insertRelated", "read", *SUITE_ORDER, "update", "delete"]
        assert all(db == "DuckDB" for db, _, _ in events)


class TestCustomSuite:
    def test_subset(self, duckdb_adapter):
        queries = [QueryRegistry.create("count"), QueryRegistry.create("aggregation")]
        result = BenchmarkRunner(duckdb_adapter, queries=queries).run_full(count=5, posts_per_user=1)

        assert list(result.queries) == ["count", "aggregation"]


class TestRunStress:
    def test_stats(self, duckdb_adapter):
        result = BenchmarkRunner(duckdb_adapter).run_stress(iterations=5, batch_size=20)

        assert isinstance(result, StressBenchmarkResult)
        assert result.iterations == 5
        assert result.batch_size == 20
        for stats in (result.insert_stats, result.read_stats):
            assert 0 <= stats.min <= stats.median <= stats.max
            assert stats.avg >= 0

    def test_one_sample_per_iteration(self, duckdb_adapter):
        events = []
        runner = BenchmarkRunner(duckdb_adapter)
        runner.set_progress_callback(lambda db, section, status: events.append((section, status)))
        result = runner.run_stress(iterations=5, batch_size=10)

        inserts = [s for s, status in events if status == "done" and s.endswith(".insert")]
        reads = [s for s, status in events if status == "done" and s.endswith(".read")]
        assert inserts == [f"stress[{i}].insert" for i in range(5)]
        assert len(reads) == 5
        for stats in (result.insert_stats, result.read_stats):
            # avg is rounded to 2 dp, extrema are not
            assert stats.min - 0.005 <= stats.avg <= stats.max + 0.005

    def test_last_batch_remains(self, duckdb_adapter):
        BenchmarkRunner(duckdb_adapter).run_stress(iterations=3, batch_size=7)
        assert duckdb_adapter.count(USERS) == 7

    def test_invalid_iterations_default(self, duckdb_adapter):
        result = BenchmarkRunner(duckdb_adapter).run_stress(iterations="0", batch_size="4")

        assert result.iterations == 10
        assert result.batch_size == 4


class TestModuleHelpers:
    def test_run_full_benchmark(self, duckdb_adapter):
        result = run_full_benchmark(duckdb_adapter, count=5, posts_per_user=1)
        assert result.insert.count == 5

    def test_run_stress_benchmark(self, duckdb_adapter):
        result = run_stress_benchmark(duckdb_adapter, iterations=2, batch_size=3)
        assert result.iterations == 2
