r"""
Tests for storage_bench.runner.stats and timing.
"""

import pytest

from storage_bench.runner import Timer, measure_time
from storage_bench.runner.stats import compute_stats, round_half_up, throughput
from storage_bench.runner.timing import TimerResult, to_ms


class TestComputeStats:
    def test_single_sample(self):
        stats = compute_stats([5.0])
        assert stats.min == stats.max == stats.avg == stats.median == 5.0

    def test_median_takes_index_n_over_2(self):
        stats = compute_stats([40.0, 10.0, 30.0, 20.0])
        assert stats.min == 10.0
        assert stats.max == 40.0
        assert stats.avg == 25.0
        assert stats.median == 30.0

    def test_odd_count(self):
        assert compute_stats([3.0, 1.0, 2.0]).median == 2.0

    def test_avg_rounded_to_two_places(self):
        assert compute_stats([1.0, 2.0, 2.0]).avg == 1.67

    def test_input_not_mutated(self):
        samples = [3.0, 1.0, 2.0]
        compute_stats(samples)
        assert samples == [3.0, 1.0, 2.0]

    def test_empty(self):
        with pytest.raises(ValueError):
            compute_stats([])


class TestThroughput:
    def test_records_per_second(self):
        assert throughput(1000, 500.0) == 2000

    def test_rounds_half_up(self):
        assert throughput(5, 2000.0) == 3

    def test_zero_time(self):
        assert throughput(100, 0.0) is None

    def test_zero_count(self):
        assert throughput(0, 10.0) == 0


class TestRoundHalfUp:
    def test_integer(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2

    def test_decimals(self):
        assert round_half_up(2.125, 2) == 2.13

    def test_binary_float_input(self):
        # 1.005 is stored just below 1.005, so it rounds down
        assert round_half_up(1.005, 2) == 1.0


class TestTimer:
    def test_timer_context_manager(self):
        with Timer() as t:
            sum(range(1000))

        assert t.elapsed_ns > 0
        assert t.elapsed_ms >= 0

    def test_elapsed_ms_rounded(self):
        assert to_ms(1_234_567) == 1.235


class TestMeasureTime:
    def test_measure_time_returns_result(self):
        def add(a, b):
            return a + b

        result = measure_time(add, 1, 2)

        assert isinstance(result, TimerResult)
        assert result.result == 3
        assert result.elapsed_ns > 0

    def test_measure_time_with_kwargs(self):
        def greet(name, greeting="Hello"):
            return f"{greeting}, {name}!"

        result = measure_time(greet, "World", greeting="Hi")

        assert result.result == "Hi, World!"

    def test_exceptions_propagate(self):
        def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            measure_time(boom)

    def test_timer_result_conversions(self):
        result = TimerResult(elapsed_ns=1_000_000_000)
        assert result.elapsed_ms == 1000.0
        assert result.elapsed_seconds == 1.0
