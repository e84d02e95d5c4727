r"""
Benchmark runner, timing and statistics.

Drives full and stress passes against a storage adapter and reduces
the measured durations.

    from storage_bench.runner import BenchmarkRunner

    runner = BenchmarkRunner(adapter)
    result = runner.run_full(count=1000, posts_per_user=3)
"""

from storage_bench.runner.harness import (
    BenchmarkRunner,
    ProgressCallback,
    run_full_benchmark,
    run_stress_benchmark,
)
from storage_bench.runner.stats import compute_stats, round_half_up, throughput
from storage_bench.runner.timing import Timer, TimerResult, measure_time

__all__ = [
    "BenchmarkRunner",
    "ProgressCallback",
    "Timer",
    "TimerResult",
    "compute_stats",
    "measure_time",
    "round_half_up",
    "run_full_benchmark",
    "run_stress_benchmark",
    "throughput",
]
