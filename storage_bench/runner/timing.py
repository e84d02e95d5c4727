r"""
Timing utilities for benchmark sections.

    from storage_bench.runner.timing import Timer, measure_time

    timed = measure_time(adapter.find_all, EntityKind.USERS)
    print(timed.elapsed_ms, len(timed.result))
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ParamSpec, TypeVar

__all__ = ["Timer", "TimerResult", "measure_time", "to_ms"]

P = ParamSpec("P")
R = TypeVar("R")

# Section times are reported in milliseconds with microsecond resolution
MS_DECIMALS = 3


def to_ms(elapsed_ns: int) -> float:
    """Convert nanoseconds to milliseconds, rounded for reporting."""
    return round(elapsed_ns / 1_000_000, MS_DECIMALS)


@dataclass
class TimerResult:
    """Result from a timing measurement.

    Attributes:
        elapsed_ns: Elapsed time in nanoseconds.
        result: Return value from the timed function.
    """

    elapsed_ns: int
    result: Any = None

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds (rounded for reporting)."""
        return to_ms(self.elapsed_ns)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return self.elapsed_ns / 1_000_000_000


class Timer:
    """Context manager for timing a benchmark section.

        with Timer() as t:
            adapter.bulk_insert(EntityKind.POSTS, posts)
        print(f"Elapsed: {t.elapsed_ms}ms")
    """

    def __init__(self) -> None:
        self._start: int = 0
        self._end: int = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._end = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time in nanoseconds."""
        return self._end - self._start

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds (rounded for reporting)."""
        return to_ms(self.elapsed_ns)


def measure_time(func: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> TimerResult:
    """Measure execution time of a single call.

    Exceptions from ``func`` propagate; no partial timing is recorded.

    Args:
        func: Function to call.
        *args: Positional arguments.
        **kwargs: Keyword arguments.

    Returns:
        TimerResult with elapsed time and function result.
    """
    start = time.perf_counter_ns()
    result = func(*args, **kwargs)
    end = time.perf_counter_ns()
    return TimerResult(elapsed_ns=end - start, result=result)
