r"""
Duration statistics and throughput arithmetic.

    from storage_bench.runner.stats import compute_stats

    stats = compute_stats([12.0, 9.5, 11.25, 10.0])
    # DurationStats(min=9.5, max=12.0, avg=10.69, median=11.25)
"""

import math
from collections.abc import Sequence

from storage_bench.types import DurationStats

__all__ = ["compute_stats", "round_half_up", "throughput"]


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round half away from zero for non-negative values (2.5 -> 3, not 2)."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def throughput(count: int, time_ms: float) -> int | None:
    """Records per second for a timed section.

    Returns None when the section took no measurable time.
    """
    if time_ms <= 0:
        return None
    return int(round_half_up(count / (time_ms / 1000)))


def compute_stats(samples: Sequence[float]) -> DurationStats:
    """Reduce duration samples to min/max/avg/median.

    The median is the element at index ``n // 2`` of the sorted samples.
    For even ``n`` that is one of the two middle values, not their mean;
    results stay comparable with earlier runs of the stress endpoint.

    Args:
        samples: Non-empty sequence of non-negative durations (ms).

    Returns:
        DurationStats with avg rounded to 2 decimal places.

    Raises:
        ValueError: If ``samples`` is empty.
    """
    if not samples:
        raise ValueError("compute_stats() requires at least one sample")

    ordered = sorted(samples)
    n = len(ordered)

    return DurationStats(
        min=ordered[0],
        max=ordered[-1],
        avg=round_half_up(sum(ordered) / n, 2),
        median=ordered[n // 2],
    )
