"""Memory measurement utilities for benchmarks.

Snapshots the benchmark process itself. For embedded engines (DuckDB)
this includes the database; for server engines it covers driver-side
buffers and the materialized result sets.
"""

from __future__ import annotations

import os

import psutil

from storage_bench.types import MemorySnapshot

__all__ = [
    "measure_memory",
    "to_megabytes",
]

_BYTES_PER_MB = 1024 * 1024


def to_megabytes(num_bytes: int) -> float:
    """Convert bytes to megabytes rounded to 2 decimal places."""
    return round(num_bytes / _BYTES_PER_MB, 2)


def measure_memory() -> MemorySnapshot:
    """Take a memory snapshot of the current process.

    Maps the process figures onto the heap-style triple reported by the
    benchmark: resident set size as ``heap_used``, virtual size as
    ``heap_total`` and shared memory as ``external`` (0 where the
    platform does not report it).

    Returns:
        MemorySnapshot in megabytes.
    """
    info = psutil.Process(os.getpid()).memory_info()
    return MemorySnapshot(
        heap_used=to_megabytes(info.rss),
        heap_total=to_megabytes(info.vms),
        external=to_megabytes(getattr(info, "shared", 0)),
    )
