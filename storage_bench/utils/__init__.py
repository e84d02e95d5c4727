"""Utility modules for storage-bench."""

from storage_bench.utils.memory import (
    measure_memory,
    to_megabytes,
)

__all__ = [
    "measure_memory",
    "to_megabytes",
]
