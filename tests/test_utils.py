r"""
Tests for storage_bench.utils module.
"""

import storage_bench.utils as utils
from storage_bench.types import MemorySnapshot
from storage_bench.utils import measure_memory, to_megabytes


class TestToMegabytes:
    def test_conversion(self):
        assert to_megabytes(1024 * 1024) == 1.0
        assert to_megabytes(1536 * 1024) == 1.5

    def test_rounds_to_two_places(self):
        assert to_megabytes(1_000_000) == 0.95


class TestMeasureMemory:
    def test_snapshot(self):
        snapshot = measure_memory()

        assert isinstance(snapshot, MemorySnapshot)
        assert snapshot.heap_used > 0
        assert snapshot.heap_total >= snapshot.heap_used
        assert snapshot.external >= 0

    def test_public_helpers(self):
        assert sorted(utils.__all__) == ["measure_memory", "to_megabytes"]
