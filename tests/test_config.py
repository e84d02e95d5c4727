r"""
Tests for storage_bench.config module.
"""

import pytest

from storage_bench.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_COUNT,
    DEFAULT_ITERATIONS,
    DEFAULT_POSTS_PER_USER,
    DEFAULT_WORKLOAD,
    ENV_PREFIX,
    WORKLOADS,
    coerce_int,
    get_env,
    get_workload,
)


class TestWorkloads:
    def test_workloads_defined(self):
        assert "small" in WORKLOADS
        assert "medium" in WORKLOADS
        assert "large" in WORKLOADS

    def test_default_workload_matches_defaults(self):
        workload = WORKLOADS[DEFAULT_WORKLOAD]
        assert workload.count == DEFAULT_COUNT == 1000
        assert workload.posts_per_user == DEFAULT_POSTS_PER_USER == 3
        assert workload.iterations == DEFAULT_ITERATIONS == 10
        assert workload.batch_size == DEFAULT_BATCH_SIZE == 100

    def test_workloads_increase(self):
        small = WORKLOADS["small"]
        medium = WORKLOADS["medium"]
        large = WORKLOADS["large"]

        assert small.count < medium.count < large.count
        assert small.batch_size < medium.batch_size < large.batch_size


class TestGetWorkload:
    def test_get_valid_workload(self):
        workload = get_workload("small")
        assert workload.name == "small"

    def test_get_invalid_workload(self):
        with pytest.raises(ValueError, match="Unknown workload"):
            get_workload("invalid")


class TestGetEnv:
    def test_prefix(self):
        assert ENV_PREFIX == "STORAGE_BENCH_"

    def test_reads_prefixed_variable(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BENCH_MONGO_URI", "mongodb://db:27017")
        assert get_env("MONGO_URI") == "mongodb://db:27017"

    def test_ignores_unprefixed_variable(self, monkeypatch):
        monkeypatch.delenv("STORAGE_BENCH_SOME_KEY", raising=False)
        monkeypatch.setenv("SOME_KEY", "value")
        assert get_env("SOME_KEY") is None

    def test_default(self, monkeypatch):
        monkeypatch.delenv("STORAGE_BENCH_MISSING", raising=False)
        assert get_env("MISSING", default="fallback") == "fallback"


class TestCoerceInt:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, 7),
            ("", 7),
            ("abc", 7),
            ("-5", 7),
            (-1, 7),
            (True, 7),
            (float("nan"), 7),
            ("25", 25),
            ("25abc", 25),
            (" 40 ", 40),
            (12, 12),
            (3.9, 3),
            ("0", 0),
        ],
    )
    def test_lenient_parsing(self, value, expected):
        assert coerce_int(value, default=7) == expected

    def test_minimum(self):
        assert coerce_int("0", default=10, minimum=1) == 10
        assert coerce_int("1", default=10, minimum=1) == 1
