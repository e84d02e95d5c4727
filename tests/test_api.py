r"""
Tests for the HTTP service, against an in-memory DuckDB adapter.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from storage_bench.adapters.duckdb import DuckDBAdapter
from storage_bench.api import create_app
from storage_bench.queries import SUITE_ORDER


@pytest.fixture
def adapter():
    adapter = DuckDBAdapter()
    yield adapter
    if adapter.connected:
        adapter.disconnect()


@pytest.fixture
def client(adapter):
    with TestClient(create_app(adapter, connect_kwargs={"uri": ":memory:"})) as client:
        yield client


class TestLifespan:
    def test_connects_and_disconnects(self, adapter):
        app = create_app(adapter, connect_kwargs={"uri": ":memory:"})
        with TestClient(app):
            assert adapter.connected is True
        assert adapter.connected is False

    def test_keeps_existing_connection(self, duckdb_adapter):
        with TestClient(create_app(duckdb_adapter)):
            pass
        assert duckdb_adapter.connected is True


class TestHealthEndpoint:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "DuckDB", "connected": True}


class TestBenchmarkEndpoint:
    def test_full_pass(self, client):
        response = client.get("/benchmark", params={"count": "20", "postsPerUser": "1"})

        assert response.status_code == 200
        data = response.json()
        assert list(data) == [
            "insert",
            "insertRelated",
            "read",
            "queries",
            "update",
            "delete",
            "database",
            "totalTime",
        ]
        assert data["database"] == "DuckDB"
        assert data["insert"]["count"] == 20
        assert "memoryUsed" in data["insert"]
        assert data["insertRelated"]["count"] == 20
        assert list(data["queries"]) == list(SUITE_ORDER)
        assert data["queries"]["aggregation"]["result"]["totalUsers"] == 20
        assert "throughput" not in data["queries"]["count"]

    def test_lenient_query_values(self, client):
        response = client.get("/benchmark", params={"count": "15xyz", "postsPerUser": "-2"})

        assert response.status_code == 200
        data = response.json()
        assert data["insert"]["count"] == 15
        # negative postsPerUser falls back to 3
        assert data["insertRelated"]["count"] == 45

    def test_empty_collection_conflict(self, client):
        response = client.get("/benchmark", params={"count": "0"})

        assert response.status_code == 409
        assert response.json()["type"] == "EmptyCollectionError"

    def test_failure_returns_500(self, adapter):
        runner = MagicMock()
        runner.run_full.side_effect = RuntimeError("connection reset")
        app = create_app(adapter, connect_kwargs={"uri": ":memory:"}, runner=runner)

        with TestClient(app) as client:
            response = client.get("/benchmark")

        assert response.status_code == 500
        assert response.json() == {"error": "connection reset", "type": "RuntimeError"}


class TestStressEndpoint:
    def test_stress(self, client):
        response = client.get("/benchmark/stress", params={"iterations": "3", "batch": "10"})

        assert response.status_code == 200
        data = response.json()
        assert data["database"] == "DuckDB"
        assert data["iterations"] == 3
        assert data["batchSize"] == 10
        assert set(data["insertStats"]) == {"min", "max", "avg", "median"}

    def test_stress_failure(self, adapter):
        runner = MagicMock()
        runner.run_stress.side_effect = RuntimeError("boom")
        app = create_app(adapter, connect_kwargs={"uri": ":memory:"}, runner=runner)

        with TestClient(app) as client:
            response = client.get("/benchmark/stress")

        assert response.status_code == 500
        assert response.json()["error"] == "boom"
