"""
FastAPI application exposing the benchmark over HTTP.

One app serves one backend. Passes are serialised with a lock so two
requests never interleave against the same data.

    from storage_bench.adapters import AdapterRegistry
    from storage_bench.api import create_app

    app = create_app(AdapterRegistry.create("postgres"))
"""

import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from storage_bench.errors import EmptyCollectionError
from storage_bench.protocols import StorageAdapter
from storage_bench.runner import BenchmarkRunner
from storage_bench.utils.log import get_logger

__all__ = ["create_app"]

logger = get_logger(__name__)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": str(exc), "type": type(exc).__name__},
    )


def create_app(
    adapter: StorageAdapter,
    *,
    connect_kwargs: dict[str, Any] | None = None,
    runner: BenchmarkRunner | None = None,
) -> FastAPI:
    """Build the benchmark service for a single adapter.

    The lifespan connects the adapter on startup (unless it is already
    connected) and disconnects it on shutdown if it connected it.

    Args:
        adapter: Storage adapter to benchmark.
        connect_kwargs: Keyword arguments forwarded to ``adapter.connect``.
        runner: Runner override, mainly for tests.

    Returns:
        Configured FastAPI application.
    """
    runner = runner or BenchmarkRunner(adapter)
    lock = threading.Lock()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owns_connection = not adapter.connected
        if owns_connection:
            adapter.connect(**(connect_kwargs or {}))
        logger.info("Benchmark service started", database=adapter.name, version=adapter.version)

        yield

        if owns_connection:
            adapter.disconnect()
        logger.info("Benchmark service stopped", database=adapter.name)

    app = FastAPI(
        title=f"storage-bench ({adapter.name})",
        description="Storage backend benchmark service",
        lifespan=lifespan,
    )

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "database": adapter.name, "connected": adapter.connected}

    @app.get("/benchmark")
    def benchmark(
        count: str | None = None,
        posts_per_user: str | None = Query(default=None, alias="postsPerUser"),
    ) -> Any:
        """Run one full pass and return its result."""
        log = logger.bind(database=adapter.name, count=count, posts_per_user=posts_per_user)
        log.info("Full benchmark requested")

        try:
            with lock:
                result = runner.run_full(count, posts_per_user)
        except EmptyCollectionError as e:
            log.warning("Full benchmark aborted", error=str(e))
            return _error_response(409, e)
        except Exception as e:
            log.exception("Full benchmark failed")
            return _error_response(500, e)

        log.info("Full benchmark completed", total_time=result.total_time)
        return result.to_dict()

    @app.get("/benchmark/stress")
    def stress(
        iterations: str | None = None,
        batch: str | None = None,
    ) -> Any:
        """Run a stress pass and return duration statistics."""
        log = logger.bind(database=adapter.name, iterations=iterations, batch=batch)
        log.info("Stress benchmark requested")

        try:
            with lock:
                result = runner.run_stress(iterations, batch)
        except Exception as e:
            log.exception("Stress benchmark failed")
            return _error_response(500, e)

        log.info(
            "Stress benchmark completed",
            insert_avg=result.insert_stats.avg,
            read_avg=result.read_stats.avg,
        )
        return result.to_dict()

    return app
