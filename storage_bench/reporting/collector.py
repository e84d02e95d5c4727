r"""
Result collection and aggregation.

    from storage_bench.reporting.collector import ResultCollector

    collector = ResultCollector()
    collector.start_session(workload="medium", databases=["duckdb"])
    collector.add_full(result)
"""

import platform
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import psutil

from storage_bench.types import FullBenchmarkResult, StressBenchmarkResult

__all__ = ["EnvironmentInfo", "ResultCollector", "SessionInfo", "section_times"]


@dataclass
class SessionInfo:
    """Information about a benchmark session.

    Attributes:
        session_id: Unique session identifier.
        started_at: Session start timestamp.
        completed_at: Session end timestamp (empty if ongoing).
        workload: Workload preset name used.
        databases: Database labels tested.
    """

    session_id: str = ""
    started_at: str = ""
    completed_at: str = ""
    workload: str = ""
    databases: list[str] = field(default_factory=list)


@dataclass
class EnvironmentInfo:
    """Information about the benchmark environment."""

    platform: str = ""
    python_version: str = ""
    cpu: str = ""
    memory_gb: float = 0.0


def section_times(result: FullBenchmarkResult) -> dict[str, float]:
    """Flatten a full pass into ordered section name -> time (ms)."""
    times = {
        "insert": result.insert.time,
        "insertRelated": result.insert_related.time,
        "read": result.read.time,
    }
    for name, metrics in result.queries.items():
        times[name] = metrics.time
    times["update"] = result.update.time
    times["delete"] = result.delete.time
    times["totalTime"] = result.total_time
    return times


class ResultCollector:
    """Collects full and stress results across databases."""

    def __init__(self) -> None:
        self._full_results: list[FullBenchmarkResult] = []
        self._stress_results: list[StressBenchmarkResult] = []
        self._session = SessionInfo()
        self._environment = EnvironmentInfo()

    def start_session(self, *, workload: str, databases: list[str]) -> None:
        """Start a new benchmark session."""
        started_at = datetime.now(UTC)
        self._session = SessionInfo(
            session_id=f"bench_{started_at.strftime('%Y%m%d_%H%M%S')}",
            started_at=started_at.isoformat(),
            workload=workload,
            databases=databases,
        )
        self._environment = EnvironmentInfo(
            platform=platform.system().lower(),
            python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            cpu=platform.processor() or "unknown",
            memory_gb=round(psutil.virtual_memory().total / (1024**3), 1),
        )

    def end_session(self) -> None:
        """End the current benchmark session."""
        self._session.completed_at = datetime.now(UTC).isoformat()

    def add_full(self, result: FullBenchmarkResult) -> None:
        self._full_results.append(result)
        self._track_database(result.database)

    def add_stress(self, result: StressBenchmarkResult) -> None:
        self._stress_results.append(result)
        self._track_database(result.database)

    def _track_database(self, database: str) -> None:
        if database not in self._session.databases:
            self._session.databases.append(database)

    @property
    def full_results(self) -> list[FullBenchmarkResult]:
        return self._full_results

    @property
    def stress_results(self) -> list[StressBenchmarkResult]:
        return self._stress_results

    @property
    def session(self) -> SessionInfo:
        return self._session

    @property
    def environment(self) -> EnvironmentInfo:
        return self._environment

    def get_full_result(self, database: str) -> FullBenchmarkResult | None:
        """Latest full result for a database, if any."""
        matches = [r for r in self._full_results if r.database == database]
        return matches[-1] if matches else None

    def compute_comparisons(self) -> dict[str, dict[str, float]]:
        """Compute speedup of each section relative to the fastest database.

        Returns:
            Dict mapping section name to dict of database -> speedup ratio,
            where 1.0 marks the fastest database.
        """
        per_section: dict[str, dict[str, float]] = {}
        for database in self._session.databases:
            result = self.get_full_result(database)
            if result is None:
                continue
            for section, time_ms in section_times(result).items():
                per_section.setdefault(section, {})[database] = time_ms

        comparisons: dict[str, dict[str, float]] = {}
        for section, times in per_section.items():
            if len(times) < 2:
                continue
            fastest = min(times.values())
            comparisons[section] = {
                db: round(fastest / t, 2) if t > 0 else 1.0 for db, t in times.items()
            }

        return comparisons

    def to_dict(self) -> dict[str, Any]:
        """Convert collected data to dictionary."""
        return {
            "session": {
                "id": self._session.session_id,
                "started_at": self._session.started_at,
                "completed_at": self._session.completed_at,
                "workload": self._session.workload,
                "databases": self._session.databases,
            },
            "environment": {
                "platform": self._environment.platform,
                "python_version": self._environment.python_version,
                "cpu": self._environment.cpu,
                "memory_gb": self._environment.memory_gb,
            },
            "full": [r.to_dict() for r in self._full_results],
            "stress": [r.to_dict() for r in self._stress_results],
            "comparisons": self.compute_comparisons(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultCollector":
        """Rebuild a collector from a saved JSON report."""
        collector = cls()

        session = data.get("session", {})
        collector._session = SessionInfo(
            session_id=session.get("id", ""),
            started_at=session.get("started_at", ""),
            completed_at=session.get("completed_at", ""),
            workload=session.get("workload", ""),
            databases=list(session.get("databases", [])),
        )

        env = data.get("environment", {})
        collector._environment = EnvironmentInfo(
            platform=env.get("platform", ""),
            python_version=env.get("python_version", ""),
            cpu=env.get("cpu", ""),
            memory_gb=env.get("memory_gb", 0.0),
        )

        for item in data.get("full", []):
            collector.add_full(FullBenchmarkResult.from_dict(item))
        for item in data.get("stress", []):
            collector.add_stress(StressBenchmarkResult.from_dict(item))

        return collector
