r"""
Export formats for benchmark results.

    from storage_bench.reporting.formats import JsonExporter, MarkdownExporter

    exporter = JsonExporter()
    exporter.export(collector, "results.json")
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from storage_bench.reporting.collector import ResultCollector, section_times

__all__ = ["BaseExporter", "JsonExporter", "MarkdownExporter"]


class BaseExporter(ABC):
    """Base class for result exporters."""

    def export(self, collector: ResultCollector, path: str | Path) -> None:
        """Export results to file."""
        Path(path).write_text(self.to_string(collector))

    @abstractmethod
    def to_string(self, collector: ResultCollector) -> str:
        """Export results to string."""
        ...


class JsonExporter(BaseExporter):
    """Export results to JSON format."""

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def to_string(self, collector: ResultCollector) -> str:
        return json.dumps(collector.to_dict(), indent=self._indent)


class MarkdownExporter(BaseExporter):
    """Export results to Markdown format."""

    def to_string(self, collector: ResultCollector) -> str:
        lines: list[str] = []
        session = collector.session
        env = collector.environment

        lines.append("# Storage Backend Benchmark Report")
        lines.append("")
        lines.append(f"**Session:** {session.session_id}")
        lines.append(f"**Workload:** {session.workload}")
        lines.append(f"**Date:** {session.started_at[:10] if session.started_at else 'N/A'}")
        lines.append("")

        lines.append("## Environment")
        lines.append("")
        lines.append(f"- Platform: {env.platform}")
        lines.append(f"- Python: {env.python_version}")
        lines.append(f"- CPU: {env.cpu}")
        lines.append(f"- Memory: {env.memory_gb} GB")
        lines.append("")

        if collector.full_results:
            lines.append("## Full Benchmark")
            lines.append("")
            self._add_full_table(collector, lines)

        if collector.stress_results:
            lines.append("## Stress Benchmark")
            lines.append("")
            self._add_stress_table(collector, lines)

        comparisons = collector.compute_comparisons()
        if comparisons:
            lines.append("## Performance Comparisons")
            lines.append("")
            self._add_comparison_table(comparisons, lines)

        return "\n".join(lines)

    def _add_full_table(self, collector: ResultCollector, lines: list[str]) -> None:
        """Section times (ms) per database."""
        columns: dict[str, dict[str, float]] = {}
        for db in collector.session.databases:
            result = collector.get_full_result(db)
            if result is not None:
                columns[db] = section_times(result)
        databases = list(columns)

        sections: list[str] = []
        for times in columns.values():
            sections.extend(s for s in times if s not in sections)

        lines.append("| Section | " + " | ".join(f"{db} (ms)" for db in databases) + " |")
        lines.append("|---------|" + "|".join("-" * 12 for _ in databases) + "|")

        for section in sections:
            row = f"| {section} |"
            for db in databases:
                time_ms = columns[db].get(section)
                row += f" {time_ms:.2f} |" if time_ms is not None else " N/A |"
            lines.append(row)

        lines.append("")

    def _add_stress_table(self, collector: ResultCollector, lines: list[str]) -> None:
        lines.append("| Database | Iterations | Batch | Insert avg (ms) | Insert median (ms) | Read avg (ms) | Read median (ms) |")
        lines.append("|----------|------------|-------|-----------------|--------------------|---------------|------------------|")

        for r in collector.stress_results:
            lines.append(
                f"| {r.database} | {r.iterations} | {r.batch_size} "
                f"| {r.insert_stats.avg:.2f} | {r.insert_stats.median:.2f} "
                f"| {r.read_stats.avg:.2f} | {r.read_stats.median:.2f} |"
            )

        lines.append("")

    def _add_comparison_table(self, comparisons: dict[str, dict[str, float]], lines: list[str]) -> None:
        """Add comparison table showing speedups."""
        all_dbs: set[str] = set()
        for speedups in comparisons.values():
            all_dbs.update(speedups.keys())
        databases = sorted(all_dbs)

        lines.append("| Section | " + " | ".join(databases) + " |")
        lines.append("|---------|" + "|".join("-" * 10 for _ in databases) + "|")

        for section, speedups in comparisons.items():
            row = f"| {section} |"
            for db in databases:
                speed = speedups.get(db)
                if speed is None:
                    row += " N/A |"
                elif speed == 1.0:
                    row += " **1.00x** |"
                else:
                    row += f" {speed:.2f}x |"
            lines.append(row)

        lines.append("")
        lines.append("*Speedup relative to fastest (1.00x = fastest)*")
        lines.append("")
