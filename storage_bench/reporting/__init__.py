r"""
Result collection and reporting.

Aggregates full and stress results and exports to JSON and Markdown.

    from storage_bench.reporting import ResultCollector, MarkdownExporter

    collector = ResultCollector()
    collector.add_full(result)
    MarkdownExporter().export(collector, "report.md")
"""

from storage_bench.reporting.collector import EnvironmentInfo, ResultCollector, SessionInfo, section_times
from storage_bench.reporting.formats import BaseExporter, JsonExporter, MarkdownExporter

__all__ = [
    "BaseExporter",
    "EnvironmentInfo",
    "JsonExporter",
    "MarkdownExporter",
    "ResultCollector",
    "SessionInfo",
    "section_times",
]
