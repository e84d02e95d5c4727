r"""
Command-line interface for storage-bench.

    storage-bench run -d mongodb,postgres -w medium
    storage-bench report results/bench.json -f markdown
"""

from storage_bench.cli.main import app, main

__all__ = [
    "app",
    "main",
]
