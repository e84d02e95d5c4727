r"""
Command-line interface for storage-bench.

    storage-bench run -d mongodb,postgres -w medium
    storage-bench stress -d duckdb -i 20 -b 500
    storage-bench serve -d postgres --port 3000
    storage-bench report results/bench.json -f markdown
"""

from pathlib import Path
from typing import Annotated

import typer

from storage_bench.adapters import AdapterRegistry, BaseAdapter
from storage_bench.config import get_env, get_workload
from storage_bench.datasets import SyntheticDataGenerator
from storage_bench.reporting import JsonExporter, MarkdownExporter, ResultCollector
from storage_bench.runner import BenchmarkRunner
from storage_bench.utils.log import configure_logging, get_logger

__all__ = ["app", "main"]

logger = get_logger(__name__)

app = typer.Typer(
    name="storage-bench",
    help="Benchmark harness comparing document and relational storage backends.",
    no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else (get_env("LOG_LEVEL", default="INFO") or "INFO")
    fmt = "json" if get_env("LOG_FORMAT") == "json" else "console"
    configure_logging(level=level, format=fmt)


def _connect_adapters(db_list: list[str]) -> list[BaseAdapter]:
    adapters = []
    for db_name in db_list:
        try:
            adapter = AdapterRegistry.create(db_name.strip())
            adapter.connect()
            adapters.append(adapter)
            logger.debug("Connected", database=adapter.name, version=adapter.version)
        except Exception as e:
            typer.echo(f"Warning: Could not connect to {db_name}: {e}", err=True)

    if not adapters:
        typer.echo("Error: No databases available", err=True)
        raise typer.Exit(1)

    return adapters


def _export(collector: ResultCollector, output: Path, format_: str) -> None:
    output.mkdir(parents=True, exist_ok=True)
    session_id = collector.session.session_id

    formats_to_export = [f.strip() for f in format_.split(",")]
    if "all" in formats_to_export:
        formats_to_export = ["json", "markdown"]

    for fmt in formats_to_export:
        if fmt == "json":
            path = output / f"{session_id}.json"
            JsonExporter().export(collector, path)
            typer.echo(f"Exported JSON: {path}")
        elif fmt == "markdown":
            path = output / f"{session_id}.md"
            MarkdownExporter().export(collector, path)
            typer.echo(f"Exported Markdown: {path}")
        else:
            typer.echo(f"Warning: Unknown format '{fmt}'", err=True)


def _progress(database: str, section: str, status: str) -> None:
    typer.echo(f"  [{database}] {section}: {status}")


@app.command()
def run(
    databases: Annotated[
        str | None, typer.Option("-d", "--databases", help="Databases to benchmark (comma-separated)")
    ] = None,
    count: Annotated[int | None, typer.Option("-n", "--count", help="Users to insert")] = None,
    posts_per_user: Annotated[int | None, typer.Option("-p", "--posts-per-user", help="Posts per user")] = None,
    workload: Annotated[str, typer.Option("-w", "--workload", help="Workload: small, medium, large")] = "medium",
    output: Annotated[Path, typer.Option("-o", "--output", help="Output directory")] = Path("./results"),
    format_: Annotated[str, typer.Option("-f", "--format", help="Output format: json, markdown, all")] = "json",
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed for generated data")] = None,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """Run a full benchmark pass on each database."""
    _setup_logging(verbose)

    try:
        workload_config = get_workload(workload)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    db_list = databases.split(",") if databases else AdapterRegistry.list()
    count = count if count is not None else workload_config.count
    posts_per_user = posts_per_user if posts_per_user is not None else workload_config.posts_per_user

    adapters = _connect_adapters(db_list)

    collector = ResultCollector()
    collector.start_session(workload=workload, databases=[a.name for a in adapters])
    failed = 0

    typer.echo(f"\nRunning full benchmark ({count} users, {posts_per_user} posts each)...")

    for adapter in adapters:
        # Same seed per database so every backend sees the same workload
        runner = BenchmarkRunner(adapter, generator=SyntheticDataGenerator(seed=seed))
        if verbose:
            runner.set_progress_callback(_progress)
        try:
            result = runner.run_full(count, posts_per_user)
        except Exception as e:
            logger.error("Full benchmark failed", database=adapter.name, error=str(e))
            failed += 1
            continue
        finally:
            adapter.disconnect()

        collector.add_full(result)
        typer.echo(f"Completed {adapter.name}: totalTime={result.total_time:.2f}ms")

    collector.end_session()
    _export(collector, output, format_)

    typer.echo(f"\nCompleted: {len(collector.full_results)} successful, {failed} failed")
    if failed and not collector.full_results:
        raise typer.Exit(1)


@app.command()
def stress(
    databases: Annotated[
        str | None, typer.Option("-d", "--databases", help="Databases to benchmark (comma-separated)")
    ] = None,
    iterations: Annotated[int | None, typer.Option("-i", "--iterations", help="Insert/read cycles")] = None,
    batch: Annotated[int | None, typer.Option("-b", "--batch", help="Users per cycle")] = None,
    workload: Annotated[str, typer.Option("-w", "--workload", help="Workload: small, medium, large")] = "medium",
    output: Annotated[Path, typer.Option("-o", "--output", help="Output directory")] = Path("./results"),
    format_: Annotated[str, typer.Option("-f", "--format", help="Output format: json, markdown, all")] = "json",
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """Run repeated insert/read cycles and report duration statistics."""
    _setup_logging(verbose)

    try:
        workload_config = get_workload(workload)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    db_list = databases.split(",") if databases else AdapterRegistry.list()
    iterations = iterations if iterations is not None else workload_config.iterations
    batch = batch if batch is not None else workload_config.batch_size

    adapters = _connect_adapters(db_list)

    collector = ResultCollector()
    collector.start_session(workload=workload, databases=[a.name for a in adapters])
    failed = 0

    typer.echo(f"\nRunning stress benchmark ({iterations} x {batch} users)...")

    for adapter in adapters:
        runner = BenchmarkRunner(adapter)
        if verbose:
            runner.set_progress_callback(_progress)
        try:
            result = runner.run_stress(iterations, batch)
        except Exception as e:
            logger.error("Stress benchmark failed", database=adapter.name, error=str(e))
            failed += 1
            continue
        finally:
            adapter.disconnect()

        collector.add_stress(result)
        typer.echo(
            f"Completed {adapter.name}: insert avg={result.insert_stats.avg}ms, "
            f"read avg={result.read_stats.avg}ms"
        )

    collector.end_session()
    _export(collector, output, format_)

    typer.echo(f"\nCompleted: {len(collector.stress_results)} successful, {failed} failed")
    if failed and not collector.stress_results:
        raise typer.Exit(1)


@app.command()
def serve(
    database: Annotated[str, typer.Option("-d", "--database", help="Database to serve")] = "duckdb",
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 3000,
    uri: Annotated[str | None, typer.Option("--uri", help="Connection URI")] = None,
) -> None:
    """Serve the benchmark over HTTP for a single database."""
    import uvicorn

    from storage_bench.api import create_app

    _setup_logging(verbose=False)

    try:
        adapter = AdapterRegistry.create(database)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    api = create_app(adapter, connect_kwargs={"uri": uri} if uri else None)
    uvicorn.run(api, host=host, port=port)


@app.command()
def report(
    results_path: Annotated[Path, typer.Argument(help="Path to results JSON file or directory")],
    format_: Annotated[str, typer.Option("-f", "--format", help="Output format: json, markdown")] = "markdown",
    output: Annotated[Path | None, typer.Option("-o", "--output", help="Output file path")] = None,
) -> None:
    """Generate reports from saved benchmark results."""
    import json

    if results_path.is_dir():
        json_files = list(results_path.glob("*.json"))
        if not json_files:
            typer.echo(f"No JSON files found in {results_path}", err=True)
            raise typer.Exit(1)
        results_path = max(json_files, key=lambda p: p.stat().st_mtime)

    if not results_path.exists():
        typer.echo(f"File not found: {results_path}", err=True)
        raise typer.Exit(1)

    with open(results_path) as f:
        collector = ResultCollector.from_dict(json.load(f))

    if output is None:
        ext = {"json": ".json", "markdown": ".md"}.get(format_, ".md")
        output = results_path.with_suffix(ext)

    if format_ == "json":
        JsonExporter().export(collector, output)
    else:
        MarkdownExporter().export(collector, output)

    typer.echo(f"Generated report: {output}")


@app.command()
def adapters(
    action: Annotated[str, typer.Argument(help="Action: list, test")] = "list",
    name: Annotated[str | None, typer.Option("-n", "--name", help="Adapter name")] = None,
    uri: Annotated[str | None, typer.Option("--uri", help="Connection URI")] = None,
) -> None:
    """List and test storage adapters."""
    if action == "list":
        typer.echo("Available adapters:")
        for adapter_name in AdapterRegistry.list():
            typer.echo(f"  - {adapter_name}")
    elif action == "test":
        if not name:
            typer.echo("Error: --name required for test", err=True)
            raise typer.Exit(1)

        try:
            adapter = AdapterRegistry.create(name)
            adapter.connect(uri=uri)
            typer.echo(f"Successfully connected to {adapter.name} (version: {adapter.version})")
            adapter.disconnect()
        except Exception as e:
            typer.echo(f"Failed to connect to {name}: {e}", err=True)
            raise typer.Exit(1) from e
    else:
        typer.echo(f"Unknown action: {action}", err=True)
        raise typer.Exit(1)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
