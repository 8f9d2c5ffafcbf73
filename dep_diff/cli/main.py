"""Main CLI interface for DepDiff."""

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import DepDiffConfig
from ..core.aggregator import VersionAggregator
from ..core.differ import InvalidInputShape, diff_dependencies, parse_dependency_map
from ..core.filter import FilterState, filter_diff
from ..core.parsers import ReportParser
from ..mvnrepository import MvnRepositoryClient, MvnRepositoryError
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging
from ..utils.performance import PerformanceMonitor
from ..utils.storage import RecentSearchStore, display_name

app = typer.Typer(
    name="depdiff",
    help="Extract Maven dependency listings and compare them between versions",
    add_completion=False
)

console = Console()
logger = get_logger("CLI")


def _history_store(config: DepDiffConfig) -> RecentSearchStore:
    return RecentSearchStore(config.history_file, config.history_limit)


def _read_input(source: str, side: str) -> str:
    """Read comparison input from a file path or ``-`` for stdin.

    Raises:
        InvalidInputShape: If the input is not valid UTF-8
    """
    path = Path(source)
    if source != "-" and not path.is_file():
        console.print(f"[red]Error: {side} input does not exist: {path}[/red]")
        raise typer.Exit(1)

    try:
        if source == "-":
            return sys.stdin.read()
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInputShape(side, f"Invalid encoding: {e}") from e


@app.command()
def fetch(
    url: Optional[str] = typer.Argument(
        None,
        help="mvnrepository.com artifact URL, e.g. https://mvnrepository.com/artifact/group/artifact/1.0"
    ),
    recent: Optional[int] = typer.Option(
        None,
        "--recent",
        "-r",
        help="Re-run the recent search at this position instead of URL"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the dependency JSON to this file instead of stdout"
    ),
    no_proxy: bool = typer.Option(
        False,
        "--no-proxy",
        help="Request the page directly instead of through the proxy"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Extract the dependencies listed on an artifact page as JSON."""
    setup_logging(verbose=verbose)

    config = DepDiffConfig.from_env()
    if no_proxy:
        config.proxy_url = None
    store = _history_store(config)

    if recent is not None:
        searches = store.get()
        if not 0 <= recent < len(searches):
            console.print(f"[red]Error: No recent search at position {recent}[/red]")
            raise typer.Exit(1)
        url = searches[recent]["url"]

    if not url:
        console.print("[red]Error: Please enter a valid Maven Repository URL.[/red]")
        raise typer.Exit(1)

    async def run_fetch():
        async with MvnRepositoryClient(config) as client:
            return await client.fetch_dependencies(url)

    try:
        result = asyncio.run(run_fetch())
    except MvnRepositoryError as e:
        logger.error(f"Fetch failed: {e}")
        console.print(f"[red]Error fetching dependencies: {e.message}[/red]")
        raise typer.Exit(1)

    store.add(url, display_name(url))

    if output:
        JSONFormatter(output).save_results(result.dependencies)
        console.print(
            f"[green]{len(result)} dependencies of {result.library or url} saved to {output}[/green]"
        )
    else:
        typer.echo(JSONFormatter.dumps(result.dependencies))


@app.command()
def compare(
    old: str = typer.Argument(..., help="Old dependency JSON file, or '-' for stdin"),
    new: str = typer.Argument(..., help="New dependency JSON file, or '-' for stdin"),
    show_added: bool = typer.Option(True, "--added/--no-added", help="Show added dependencies"),
    show_changed: bool = typer.Option(True, "--changed/--no-changed", help="Show changed dependencies"),
    show_removed: bool = typer.Option(True, "--removed/--no-removed", help="Show removed dependencies"),
    show_only_existing: bool = typer.Option(
        False,
        "--only-existing",
        help="Only show dependencies present in the old input"
    ),
    show_up: bool = typer.Option(True, "--up/--no-up", help="Show upgraded dependencies"),
    show_down: bool = typer.Option(True, "--down/--no-down", help="Show downgraded dependencies"),
    show_equal: bool = typer.Option(
        True,
        "--equal/--no-equal",
        help="Show changes whose versions compare equal"
    ),
    only_changes: bool = typer.Option(
        False,
        "--only-changes",
        help="Show every category but hide equal-version changes"
    ),
    swap: bool = typer.Option(False, "--swap", help="Swap the old and new inputs"),
    json_output: Optional[Path] = typer.Option(
        None,
        "--json",
        help="Also write the filtered comparison to this JSON file"
    ),
    performance: bool = typer.Option(False, "--performance", help="Show timing summary"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
) -> None:
    """Compare two dependency JSON maps."""
    setup_logging(verbose=verbose)

    if old == "-" and new == "-":
        console.print("[red]Error: Only one input can be read from stdin[/red]")
        raise typer.Exit(1)

    state = FilterState(
        show_added=show_added,
        show_changed=show_changed,
        show_removed=show_removed,
        show_only_existing=show_only_existing,
        show_up=show_up,
        show_down=show_down,
        show_equal=show_equal,
    )
    if only_changes:
        state = state.only_changes()

    monitor = PerformanceMonitor(console)
    try:
        old_text = _read_input(old, "old")
        new_text = _read_input(new, "new")
        if swap:
            old_text, new_text = new_text, old_text

        with monitor.measure("parse"):
            old_deps = parse_dependency_map(old_text, "old")
            new_deps = parse_dependency_map(new_text, "new")
    except InvalidInputShape as e:
        logger.debug(f"Rejected {e.side} input: {e.reason}")
        ConsoleFormatter(console).format_error(str(e))
        raise typer.Exit(1)

    with monitor.measure("diff"):
        diff = diff_dependencies(old_deps, new_deps)
    with monitor.measure("filter"):
        filtered = filter_diff(diff, old_deps, state)

    ConsoleFormatter(console).format_diff(filtered, state, diff.total_changes)

    if json_output:
        json_formatter = JSONFormatter(json_output)
        json_formatter.save_results(json_formatter.format_diff_results(diff, filtered, state))
        console.print(f"[green]Comparison saved to: {json_output}[/green]")

    if performance:
        monitor.print_summary()


@app.command()
def aggregate(
    files: List[Path] = typer.Argument(..., help="Dependency JSON maps or 'gradle dependencies' reports"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the highest-version map to this JSON file"
    ),
    breakdown: Optional[Path] = typer.Option(
        None,
        "--breakdown",
        "-b",
        help="Write the per-version source breakdown to this JSON file"
    ),
    conflicts_only: bool = typer.Option(
        False,
        "--conflicts-only",
        help="Restrict the table and breakdown to dependencies with several versions"
    ),
    json_output: Optional[Path] = typer.Option(
        None,
        "--json",
        help="Write the highest versions and the breakdown together to this JSON file"
    ),
    performance: bool = typer.Option(False, "--performance", help="Show timing summary"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
) -> None:
    """Merge dependency reports, keeping the highest version of each dependency."""
    setup_logging(verbose=verbose)

    monitor = PerformanceMonitor(console)
    aggregator = VersionAggregator()
    parsed_count = 0

    with monitor.measure("aggregate"):
        for file_path in files:
            try:
                parsed = ReportParser.parse_file(file_path)
            except (InvalidInputShape, ValueError, OSError) as e:
                console.print(f"  ✗ {file_path.name}: {e}")
                continue

            if parsed is None:
                console.print(f"  ✗ {file_path.name}: unsupported report format")
                continue

            aggregator.add_all(parsed)
            parsed_count += 1
            console.print(f"  ✓ {file_path.name} ({len(parsed)} observations)")

    if not parsed_count:
        console.print("[red]Error: No reports could be read[/red]")
        raise typer.Exit(1)

    ConsoleFormatter(console).format_aggregation(aggregator, conflicts_only=conflicts_only)

    json_formatter = JSONFormatter()
    if output:
        json_formatter.save_results(aggregator.highest_versions(), output)
        console.print(f"[green]Dependencies JSON saved to: {output}[/green]")
    if breakdown:
        json_formatter.save_results(aggregator.breakdown(conflicts_only=conflicts_only), breakdown)
        console.print(f"[green]Version breakdown saved to: {breakdown}[/green]")
    if json_output:
        json_formatter.save_results(
            json_formatter.format_aggregation(aggregator, conflicts_only=conflicts_only), json_output
        )
        console.print(f"[green]Aggregation saved to: {json_output}[/green]")

    if performance:
        monitor.print_summary()


@app.command()
def recent(
    clear: bool = typer.Option(False, "--clear", help="Clear all recent searches"),
    remove: Optional[int] = typer.Option(None, "--remove", help="Remove the search at this position")
) -> None:
    """List or edit recent searches."""
    store = _history_store(DepDiffConfig.from_env())

    if clear:
        store.clear()
        console.print("All recent searches cleared!")
        return

    if remove is not None:
        try:
            store.remove(remove)
        except IndexError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    ConsoleFormatter(console).format_recent(store.get())


@app.command()
def info() -> None:
    """Show DepDiff information."""
    console.print(Panel.fit(
        "[bold blue]DepDiff[/bold blue]\n"
        "Extracts dependency listings from mvnrepository.com\n"
        "and compares them between versions",
        title="Information"
    ))

    formats = ReportParser.get_supported_formats()
    console.print(f"\n[bold]Supported Report Formats:[/bold] {', '.join(formats)}")

    extensions = ReportParser.get_supported_extensions()
    console.print(f"[bold]Supported Extensions:[/bold] {', '.join(extensions)}")


def main() -> None:
    """Main entry point for DepDiff CLI."""
    app()


if __name__ == "__main__":
    main()
