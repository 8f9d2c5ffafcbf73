"""Output formatters for DepDiff results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.aggregator import VersionAggregator
from ..core.differ import DependencyDiff
from ..core.filter import FilterState, active_filters, has_visible_changes
from ..core.version import compare_versions
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for DepDiff output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()
        self.logger = get_logger("ConsoleFormatter")

    def format_diff(
        self,
        filtered: DependencyDiff,
        state: FilterState,
        total_changes: int
    ) -> None:
        """Display a filtered diff.

        Args:
            filtered: Diff after filtering
            state: Filter switches that produced ``filtered``
            total_changes: Number of entries before filtering
        """
        self.console.print(self._create_summary_panel(filtered, total_changes))

        labels = active_filters(state)
        if labels:
            self.console.print(f"[dim]Active filters: {', '.join(labels)}[/dim]")

        if not has_visible_changes(filtered):
            message = "No differences found." if total_changes == 0 else "No changes match the active filters."
            self.console.print(Panel(message, style="yellow"))
            return

        if filtered.added:
            self.console.print(self._create_single_version_table(
                "Added", [(entry.key, entry.version) for entry in filtered.added], "green"
            ))
        if filtered.removed:
            self.console.print(self._create_single_version_table(
                "Removed", [(entry.key, entry.version) for entry in filtered.removed], "red"
            ))
        if filtered.changed:
            self.console.print(self._create_changed_table(filtered))

    def _create_summary_panel(self, filtered: DependencyDiff, total_changes: int) -> Panel:
        """Create summary panel.

        Args:
            filtered: Diff after filtering
            total_changes: Number of entries before filtering

        Returns:
            Rich panel with summary
        """
        content = (
            f"Added: {len(filtered.added)}\n"
            f"Removed: {len(filtered.removed)}\n"
            f"Changed: {len(filtered.changed)}\n"
            f"Shown: {filtered.total_changes} of {total_changes}"
        )
        style = "blue" if total_changes else "green"
        return Panel(content, title=f"Comparison completed: {total_changes} changes found", style=style)

    def _create_single_version_table(self, title: str, rows: List[tuple], style: str) -> Table:
        table = Table(title=title, title_style=style)
        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Version", style=style)
        for key, version in rows:
            table.add_row(key, version)
        return table

    def _create_changed_table(self, filtered: DependencyDiff) -> Table:
        """Create the changed-dependencies table with direction badges."""
        table = Table(title="Changed")
        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Old Version", style="blue")
        table.add_column("New Version", style="blue")
        table.add_column("Change")

        for entry in filtered.changed:
            change = compare_versions(entry.old_version, entry.new_version)
            table.add_row(
                entry.key,
                entry.old_version,
                entry.new_version,
                Text(f"{change.symbol} {change.label}", style=change.style),
            )
        return table

    def format_aggregation(self, aggregator: VersionAggregator, conflicts_only: bool = False) -> None:
        """Display highest selected versions and, where present, conflicts.

        Args:
            aggregator: Populated aggregator
            conflicts_only: Only list keys reported with several versions
        """
        records = aggregator.records
        conflicts = {key: record for key, record in records.items() if record.has_conflict}

        self.console.print(Panel(
            f"Observations: {aggregator.observation_count}\n"
            f"Dependencies: {len(records)}\n"
            f"Version conflicts: {len(conflicts)}",
            title="Aggregation Summary",
            style="blue",
        ))

        shown = conflicts if conflicts_only else records
        if not shown:
            return

        table = Table(title="Version Conflicts" if conflicts_only else "Highest Versions")
        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Selected", style="green")
        table.add_column("Reported Versions", style="white")

        for key, record in shown.items():
            reported = ", ".join(
                f"{version or '(none)'} [{len(record.versions[version])}]"
                for version in record.sorted_versions()
            )
            table.add_row(key, record.selected_version, reported)

        self.console.print(table)

    def format_recent(self, searches: List[Dict[str, str]]) -> None:
        """Display the recent search history."""
        if not searches:
            self.console.print("[yellow]No recent searches[/yellow]")
            return

        table = Table(title="Recent Searches")
        table.add_column("#", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("URL", style="white")
        for index, search in enumerate(searches):
            table.add_row(str(index), search.get("displayName", ""), search["url"])
        self.console.print(table)

    def format_error(self, error: str, details: Optional[str] = None) -> None:
        """Format and display error message.

        Args:
            error: Error message
            details: Optional error details
        """
        content = f"[bold red]Error:[/bold red] {error}"
        if details:
            content += f"\n\n[dim]{details}[/dim]"

        self.console.print(Panel(content, style="red"))


class JSONFormatter:
    """JSON formatter for DepDiff output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_diff_results(
        self,
        diff: DependencyDiff,
        filtered: DependencyDiff,
        state: FilterState
    ) -> Dict[str, Any]:
        """Format a comparison as JSON.

        Args:
            diff: Unfiltered diff
            filtered: Diff after filtering
            state: Filter switches used

        Returns:
            Formatted JSON data
        """
        result = filtered.to_dict()
        for entry in result["changed"]:
            entry["change"] = compare_versions(entry["oldVersion"], entry["newVersion"]).value

        return {
            "summary": {
                "total_changes": diff.total_changes,
                "shown_changes": filtered.total_changes,
                "active_filters": active_filters(state),
                "timestamp": datetime.now().isoformat(),
            },
            **result,
        }

    def format_aggregation(self, aggregator: VersionAggregator, conflicts_only: bool = False) -> Dict[str, Any]:
        """Both aggregation artifacts in one document."""
        return {
            "dependencies": aggregator.highest_versions(),
            "breakdown": aggregator.breakdown(conflicts_only=conflicts_only),
        }

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.dumps(results))
                f.write("\n")

            self.logger.info(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise

    @staticmethod
    def dumps(data: Any) -> str:
        """Serialize with two-space indentation and key order preserved."""
        return json.dumps(data, indent=2, ensure_ascii=False)
