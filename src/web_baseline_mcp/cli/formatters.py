"""
Output formatters for the Web Baseline MCP CLI.

Provides JSON, table and human-readable renderings of features, search
results, Baseline listings and comparisons.
"""

import json
import sys
from typing import Any, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from tabulate import tabulate

from web_baseline_mcp.comparison import support_label
from web_baseline_mcp.models.feature_types import (
    ALL_BROWSERS,
    BaselineYearEntry,
    ComparisonResult,
    FeatureRecord,
    SearchHit,
)

console = Console()


def _to_data(item: Any) -> Any:
    """Convert models to the same JSON shape the MCP tools return."""
    if hasattr(item, "to_json_dict"):
        return item.to_json_dict()
    if hasattr(item, "model_dump"):
        return item.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(item, list):
        return [_to_data(i) for i in item]
    return item


class OutputFormatter:
    """Output formatter with json, table and human formats."""

    def __init__(self, format_type: str = "human", quiet: bool = False):
        self.format_type = format_type
        self.quiet = quiet

    def _write_line(self, text: str = "") -> None:
        sys.stdout.write(f"{text}\n")

    def output(self, data: Any, title: Optional[str] = None) -> None:
        """Output data in the specified format."""
        if self.quiet and self.format_type != "json":
            return

        if self.format_type == "json":
            self._output_json(data)
        elif self.format_type == "table":
            self._output_table(data, title)
        else:
            self._output_human(data, title)

    def _output_json(self, data: Any) -> None:
        self._write_line(json.dumps(_to_data(data), indent=2, default=str))

    def _output_table(self, data: Any, title: Optional[str] = None) -> None:
        """Output as table using tabulate."""
        if title:
            self._write_line(title)

        if isinstance(data, ComparisonResult):
            rows = [
                [row.browser, row.a_version, row.b_version]
                for row in data.support_difference
            ]
            headers = ["browser", data.feature_a.id, data.feature_b.id]
            self._write_line(tabulate(rows, headers=headers, tablefmt="grid"))
            return

        if isinstance(data, list):
            if not data:
                self._write_line("No results")
                return
            rows = [_to_data(item) for item in data]
            if isinstance(rows[0], dict):
                headers = list(rows[0].keys())
                table_data = [[row.get(h, "") for h in headers] for row in rows]
                self._write_line(tabulate(table_data, headers=headers, tablefmt="grid"))
            else:
                self._write_line(tabulate([[r] for r in rows], tablefmt="grid"))
            return

        obj_data = _to_data(data)
        if not isinstance(obj_data, dict):
            self._write_line(str(obj_data))
            return

        # Create key-value table
        rows = [[k, v] for k, v in obj_data.items()]
        self._write_line(tabulate(rows, headers=["Property", "Value"], tablefmt="grid"))

    def _output_human(self, data: Any, title: Optional[str] = None) -> None:
        """Output in human-readable format using Rich."""
        if title:
            console.print(f"\n[bold blue]{title}[/bold blue]")

        if isinstance(data, FeatureRecord):
            self._format_feature(data)
        elif isinstance(data, ComparisonResult):
            self._format_comparison(data)
        elif isinstance(data, list):
            self._format_list(data)
        else:
            console.print(str(data))

    def _format_feature(self, feature: FeatureRecord) -> None:
        lines = [f"[bold]{feature.name}[/bold] ([cyan]{feature.id}[/cyan])"]
        if feature.description:
            lines.append(feature.description)
        if feature.baseline_year:
            lines.append(f"[green]Baseline {feature.baseline_year}[/green]")
        else:
            lines.append("[yellow]Not in Baseline[/yellow]")
        if feature.status.experimental:
            lines.append("[magenta]Experimental[/magenta]")
        if feature.status.deprecated:
            lines.append("[red]Deprecated[/red]")
        if feature.mdn_url:
            lines.append(f"MDN: {feature.mdn_url}")
        if feature.spec_url:
            lines.append(f"Spec: {feature.spec_url}")
        console.print(Panel("\n".join(lines), title="Feature", expand=False))

        table = Table(title="Browser Support")
        table.add_column("Browser", style="cyan")
        table.add_column("Support")
        for browser in ALL_BROWSERS:
            value = feature.support.get(browser)
            if value is None:
                continue
            table.add_row(browser, support_label(value))
        console.print(table)

    def _format_comparison(self, result: ComparisonResult) -> None:
        table = Table(title=f"{result.feature_a.name} vs {result.feature_b.name}")
        table.add_column("Browser", style="cyan")
        table.add_column(result.feature_a.id)
        table.add_column(result.feature_b.id)
        for row in result.support_difference:
            style = None if row.a_version == row.b_version else "yellow"
            table.add_row(row.browser, row.a_version, row.b_version, style=style)
        console.print(table)

        diff = result.baseline_difference
        if diff is None:
            console.print("Baseline difference: not available for both features")
        elif diff.year_diff == 0:
            console.print("Both features reached Baseline in the same year")
        else:
            first = result.feature_a if diff.a_first else result.feature_b
            console.print(
                f"[green]{first.name}[/green] reached Baseline "
                f"{diff.year_diff} year(s) earlier"
            )

    def _format_list(self, items: List[Any]) -> None:
        if not items:
            console.print("[yellow]No results[/yellow]")
            return

        first = items[0]
        if isinstance(first, BaselineYearEntry):
            table = Table()
            table.add_column("Feature", style="cyan")
            table.add_column("Quarter")
            table.add_column("Description")
            for entry in items:
                table.add_row(entry.feature_id, entry.quarter or "", entry.description or "")
        elif isinstance(first, (SearchHit, FeatureRecord)):
            table = Table()
            table.add_column("ID", style="cyan")
            table.add_column("Name")
            table.add_column("Group")
            for hit in items:
                table.add_row(hit.id, hit.name, hit.group or "")
        else:
            for i, item in enumerate(items, 1):
                console.print(f"{i}. {item}")
            return
        console.print(table)
