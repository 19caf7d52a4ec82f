"""Rich console formatting for dumped error traces and collector reports."""

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .enums import Severity

SEVERITY_COLORS = {
    Severity.DEBUG.value: "dim",
    Severity.INFO.value: "blue",
    Severity.WARNING.value: "yellow",
    Severity.ERROR.value: "red",
    Severity.CRITICAL.value: "bold red",
    Severity.FATAL.value: "bold red",
    Severity.PANIC.value: "bold magenta",
}


def render_json(data: dict[str, Any]) -> str:
    """Serialize a trace or collector dump; unknown baggage values fall back to str()."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def is_collector_dump(data: dict[str, Any]) -> bool:
    """Tell a collector dump apart from a single chain dump."""
    return "errors" in data and "stack" not in data


class TraceFormatter:
    """Formats error chain dumps for rich console display.

    Accepts the dictionaries produced by ``ErrorNode.to_dict()`` and
    ``ErrorCollector.to_dict()``.
    """

    def __init__(self, console: Console | None = None, include_baggage: bool = True):
        self.console = console or Console()
        self.include_baggage = include_baggage

    def format(self, data: dict[str, Any]) -> None:
        """Display a chain or collector dump, whichever ``data`` is."""
        if is_collector_dump(data):
            self.format_collector(data)
        else:
            self.format_trace(data)

    def format_trace(self, data: dict[str, Any], title: str | None = None) -> None:
        """Format and display a single error chain."""
        severity = str(data.get("severity", ""))
        color = SEVERITY_COLORS.get(severity, "white")

        header = escape(title or "Error Trace")
        self.console.print(f"[bold]{header}[/bold] [{color}]{escape(severity.upper())}[/{color}]")
        if data.get("error"):
            self.console.print(f"[dim]{escape(str(data['error']))}[/dim]")

        table = Table(box=box.ROUNDED)
        table.add_column("#", style="dim", no_wrap=True)
        table.add_column("Message", style="white")
        table.add_column("Classification", style="cyan")
        table.add_column("Layer", style="blue")
        if self.include_baggage:
            table.add_column("Baggage", style="dim", max_width=40)

        for index, record in enumerate(data.get("stack", []), start=1):
            classification = record.get("classification")
            row = [
                str(index),
                escape(str(record.get("message", ""))),
                escape(str(classification)) if classification is not None else "[dim]cause[/dim]",
                escape(str(record.get("data_layer", ""))),
            ]
            if self.include_baggage:
                row.append(self._format_baggage(record.get("baggage")))
            table.add_row(*row)

        self.console.print(table)
        self.console.print()

    def format_collector(self, data: dict[str, Any]) -> None:
        """Format and display a collector report with one trace per collected chain."""
        total = data.get("total_errors", len(data.get("errors", [])))
        self.console.print(f"[bold]Collected errors:[/bold] {escape(str(total))}")

        counts = data.get("errors_by_severity", {})
        if counts:
            table = Table(show_header=False, box=box.SIMPLE)
            table.add_column("Severity", style="cyan", no_wrap=True)
            table.add_column("Count", style="white")
            for severity, count in counts.items():
                if count:
                    color = SEVERITY_COLORS.get(severity, "white")
                    table.add_row(f"[{color}]{escape(str(severity))}[/{color}]", str(count))
            self.console.print(table)

        for index, error in enumerate(data.get("errors", []), start=1):
            self.format_trace(error, title=f"Error {index}/{total}")

    def _format_baggage(self, baggage: dict[str, Any] | None) -> str:
        if not baggage:
            return ""
        return escape(", ".join(f"{key}={value}" for key, value in baggage.items()))
