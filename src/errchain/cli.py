"""CLI interface for errchain using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from errchain import __description__, __version__
from errchain.config import ReportFormat, load_config
from errchain.enums import Classification, DataLayer, Severity
from errchain.report import TraceFormatter, render_json

app = typer.Typer(
    name="errchain",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"errchain version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Inspect structured error chains."""
    level = logging.DEBUG
    if not verbose:
        try:
            level = load_config().logging.numeric_level
        except ValueError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def codes() -> None:
    """List the classifications, data layers and severities."""
    table = Table(title="Classifications", box=box.ROUNDED)
    table.add_column("Name", style="bold cyan")
    table.add_column("Value", style="white")
    table.add_column("Status", style="green")
    for classification in Classification:
        table.add_row(classification.name, classification.value, str(classification.status_code))
    console.print(table)

    table = Table(title="Data Layers", box=box.ROUNDED)
    table.add_column("Name", style="bold cyan")
    table.add_column("Value", style="white")
    for layer in DataLayer:
        table.add_row(layer.name, layer.value)
    console.print(table)

    table = Table(title="Severities", box=box.ROUNDED)
    table.add_column("Name", style="bold cyan")
    table.add_column("Value", style="white")
    table.add_column("Log Level", style="dim")
    for severity in Severity:
        table.add_row(severity.name, severity.value, logging.getLevelName(severity.log_level))
    console.print(table)


@app.command()
def show(
    path: Annotated[
        Path,
        typer.Argument(help="JSON dump of an error chain or collector")
    ],
    format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format: text, json (default: from config)")
    ] = None,
    no_baggage: Annotated[
        bool,
        typer.Option("--no-baggage", help="Hide baggage columns")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .errchain.json)")
    ] = None,
) -> None:
    """Render a dumped error trace or collector report."""
    try:
        cfg = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    output_format = format or cfg.report.format.value
    valid_formats = [f.value for f in ReportFormat]
    if output_format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{escape(output_format)}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {escape(str(path))}")
        raise typer.Exit(1)

    try:
        with open(path, encoding="utf-8") as f:
            data = jsonlib.load(f)
    except jsonlib.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(1)

    if not isinstance(data, dict):
        console.print(f"[red]Error:[/red] Expected a JSON object in {escape(str(path))}")
        raise typer.Exit(1)

    if output_format == ReportFormat.JSON.value:
        print(render_json(data))
        return

    include_baggage = cfg.report.include_baggage and not no_baggage
    TraceFormatter(console, include_baggage=include_baggage).format(data)


if __name__ == "__main__":
    app()
