"""Typer-based CLI for ArchBoard architecture diagrams."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__, config
from .cli_groups import config_grp
from .cli_setup import print_error, print_success  # also registers config commands
from .emitter import DiagramStyle
from .errors import ArchboardError
from .graph_export import RecordingAdapter, export_dot
from .layout import LAYOUTS
from .miro_client import MiroAdapter
from .orchestrator import ArchitectureOrchestrator


console = Console()

app = typer.Typer(
    help="🗺️  ArchBoard CLI: source dependency graphs drawn on a Miro board.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config_grp, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"ArchBoard CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    )
):
    """ArchBoard CLI: scan a source directory and draw its module graph."""
    pass


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _write_github_output(board_url: str) -> None:
    gh_output = os.environ.get("GITHUB_OUTPUT")
    if gh_output:
        with open(gh_output, "a", encoding="utf-8") as fh:
            fh.write(f"board_url={board_url}\n")


@app.command("generate")
def generate(
    source_dir: Path = typer.Argument(Path(config.DEFAULT_SOURCE_DIR), help="Directory of source modules to scan."),
    board_name: Optional[str] = typer.Option(None, "--board-name", "-b", help="Board title."),
    link: Optional[str] = typer.Option(None, "--link", "-l", help="External link shown under the title."),
    layout: str = typer.Option("horizontal", "--layout", help=f"Layout policy: {', '.join(LAYOUTS)}."),
    spacing: float = typer.Option(config.DEFAULT_SPACING, min=1, help="Horizontal spacing between modules."),
    api_token: Optional[str] = typer.Option(None, "--token", help="Miro API token (default: MIRO_API_TOKEN)."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Record commands instead of calling Miro."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write dry-run commands as JSON here."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
):
    """Analyze SOURCE_DIR and create an architecture diagram board."""
    _configure_logging(verbose)
    if layout not in LAYOUTS:
        raise typer.BadParameter(f"Layout must be one of: {', '.join(LAYOUTS)}")

    title = board_name or config.BOARD_NAME
    link_url = link if link is not None else config.GITHUB_URL
    token = api_token or config.MIRO_API_TOKEN

    if dry_run:
        adapter = RecordingAdapter()
    else:
        if not token:
            print_error("MIRO_API_TOKEN is required (or run 'archboard config set-token').")
            raise typer.Exit(code=1)
        adapter = MiroAdapter(token, api_url=config.MIRO_API_URL)

    orchestrator = ArchitectureOrchestrator(
        adapter,
        style=DiagramStyle.with_overrides(config.COLOR_OVERRIDES),
        layout=layout,
        spacing=spacing,
    )

    # Keep stdout pure JSON when the recorded commands are printed there.
    status_to_stderr = dry_run and output is None

    try:
        typer.echo("Analyzing codebase...", err=status_to_stderr)
        graph = orchestrator.analyze(source_dir)
        typer.echo(
            f"Found {len(graph.nodes)} modules: {', '.join(graph.module_names())}",
            err=status_to_stderr,
        )

        typer.echo(f'Creating board: "{title}"...', err=status_to_stderr)
        result = orchestrator.publish(graph, title, link_url or None)
    except ArchboardError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1)

    if dry_run:
        if output:
            adapter.write(output)
            typer.echo(f"Wrote {len(adapter.commands)} commands to {output}")
        else:
            typer.echo(adapter.to_json())

    print_success(f"Architecture diagram created: {result.summary()}", err=status_to_stderr)
    typer.echo(f"board_url={result.view_url}", err=status_to_stderr)
    _write_github_output(result.view_url)


@app.command("analyze")
def analyze(
    source_dir: Path = typer.Argument(Path(config.DEFAULT_SOURCE_DIR), help="Directory of source modules to scan."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
):
    """Show modules and dependency edges without touching any board."""
    _configure_logging(verbose)
    try:
        graph = ArchitectureOrchestrator().analyze(source_dir)
    except ArchboardError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1)

    if not graph.nodes:
        typer.echo("No source modules found.")
        raise typer.Exit(code=0)

    table = Table(title=f"Modules in {source_dir}", show_header=True)
    table.add_column("Module", style="cyan")
    table.add_column("File")
    table.add_column("Lines", justify="right")
    table.add_column("Imports")
    table.add_column("Exports")
    for name, record in graph.nodes.items():
        table.add_row(
            name,
            record.file_name,
            str(record.line_count),
            ", ".join(record.imported_names) or "-",
            ", ".join(record.exported_symbols) or "-",
        )
    console.print(table)

    console.print(f"\n[bold]Edges ({len(graph.edges)})[/bold]")
    for src, dst in graph.edges:
        console.print(f"  {src} → {dst}")
    if graph.dropped_references:
        console.print(f"\n[yellow]Dropped references ({len(graph.dropped_references)})[/yellow]")
        for ref in graph.dropped_references:
            console.print(f"  {ref.source} → {ref.target} (not scanned)")
    if graph.shadowed_records:
        console.print(f"\n[yellow]Skipped files ({len(graph.shadowed_records)})[/yellow]")
        for record in graph.shadowed_records:
            kept = graph.nodes[record.module_name].file_name
            console.print(f"  {record.file_name} (module '{record.module_name}' already taken by {kept})")


@app.command("export-graph")
def export_graph(
    source_dir: Path = typer.Argument(Path(config.DEFAULT_SOURCE_DIR), help="Directory of source modules to scan."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path."),
):
    """Export the module graph to Graphviz DOT."""
    try:
        graph = ArchitectureOrchestrator().analyze(source_dir)
    except ArchboardError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1)

    if output is None:
        output = Path.cwd() / "architecture.dot"
    export_dot(graph, output)
    typer.echo(f"Exported graph to {output}")


if __name__ == "__main__":
    app()
