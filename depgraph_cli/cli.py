"""Typer-based CLI for DepGraph native dependency resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__, config_manager
from .classifier import SystemPolicy
from .dumpbin import DumpbinReporter, find_dumpbin
from .errors import DepGraphError
from .graph_export import export_dot, export_json
from .models import ResolveOptions
from .render import print_table, print_tree
from .resolver import GraphResolver

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="🔗 DepGraph CLI — transitive native dependency graphs from dumpbin reports.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ── Configuration group ──────────────────────────────────────
config_app = typer.Typer(
    help="⚙️  Configuration — dumpbin location, timeout and filters.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"DepGraph CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log every probe and skip decision."),
):
    """DepGraph CLI: find out which DLLs a binary really pulls in, and from where."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _tool_path(explicit: Optional[Path], settings: config_manager.Settings) -> Path:
    if explicit is not None:
        return explicit
    if settings.dumpbin_path is not None:
        return settings.dumpbin_path
    return find_dumpbin()


@app.command("resolve")
def resolve(
    target: Path = typer.Argument(..., help="Binary to calculate dependencies for."),
    dumpbin: Optional[Path] = typer.Option(None, "--dumpbin", help="Path to dumpbin.exe."),
    show_system: Optional[bool] = typer.Option(
        None, "--show-system/--hide-system", "-s", help="Show or hide system libraries (default: from config)."
    ),
    tree_print: Optional[bool] = typer.Option(
        None, "--tree/--table", "-d", help="Print dependencies as a tree or a table (default: from config)."
    ),
    show_repeats: bool = typer.Option(
        False, "--show-repeats", help="Mark modules already listed elsewhere instead of omitting them."
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Seconds to wait for each dumpbin run."),
    dot_file: Optional[Path] = typer.Option(None, "--export-dot", help="Also write the graph as Graphviz DOT."),
    json_file: Optional[Path] = typer.Option(None, "--export-json", help="Also write the tree as JSON."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the summary line."),
):
    """Resolve the transitive DLL dependencies of TARGET.

    [bold]Examples:[/bold]
      depgraph resolve build/app.exe
      depgraph resolve build/app.exe --tree --show-system
      depgraph resolve build/app.exe --export-dot deps.dot
    """
    settings = config_manager.load_settings()
    options = ResolveOptions(
        show_system=settings.show_system if show_system is None else show_system,
        show_repeats=show_repeats,
    )
    policy = SystemPolicy.with_extras(settings.name_prefixes, settings.path_patterns)

    try:
        tool = _tool_path(dumpbin, settings)
        reporter = DumpbinReporter(tool, timeout=timeout if timeout is not None else settings.timeout)
        resolver = GraphResolver(reporter, options=options, policy=policy)
        root = resolver.resolve(target, search_dir=target.parent)
    except DepGraphError as exc:
        err_console.print(f"[red]✗ {escape(str(exc))}[/red]")
        logger.debug("Resolution failed", exc_info=True)
        raise typer.Exit(code=1)

    as_tree = settings.tree if tree_print is None else tree_print
    if as_tree:
        print_tree(root, console)
    else:
        print_table(root, console)

    try:
        if dot_file is not None:
            export_dot(root, dot_file)
            console.print(f"Exported DOT graph to {escape(str(dot_file))}")
        if json_file is not None:
            export_json(root, json_file)
            console.print(f"Exported JSON tree to {escape(str(json_file))}")
    except OSError as exc:
        err_console.print(f"[red]✗ Export failed: {escape(str(exc))}[/red]")
        logger.debug("Export failed", exc_info=True)
        raise typer.Exit(code=1)

    if not quiet:
        console.print(f"\n[dim]{resolver.stats.summary()}[/dim]")


@app.command("find-dumpbin")
def find_dumpbin_cmd():
    """Locate dumpbin.exe on PATH or in the Visual Studio install roots."""
    try:
        tool = find_dumpbin()
    except DepGraphError as exc:
        err_console.print(f"[red]✗ {escape(str(exc))}[/red]")
        raise typer.Exit(code=1)
    typer.echo(str(tool))


@config_app.command("show")
def config_show():
    """Show the effective configuration."""
    settings = config_manager.load_settings()

    table = Table(title="DepGraph Configuration", show_header=True, show_lines=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Config file", str(config_manager.CONFIG_FILE))
    table.add_row("dumpbin", str(settings.dumpbin_path) if settings.dumpbin_path else "auto-detect")
    table.add_row("Timeout", f"{settings.timeout:g}s")
    table.add_row("Show system", "yes" if settings.show_system else "no")
    table.add_row("Tree output", "yes" if settings.tree else "no")
    table.add_row("Extra name prefixes", ", ".join(settings.name_prefixes) or "-")
    table.add_row("Extra path patterns", ", ".join(settings.path_patterns) or "-")
    console.print(table)


@config_app.command("set-dumpbin")
def config_set_dumpbin(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to dumpbin.exe."),
):
    """Remember where dumpbin.exe lives."""
    if not config_manager.save_dumpbin_path(path.resolve()):
        err_console.print("[red]✗ Failed to save configuration![/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] dumpbin set to {path.resolve()}")


@config_app.command("set-timeout")
def config_set_timeout(
    seconds: float = typer.Argument(..., min=0.1, help="Seconds to wait for each dumpbin run."),
):
    """Set how long a single dumpbin run may take."""
    if not config_manager.save_timeout(seconds):
        err_console.print("[red]✗ Failed to save configuration![/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Timeout set to {seconds:g}s")


@config_app.command("reset")
def config_reset():
    """Delete the config file and go back to defaults."""
    if not config_manager.clear_config():
        err_console.print("[red]✗ Failed to reset configuration![/red]")
        raise typer.Exit(code=1)
    console.print("[green]✓[/green] Configuration reset to defaults.")


if __name__ == "__main__":
    app()
