"""Click CLI for Project Launcher."""

import logging
from dataclasses import dataclass
from itertools import groupby
from pathlib import Path
from typing import Optional

import click
from trogon import tui

from project_launcher import __version__
from project_launcher.catalog_file import EXPORT_FORMATS, CatalogStore, export_catalog
from project_launcher.config import HomeDirectoryError, LauncherConfig
from project_launcher.display import DisplayModel, sort_records
from project_launcher.launcher import launch, open_link
from project_launcher.models import Record


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class CliContext:
    """Objects shared by all subcommands."""

    config: LauncherConfig
    store: CatalogStore
    log_file: Optional[Path] = None


def setup_logging(verbose: bool, log_file: Optional[Path]) -> None:
    """Configure root logging for the CLI."""
    level = logging.DEBUG if verbose else logging.WARNING
    if log_file:
        logging.basicConfig(filename=str(log_file), level=level, format=LOG_FORMAT)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def _route_logs_to_textual() -> None:
    """Send log records to `textual console` instead of the painted terminal."""
    from textual.logging import TextualHandler

    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.addHandler(TextualHandler())


def find_record_index(records: list[Record], name: str) -> Optional[int]:
    """Catalog index of the first record called ``name``."""
    for index, record in enumerate(records):
        if record.name == name:
            return index
    return None


def _require_record(records: list[Record], name: str) -> int:
    index = find_record_index(records, name)
    if index is None:
        click.echo(f"Error: Project '{name}' not found.", err=True)
        raise SystemExit(1)
    return index


@tui()
@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="project-launcher")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Catalog JSON file (default: ~/.local/bin/project-launcher.json)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write logs to this file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    catalog_path: Optional[Path],
    log_file: Optional[Path],
    verbose: bool,
) -> None:
    """Project Launcher - start your development projects from one place.

    Keeps a small catalog of projects and launches their commands as
    detached background processes, on Linux or on the Windows side of WSL2.

    Quick start:
        project-launcher                  Launch interactive TUI dashboard
        project-launcher tui              Launch command explorer (Trogon)
        project-launcher projects list    List all projects
        project-launcher launch NAME      Start a project
    """
    setup_logging(verbose, log_file)
    try:
        config = LauncherConfig.load()
        # --catalog applies to this run only; it is never written to config
        store = CatalogStore(catalog_path or config.resolve_catalog_path())
    except HomeDirectoryError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    ctx.obj = CliContext(config=config, store=store, log_file=log_file)

    if ctx.invoked_subcommand is None:
        ctx.invoke(dashboard)


@cli.command()
@click.pass_obj
def dashboard(obj: CliContext) -> None:
    """Launch the interactive TUI dashboard.

    Grouped project table with launch, edit and link actions.

    Keyboard shortcuts:
        space/enter - Launch project
        e - Edit project (tab/shift+tab: next/previous field,
            enter: save, esc: cancel)
        n/a - Add project
        d/delete - Delete project
        r - Refresh from disk
        o - Open link in browser
        left/right - Scroll columns
        q - Quit
    """
    from project_launcher.tui import run_tui

    if not obj.log_file:
        _route_logs_to_textual()
    run_tui(config=obj.config, store=obj.store)


# =============================================================================
# Projects Commands - Manage the catalog
# =============================================================================


@cli.group()
def projects() -> None:
    """Manage catalog projects.

    Commands for listing, adding, removing, and inspecting projects.
    """
    pass


@projects.command("list")
@click.option("--verbose", "-v", is_flag=True, help="Show path, command and link")
@click.pass_obj
def projects_list(obj: CliContext, verbose: bool) -> None:
    """List all projects, grouped by category."""
    records = obj.store.load()
    if not records:
        click.echo("No projects configured.")
        return

    click.echo("\n📁 Projects:")
    click.echo("=" * 50)

    for category, group in groupby(sort_records(records), key=lambda r: r.display_category):
        click.echo(f"\n📂 {category}")
        for record in group:
            badge = " [🌐]" if record.link else ""
            click.echo(f"  {record.name}{badge}")
            if verbose:
                click.echo(f"    Path: {record.path}")
                click.echo(f"    Command: {record.command}")
                if record.link:
                    click.echo(f"    Link: {record.link}")

    click.echo(f"\nTotal: {len(records)} projects")


@projects.command("add")
@click.argument("name")
@click.option("--path", "-p", required=True, help="Project directory")
@click.option("--command", "-c", "command", required=True, help="Command to run in the directory")
@click.option("--link", "-l", default="", help="URL opened with 'open'")
@click.option("--category", "-g", default="", help="Category used for grouping")
@click.pass_obj
def projects_add(
    obj: CliContext,
    name: str,
    path: str,
    command: str,
    link: str,
    category: str,
) -> None:
    """Add a new project.

    NAME: Unique name for the project
    """
    model = DisplayModel(obj.store)
    if find_record_index(model.records, name) is not None:
        click.echo(f"Error: Project '{name}' already exists.", err=True)
        raise SystemExit(1)

    model.add_record(Record(name=name, path=path, command=command, link=link, category=category))
    if model.save_error:
        click.echo(f"Error: {model.save_error}", err=True)
        raise SystemExit(1)
    click.echo(f"✓ Added project: {name}")


@projects.command("remove")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_obj
def projects_remove(obj: CliContext, name: str, yes: bool) -> None:
    """Remove a project.

    NAME: Name of the project to remove
    """
    model = DisplayModel(obj.store)
    index = _require_record(model.records, name)

    if not yes:
        click.confirm(f"Remove project '{name}'?", abort=True)

    model.delete_record(index)
    if model.save_error:
        click.echo(f"Error: {model.save_error}", err=True)
        raise SystemExit(1)
    click.echo(f"✓ Removed project: {name}")


@projects.command("show")
@click.argument("name")
@click.pass_obj
def projects_show(obj: CliContext, name: str) -> None:
    """Show detailed information about a project.

    NAME: Name of the project to inspect
    """
    records = obj.store.load()
    record = records[_require_record(records, name)]

    click.echo(f"\n📦 {record.name}")
    click.echo("=" * 50)
    click.echo(f"  Category: {record.display_category}")
    click.echo(f"  Path:     {record.path}")
    click.echo(f"  Command:  {record.command}")
    click.echo(f"  Link:     {record.link or '-'}")


# =============================================================================
# Launch Commands
# =============================================================================


@cli.command("launch")
@click.argument("name")
@click.pass_obj
def launch_command(obj: CliContext, name: str) -> None:
    """Start a project's command in the background.

    NAME: Name of the project to launch
    """
    records = obj.store.load()
    record = records[_require_record(records, name)]

    config = obj.config
    outcome = launch(
        record,
        mount_root=config.mount_root,
        native_shell=config.native_shell,
        foreign_shell=config.foreign_shell,
    )
    click.echo(outcome.message, err=not outcome.ok)
    if not outcome.ok:
        raise SystemExit(1)


@cli.command("open")
@click.argument("name")
@click.pass_obj
def open_command(obj: CliContext, name: str) -> None:
    """Open a project's link in the Windows browser.

    NAME: Name of the project whose link to open
    """
    records = obj.store.load()
    record = records[_require_record(records, name)]

    outcome = open_link(record, foreign_cmd=obj.config.foreign_cmd)
    click.echo(outcome.message, err=not outcome.ok)
    if not outcome.ok:
        raise SystemExit(1)


@cli.command("export")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(EXPORT_FORMATS),
    default=None,
    help="Export format (default from config)",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to file")
@click.pass_obj
def export_command(obj: CliContext, fmt: Optional[str], output: Optional[Path]) -> None:
    """Export the catalog as YAML (grouped by category) or JSON."""
    records = obj.store.load()
    fmt = fmt or obj.config.export_format
    if fmt not in EXPORT_FORMATS:
        click.echo(f"Error: Unknown export format '{fmt}'.", err=True)
        raise SystemExit(1)

    try:
        content = export_catalog(records, fmt, output)
    except OSError as e:
        click.echo(f"Error: Could not write {output}: {e.strerror or e}", err=True)
        raise SystemExit(1)
    if output:
        click.echo(f"✓ Exported {len(records)} projects to {output}")
    else:
        click.echo(content, nl=False)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
