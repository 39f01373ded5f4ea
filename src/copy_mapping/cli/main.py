"""``copy-mapping`` command line.

Usage:
    copy-mapping sync                  # Copy mapped paths of all packages
    copy-mapping sync --dry-run        # Show what would be copied
    copy-mapping plan                  # Table of planned actions
    copy-mapping remove acme/widgets   # Delete a package's copied paths

Packages, the root extra block and the vendor directory are read from a
manifest file (``--manifest``, default ``copy-mapping.yaml``). Debug lines
describing every copy, skip and delete are shown with ``--debug``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from copy_mapping import __version__
from copy_mapping.core.errors import HostConfigError
from copy_mapping.host.manifest import ManifestHost
from copy_mapping.sync.plan import ActionKind
from copy_mapping.sync.synchronizer import MappingSynchronizer, SyncReport

app = typer.Typer(
    name="copy-mapping",
    help="Copy files declared by installed packages into the project tree.",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()

DEFAULT_MANIFEST = Path("copy-mapping.yaml")


def setup_logging(debug: bool) -> None:
    """Route library log records through rich; debug lines only with --debug."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    logging.getLogger("copy_mapping").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"copy-mapping {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    manifest: Path = typer.Option(
        DEFAULT_MANIFEST,
        "--manifest",
        "-m",
        envvar="COPY_MAPPING_MANIFEST",
        help="Manifest listing installed packages and the root extra block",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        envvar="COPY_MAPPING_DEBUG",
        help="Show debug output for every copy, skip and delete",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Copy files declared by installed packages into the project tree."""
    setup_logging(debug)
    ctx.obj = {"manifest": manifest}


def _load_host(ctx: typer.Context) -> ManifestHost:
    manifest: Path = ctx.obj["manifest"]
    try:
        return ManifestHost.from_file(manifest)
    except HostConfigError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)


def _print_summary(report: SyncReport) -> None:
    verb = "Would copy" if report.dry_run else "Copied"
    console.print(
        f"{verb} {len(report.copied)} file(s) for {len(report.packages)} package(s); "
        f"{len(report.skipped)} existing file(s) kept, "
        f"{len(report.ensured)} director(ies) ensured."
    )
    for name, reason in report.rejected.items():
        console.print(f"  [yellow]skipped {name}:[/yellow] {reason}")


def _render_plan(report: SyncReport) -> Table:
    table = Table(title="Planned Actions", show_lines=False)
    table.add_column("Action", style="cyan")
    table.add_column("Source", style="dim")
    table.add_column("Target", style="bold")
    colors = {
        ActionKind.COPY_FILE: "green",
        ActionKind.ENSURE_DIR: "blue",
        ActionKind.SKIP_EXISTING: "yellow",
        ActionKind.REMOVE_FILE: "red",
        ActionKind.REMOVE_TREE: "red",
    }
    for action in report.actions:
        color = colors.get(action.kind, "white")
        table.add_row(
            f"[{color}]{action.kind.value}[/{color}]",
            str(action.source) if action.source is not None else "",
            str(action.target),
        )
    return table


@app.command()
def sync(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Plan only, do not touch the filesystem"),
) -> None:
    """Copy the mapped paths of every installed package."""
    synchronizer = MappingSynchronizer(_load_host(ctx))
    try:
        if dry_run:
            report = synchronizer.sync_all(dry_run=True)
        else:
            report = synchronizer.on_packages_updated()
    except OSError as exc:
        console.print(f"[red]Filesystem error:[/red] {exc}")
        raise typer.Exit(1)
    _print_summary(report)


@app.command()
def plan(ctx: typer.Context) -> None:
    """Show the actions a sync would perform."""
    synchronizer = MappingSynchronizer(_load_host(ctx))
    try:
        report = synchronizer.sync_all(dry_run=True)
    except OSError as exc:
        console.print(f"[red]Filesystem error:[/red] {exc}")
        raise typer.Exit(1)
    if not report.actions:
        console.print("[dim]Nothing to copy.[/dim]")
    else:
        console.print(_render_plan(report))
    for name, reason in report.rejected.items():
        console.print(f"  [yellow]skipped {name}:[/yellow] {reason}")


@app.command()
def remove(
    ctx: typer.Context,
    package_name: str = typer.Argument(..., help="Name of the uninstalled package"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Plan only, do not touch the filesystem"),
) -> None:
    """Delete the paths previously copied for a package."""
    host = _load_host(ctx)
    package = host.find_package(package_name)
    if package is None:
        console.print(f"[red]Error:[/red] Package {package_name} is not listed in the manifest")
        raise typer.Exit(1)

    synchronizer = MappingSynchronizer(host)
    try:
        if dry_run:
            report = synchronizer.remove(package, dry_run=True)
        else:
            report = synchronizer.on_package_removed(package)
    except OSError as exc:
        console.print(f"[red]Filesystem error:[/red] {exc}")
        raise typer.Exit(1)

    verb = "Would remove" if dry_run else "Removed"
    console.print(f"{verb} {len(report.removed)} path(s) for {package.name}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
