"""CLI for the module loader core."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from modloader.config import LoaderConfig, load_config
from modloader.errors import ResolutionError
from modloader.exporters import JSONExporter
from modloader.graph import DependencyGraph
from modloader.resolution import UriResolver
from modloader.session import LoadSession

console = Console()


def load_manifest(manifest_path: Path) -> Tuple[LoaderConfig, List[Dict[str, Any]]]:
    """Load a manifest: loader config keys plus a 'modules' list."""
    with open(manifest_path, "r") as f:
        data = yaml.safe_load(f) or {}

    modules = data.pop("modules", None) or []
    return LoaderConfig.from_dict(data), modules


@click.group()
@click.option("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
def main(log_level: str) -> None:
    """Module id resolution and readiness tools."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s"
    )


@main.command()
@click.argument("ids", nargs=-1, required=True)
@click.option("--config", default=None, help="Path to configuration file")
@click.option("--ref", default=None, help="Referencing location for relative ids")
def resolve(ids: Tuple[str, ...], config: Optional[str], ref: Optional[str]) -> None:
    """Resolve module ids to canonical locations."""
    cfg = load_config(config)
    if cfg.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    resolver = UriResolver(cfg)

    table = Table(title="Resolved Locations")
    table.add_column("Id", style="cyan")
    table.add_column("Location", style="green")

    failed = False
    for id in ids:
        try:
            table.add_row(escape(id), escape(resolver.resolve_id(id, ref)))
        except ResolutionError as e:
            table.add_row(escape(id), f"[red]{escape(str(e))}[/red]")
            failed = True

    console.print(table)
    if failed:
        sys.exit(1)


@main.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--out", default=None, help="Write a JSON snapshot to this path")
def check(manifest: str, out: Optional[str]) -> None:
    """Declare the modules of a manifest and report their readiness."""
    cfg, modules = load_manifest(Path(manifest))
    if cfg.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    session = LoadSession(cfg)

    errors = 0
    for entry in modules:
        try:
            session.define(
                entry.get("id"),
                entry.get("dependencies") or [],
                requested_location=entry.get("requested")
            )
        except (ResolutionError, ValueError) as e:
            console.print(f"[yellow]Warning: Failed to declare {escape(str(entry))}: {escape(str(e))}[/yellow]")
            errors += 1

    session.settle()
    graph = DependencyGraph.from_registry(session.registry)

    table = Table(title="Modules")
    table.add_column("Location", style="cyan")
    table.add_column("Ready", justify="center")
    table.add_column("Waiting For")

    for record in session.registry.records():
        waits = session.waits_for(record.id)
        table.add_row(
            escape(record.id),
            "[green]yes[/green]" if record.ready else "[red]no[/red]",
            "\n".join(escape(location) for location in waits)
        )

    console.print(table)

    stats = session.registry.get_stats()
    console.print(
        f"✓ {stats['ready_modules']} ready, {stats['pending_modules']} pending, "
        f"{stats['guest_modules']} packaged guests"
    )

    for cycle in graph.find_cycles():
        path = " -> ".join(cycle + cycle[:1])
        console.print(f"[yellow]Cycle: {escape(path)}[/yellow]")
    for location in graph.missing_locations():
        console.print(f"[dim]Not declared: {escape(location)}[/dim]")

    if out:
        JSONExporter().export(session.registry, Path(out), graph)
        console.print(f"[dim]Snapshot saved to: {Path(out).absolute()}[/dim]")

    if errors or session.pending():
        sys.exit(1)


if __name__ == "__main__":
    main()
