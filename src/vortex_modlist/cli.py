"""Command-line interface for vortex-modlist."""

import logging
import sys
from collections import Counter
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from vortex_modlist.config import settings
from vortex_modlist.errors import SnapshotError
from vortex_modlist.export.writers import ExportFormat, write_export
from vortex_modlist.models.records import ModRecord
from vortex_modlist.services.pipeline import ModListPipeline
from vortex_modlist.snapshot.loader import SnapshotLoader

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _summary_table(records: list[ModRecord]) -> Table:
    table = Table(title="Exported mods")
    table.add_column("Game", style="cyan")
    table.add_column("Mods", justify="right")
    table.add_column("Enabled", justify="right", style="green")
    table.add_column("Multi-part", justify="right", style="blue")
    table.add_column("No homepage", justify="right", style="yellow")

    totals: Counter[str] = Counter()
    enabled: Counter[str] = Counter()
    merged: Counter[str] = Counter()
    missing_page: Counter[str] = Counter()
    for r in records:
        totals[r.game] += 1
        enabled[r.game] += r.enabled
        merged[r.game] += r.part_count > 1
        missing_page[r.game] += not r.homepage

    for game in totals:
        table.add_row(
            game,
            str(totals[game]),
            str(enabled[game]),
            str(merged[game]),
            str(missing_page[game]),
        )
    return table


snapshot_option = click.option(
    "--snapshot",
    "snapshot_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read this backup file instead of the newest one in the snapshot directory",
)


def _pipeline(ctx: click.Context, snapshot_path: Path | None) -> ModListPipeline:
    """Pipeline for a subcommand; its own --snapshot overrides the group's."""
    path = snapshot_path or ctx.obj.get("snapshot_path")
    loader = SnapshotLoader(settings.snapshot_dir, settings.snapshot_glob, path=path)
    return ModListPipeline(loader)


@click.group()
@snapshot_option
@click.option(
    "--log-level",
    default=None,
    help="Logging level (or set VML_LOG_LEVEL env var)",
)
@click.pass_context
def main(ctx: click.Context, snapshot_path: Path | None, log_level: str | None) -> None:
    """Export the mod list from a Vortex state backup."""
    _configure_logging(log_level or settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["snapshot_path"] = snapshot_path


@main.command()
@snapshot_option
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in ExportFormat]),
    default=ExportFormat.CSV.value,
    show_default=True,
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: vortex_modlist.<format> in the output directory)",
)
@click.option("--game", help="Only export mods for this game id")
@click.option("--enabled-only", is_flag=True, help="Skip mods disabled in the active profile")
@click.pass_context
def export(
    ctx: click.Context,
    snapshot_path: Path | None,
    fmt: str,
    output: Path | None,
    game: str | None,
    enabled_only: bool,
) -> None:
    """Write the normalized mod list to CSV or JSON."""
    pipeline = _pipeline(ctx, snapshot_path)
    export_format = ExportFormat(fmt)
    try:
        records = pipeline.run(game=game, enabled_only=enabled_only)
    except SnapshotError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if not records:
        console.print("[yellow]No mods matched; nothing written.[/yellow]")
        return

    target = output or settings.output_dir / f"vortex_modlist.{export_format.value}"
    write_export(records, target, export_format)
    console.print(_summary_table(records))
    console.print(f"[green]Wrote {len(records)} mods to {target}[/green]")


@main.command()
@snapshot_option
@click.pass_context
def games(ctx: click.Context, snapshot_path: Path | None) -> None:
    """List games present in the snapshot."""
    pipeline = _pipeline(ctx, snapshot_path)
    try:
        counts = pipeline.games()
    except SnapshotError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    table = Table(title="Games in snapshot")
    table.add_column("Game", style="cyan")
    table.add_column("Installed entries", justify="right")
    for game, count in counts.items():
        table.add_row(game, str(count))
    console.print(table)


if __name__ == "__main__":
    main()
