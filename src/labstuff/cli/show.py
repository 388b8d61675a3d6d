"""labstuff show — inspect a stored plate."""

from __future__ import annotations

import csv
import io
import json

import click
from rich.table import Table

from labstuff.cli.utils import console, describe, error_handler, open_plate
from labstuff.core import Plate, Well

_COLUMNS = ("position", "label", "samples", "treatments", "reporters")


def _well_row(well: Well) -> dict[str, str]:
    return {
        "position": well.position,
        "label": well.label or "",
        "samples": describe(well.samples),
        "treatments": describe(well.treatments),
        "reporters": describe(well.reporters),
    }


def _print_table(plate: Plate, rows: list[dict[str, str]]) -> None:
    table = Table(show_header=True, title=f"Wells of {plate.name or 'unnamed plate'}")
    table.add_column("position", style="bold")
    for col in _COLUMNS[1:]:
        table.add_column(col)
    for row in rows:
        table.add_row(*(row[c] for c in _COLUMNS))
    console.print(table)


def _print_csv(rows: list[dict[str, str]]) -> None:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    console.print(buf.getvalue().rstrip(), soft_wrap=True)


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--filled", is_flag=True, help="Only list wells that hold a sample.")
@click.option("--format", "fmt", type=click.Choice(["table", "csv", "json"]),
              default="table", help="Output format.")
@error_handler
def show(path: str, filled: bool, fmt: str) -> None:
    """Show the wells of the plate stored at PATH."""
    plate = open_plate(path)
    wells = plate.filled_wells if filled else plate.wells

    if fmt == "table":
        console.print(
            f"[bold]{plate.name or 'Unnamed plate'}[/bold] "
            f"{plate.type or ''} {plate.rows}x{plate.cols}, "
            f"{len(plate.filled_wells)} filled, {len(plate.data)} data file(s)"
        )

    if not wells:
        console.print("[dim]No wells to show.[/dim]")
        return

    rows = [_well_row(w) for w in wells]
    if fmt == "table":
        _print_table(plate, rows)
    elif fmt == "csv":
        _print_csv(rows)
    else:
        console.print(json.dumps(rows, indent=2), soft_wrap=True)
