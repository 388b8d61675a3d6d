"""labstuff create — build a plate and store it."""

from __future__ import annotations

from pathlib import Path

import click

from labstuff.cli.utils import console, error_handler
from labstuff.core import Plate, plate_from_layout, store


@click.command()
@click.argument("path", type=click.Path())
@click.option("--wells", "-w", type=int, default=None, help="Known plate format: 8, 48, 96 or 384.")
@click.option("--rows", type=int, default=None, help="Number of rows.")
@click.option("--cols", type=int, default=None, help="Number of columns.")
@click.option("--name", "-n", default=None, help="Plate name.")
@click.option("--type", "plate_type", default=None, help="Plate type, e.g. slide or multi-well plate.")
@click.option(
    "--layout", "-l", type=click.Path(exists=True, dir_okay=False), default=None,
    help="YAML layout describing the plate and its wells.",
)
@error_handler
def create(
    path: str,
    wells: int | None,
    rows: int | None,
    cols: int | None,
    name: str | None,
    plate_type: str | None,
    layout: str | None,
) -> None:
    """Create a plate and store it at PATH."""
    if layout:
        plate = plate_from_layout(Path(layout))
        if name:
            plate.name = name
        if plate_type:
            plate.type = plate_type
    else:
        plate = Plate(rows=rows, cols=cols, wells=wells, name=name, type=plate_type)

    out = store(plate, Path(path))
    console.print(
        f"[green]Created {plate.rows}x{plate.cols} plate "
        f"({len(plate.filled_wells)} filled wells) at {out}[/green]"
    )
