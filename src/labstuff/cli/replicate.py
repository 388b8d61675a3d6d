"""labstuff replicate — store copies of a plate."""

from __future__ import annotations

from pathlib import Path

import click

from labstuff.cli.utils import console, error_handler, open_plate
from labstuff.core import store
from labstuff.core.store import SUFFIX


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--number", "-n", type=click.IntRange(min=1), required=True,
              help="Number of replicates to create.")
@click.option(
    "--output-dir", "-o", type=click.Path(file_okay=False), default=None,
    help="Directory for the replicates (defaults to the plate's directory).",
)
@error_handler
def replicate(path: str, number: int, output_dir: str | None) -> None:
    """Store NUMBER replicates of the plate at PATH."""
    plate = open_plate(path)
    src = Path(path)
    out_dir = Path(output_dir) if output_dir else src.parent
    out_dir.mkdir(parents=True, exist_ok=True)

    for i, rep in enumerate(plate.replicate(number), start=1):
        out = store(rep, out_dir / f"{src.stem}_rep{i}{SUFFIX}")
        console.print(f"  {out}")
    console.print(f"[green]Created {number} replicate(s) of {src.name}[/green]")
