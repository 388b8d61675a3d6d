"""labstuff CLI — top-level Click group."""

from __future__ import annotations

import click


@click.group()
@click.version_option(package_name="labstuff")
@click.option("--verbose", "-v", is_flag=True, help="Show full tracebacks on errors.")
def cli(verbose: bool) -> None:
    """labstuff — sample plates, wells and treatments."""
    from labstuff.cli import utils

    utils.verbose = verbose


def _register_commands() -> None:
    """Register all subcommands."""
    from labstuff.cli.create import create
    from labstuff.cli.replicate import replicate
    from labstuff.cli.show import show

    cli.add_command(create)
    cli.add_command(replicate)
    cli.add_command(show)


_register_commands()
