"""styleforge CLI entry point: Click group with subcommands."""

import logging

import click

from styleforge import __version__


@click.group()
@click.version_option(version=__version__, prog_name="styleforge")
@click.option("-v", "--verbose", is_flag=True, help="Log identifier allocation and registration")
def cli(verbose: bool) -> None:
    """styleforge - compile Python style definitions into static CSS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from styleforge.cli.build import build  # noqa: E402
from styleforge.cli.calc import calc  # noqa: E402
from styleforge.cli.inspect import inspect  # noqa: E402
from styleforge.cli.serve import serve  # noqa: E402

cli.add_command(build)
cli.add_command(inspect)
cli.add_command(calc)
cli.add_command(serve)
