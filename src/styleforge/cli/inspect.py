"""CLI command: styleforge inspect -- show generated names per file."""

from __future__ import annotations

import sys

import click

from styleforge.build import build as run_build
from styleforge.errors import StyleError


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--root", type=click.Path(file_okay=False), default=None, help="Directory identifiers are relative to")
def inspect(files: tuple[str, ...], root: str | None) -> None:
    """Build FILES and list the names each one exports."""
    try:
        result = run_build(files, root=root)
    except StyleError as exc:
        click.echo(f"Build failed: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Files: {len(result.exports)}")
    click.echo(f"Rules: {result.rule_count}")
    for origin, exports in result.exports.items():
        click.echo()
        click.echo(f"{origin}:")
        if not exports:
            click.echo("  (no exports)")
        for name, value in exports.items():
            if isinstance(value, str):
                click.echo(f"  {name} = {value}")
            else:
                click.echo(f"  {name} = <{type(value).__name__} with {len(value)} entries>")

    if result.class_map:
        click.echo()
        click.echo("Debug ids:")
        for identifier, label in result.class_map.items():
            click.echo(f"  {identifier} <- {label}")
