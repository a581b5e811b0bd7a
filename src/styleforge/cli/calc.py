"""CLI command: styleforge calc -- canonicalize a calc() expression."""

from __future__ import annotations

import sys

import click

from styleforge.calc import CalcChain, parse_calc
from styleforge.errors import InvalidCalcOperands


@click.command()
@click.argument("expression")
def calc(expression: str) -> None:
    """Parse EXPRESSION and print its fully parenthesized calc() form."""
    try:
        node = parse_calc(expression)
    except InvalidCalcOperands as exc:
        click.echo(f"Invalid calc expression: {exc}", err=True)
        sys.exit(1)
    click.echo(str(CalcChain(node)))
