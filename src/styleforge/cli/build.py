"""CLI command: styleforge build -- compile definition files to CSS."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from styleforge.build import build as run_build
from styleforge.config import BuildConfig
from styleforge.errors import StyleError


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write CSS to this file")
@click.option("--exports", "exports_path", type=click.Path(dir_okay=False), help="Write the JSON name map here")
@click.option("--debug-ids/--no-debug-ids", default=True, help="Prefix identifiers with debug names")
@click.option("--root", type=click.Path(file_okay=False), default=None, help="Directory identifiers are relative to")
def build(
    files: tuple[str, ...],
    output: str | None,
    exports_path: str | None,
    debug_ids: bool,
    root: str | None,
) -> None:
    """Compile style definition files into one stylesheet.

    Prints the CSS to stdout unless --output is given.  Exits with code 1
    on any definition error.
    """
    config = BuildConfig(debug_ids=debug_ids)
    try:
        result = run_build(files, config, root=root)
    except StyleError as exc:
        click.echo(f"Build failed: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result.css, encoding="utf-8")
        click.echo(f"Wrote {result.rule_count} rule(s) to {output}", err=True)
    else:
        click.echo(result.css, nl=False)

    if exports_path:
        Path(exports_path).write_text(
            json.dumps(result.exports, indent=2, sort_keys=True) + "\n", encoding="utf-8"
        )
