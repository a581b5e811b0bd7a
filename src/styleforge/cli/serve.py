"""CLI command: styleforge serve -- development server for built CSS."""

from __future__ import annotations

import click


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=5100, type=int, help="Port to bind to")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(files: tuple[str, ...], host: str, port: int, debug: bool) -> None:
    """Serve FILES as a stylesheet rebuilt on every request."""
    from styleforge.web.app import create_app

    app = create_app(list(files))
    click.echo(f"Serving {len(files)} file(s) on http://{host}:{port}/styles.css")
    app.run(host=host, port=port, debug=debug)
