from __future__ import annotations

from flask import Blueprint, Response, current_app

from styleforge.build import build

assets_bp = Blueprint("assets", __name__)


def run_build():
    """Rebuild the configured definition files."""
    settings = current_app.extensions["styleforge"]
    return build(settings["paths"], settings["build_config"], root=settings["root"])


@assets_bp.route("/styles.css")
def stylesheet():
    """Serve the freshly built stylesheet."""
    result = run_build()
    return Response(
        result.css,
        mimetype="text/css",
        headers={"Cache-Control": "no-store"},
    )
