from __future__ import annotations

from flask import Flask, jsonify

from styleforge.config import BuildConfig
from styleforge.errors import StyleError


def create_app(
    paths: list[str] | None = None,
    config: dict | None = None,
    build_config: BuildConfig | None = None,
) -> Flask:
    """Create and configure the development server app."""
    app = Flask(__name__)
    app.config.update(config or {})

    # Stored on the app for access in routes
    app.extensions["styleforge"] = {
        "paths": list(paths or []),
        "build_config": build_config or BuildConfig(),
        "root": app.config.get("STYLEFORGE_ROOT"),
    }

    @app.errorhandler(StyleError)
    def handle_style_error(exc: StyleError):
        return jsonify({"error": str(exc), "kind": type(exc).__name__}), 500

    # Register blueprints
    from styleforge.web.routes.api import api_bp
    from styleforge.web.routes.assets import assets_bp

    app.register_blueprint(assets_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

    return app
