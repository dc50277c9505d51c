"""
API server — Flask app factory.

Creates the Flask application that exposes the command engine as a
small JSON API. The catalog file is re-read when it changes on disk,
so admin edits show up without a restart.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, current_app, jsonify

from distrocmd.adapters.base import CatalogReader
from distrocmd.core.config.catalog_loader import CatalogFile

logger = logging.getLogger(__name__)

_EXTENSION_KEY = "distrocmd"


def create_app(
    catalog_path: Path | None = None,
    reader: CatalogReader | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        catalog_path: Path to catalog.yml, watched for changes.
        reader: Fixed catalog reader (tests). Wins over ``catalog_path``.

    Returns:
        Configured Flask application.
    """
    if catalog_path is None and reader is None:
        raise ValueError("create_app needs a catalog_path or a reader")

    app = Flask(__name__)

    app.config["CATALOG_PATH"] = str(catalog_path) if catalog_path else None
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024  # request bodies are small JSON
    app.extensions[_EXTENSION_KEY] = {
        "reader": reader,
        "catalog_file": CatalogFile(Path(catalog_path)) if catalog_path and reader is None else None,
    }

    # Register blueprints
    from distrocmd.ui.web.routes_commands import commands_bp

    app.register_blueprint(commands_bp, url_prefix="/api")

    @app.errorhandler(404)
    def _not_found(e):  # type: ignore[no-untyped-def]
        return jsonify({"error": "Not found"}), 404

    logger.info("API app created (catalog=%s)", catalog_path or getattr(reader, "name", "?"))
    return app


def get_reader() -> CatalogReader:
    """The catalog reader for the current request.

    Raises:
        ConfigError: If the watched catalog file cannot be loaded.
    """
    state = current_app.extensions[_EXTENSION_KEY]
    if state["reader"] is not None:
        return state["reader"]
    return state["catalog_file"].current()


def run_server(
    app: Flask,
    host: str = "127.0.0.1",
    port: int = 8000,
    debug: bool = False,
) -> None:
    """Run the Flask development server."""
    logger.info("Starting API server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False)
