"""
Command API routes — install/uninstall command generation.

POST /api/generate    → install commands for {distroSlug, appIds, ...}
POST /api/uninstall   → uninstall commands (+ optional cleanup)
GET  /api/distros     → distributions known to the catalog
"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from distrocmd.core.config.catalog_loader import ConfigError
from distrocmd.core.errors import EngineError
from distrocmd.core.services.command_engine import (
    generate_install_commands,
    generate_uninstall_commands,
)
from distrocmd.ui.web.server import get_reader

logger = logging.getLogger(__name__)

commands_bp = Blueprint("commands", __name__)


def _error(message: str, status: int):  # type: ignore[no-untyped-def]
    return jsonify({"error": message}), status


# ── Install ─────────────────────────────────────────────────────────


@commands_bp.route("/generate", methods=["POST"])
def api_generate():  # type: ignore[no-untyped-def]
    """Generate install commands."""
    payload = request.get_json(silent=True)
    try:
        result = generate_install_commands(get_reader(), payload)
    except EngineError as e:
        return _error(str(e), e.status_code)
    except ConfigError as e:
        logger.error("Catalog unavailable: %s", e)
        return _error("Catalog unavailable", 500)
    return jsonify(result.to_dict())


# ── Uninstall ───────────────────────────────────────────────────────


@commands_bp.route("/uninstall", methods=["POST"])
def api_uninstall():  # type: ignore[no-untyped-def]
    """Generate uninstall commands."""
    payload = request.get_json(silent=True)
    try:
        result = generate_uninstall_commands(get_reader(), payload)
    except EngineError as e:
        return _error(str(e), e.status_code)
    except ConfigError as e:
        logger.error("Catalog unavailable: %s", e)
        return _error("Catalog unavailable", 500)
    return jsonify(result.to_dict())


# ── Distros ─────────────────────────────────────────────────────────


@commands_bp.route("/distros")
def api_distros():  # type: ignore[no-untyped-def]
    """List distributions."""
    try:
        distros = get_reader().list_distros()
    except ConfigError as e:
        logger.error("Catalog unavailable: %s", e)
        return _error("Catalog unavailable", 500)
    return jsonify({
        "distros": [
            {"slug": d.slug, "name": d.name, "family": d.family, "basedOn": d.based_on}
            for d in distros
        ],
    })
