"""Lightweight health probe endpoint.

Exposes /healthz returning a fast 200 for container / LB health checks, or 500
when the configured database does not answer.
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from bookshelf.routes.common import get_services
from bookshelf.utils.logging import get_logger

LOG = get_logger("health")

bp = Blueprint("health", __name__)


@bp.route("/healthz", methods=["GET"])  # simple, cache-friendly
def healthz():
    services = get_services()
    db_ok = services.storage_ok()
    status_code = 200 if db_ok else 500
    return jsonify({
        "status": "ok" if db_ok else "degraded",
        "storage": services.storage,
        "db": db_ok,
    }), status_code


def register_health(app: Any) -> None:
    if "health" in app.blueprints:  # idempotent
        return
    app.register_blueprint(bp)
    LOG.debug("health blueprint registered")


__all__ = ["register_health"]
