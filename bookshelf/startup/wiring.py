"""Application initialization / wiring.

Orchestrates: service graph construction, optional sample seeding, route
registration. Services are stored on ``app.extensions["bookshelf"]``.
"""
from __future__ import annotations

from typing import Any, Optional

from flask import Flask

from bookshelf import config as app_config
from bookshelf.routes import register_all as register_routes
from bookshelf.routes.common import EXTENSION_KEY
from bookshelf.services.container import Services, build_services
from bookshelf.services.sample_data import seed_sample_catalog
from bookshelf.utils.logging import get_logger

LOG = get_logger("bookshelf.startup")


def init_app(app: Any, services: Optional[Services] = None, *, storage: Optional[str] = None) -> Services:
    LOG.debug("init_app starting")
    app.config.setdefault("SECRET_KEY", app_config.secret_key())
    if services is None:
        services = build_services(storage)
    app.extensions[EXTENSION_KEY] = services
    LOG.debug("Services attached storage=%s", services.storage)

    if app_config.seed_sample_enabled():
        seed_sample_catalog(services)

    register_routes(app)
    LOG.info("App startup wiring complete %s", app_config.summarize_runtime_config())
    return services


def create_app(services: Optional[Services] = None, *, storage: Optional[str] = None) -> Flask:
    app = Flask(app_config.APP_NAME)
    app.config["SECRET_KEY"] = app_config.secret_key()
    app.json.sort_keys = False
    init_app(app, services, storage=storage)
    return app


__all__ = ["init_app", "create_app"]
