from __future__ import annotations

import importlib
import logging
from typing import Optional

import mysql.connector
from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import DomainError, PersistenceError
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .leaves.controller import register as register_leaves
from .network.controller import register as register_network
from .schedules.controller import register as register_schedules
from .settings import get_settings_module

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. ``container`` replaces the MySQL-backed wiring (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if getattr(settings, "TRUST_PROXY", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, settings=settings)

    register_error_handlers(app)

    register_attendance(app, container)
    register_dashboard(app, container)
    register_schedules(app, container)
    register_leaves(app, container)
    register_network(app, container)

    return app


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify(e.to_dict()), e.http_status

    @app.errorhandler(mysql.connector.Error)
    def handle_database_error(e: mysql.connector.Error):
        logger.exception("Database error")
        err = PersistenceError("Database error, please try again later")
        return jsonify(err.to_dict()), err.http_status
