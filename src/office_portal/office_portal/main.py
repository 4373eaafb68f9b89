from __future__ import annotations

import importlib
import logging
import sqlite3

from dotenv import load_dotenv
from flask import Flask, g, render_template

from config import get_settings_module

from .common.cancellation import CancellationToken
from .common.csrf import install_csrf
from .core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from .core.exceptions import OperationCancelled
from .container import build_container
from .database.bootstrap import ensure_tables_exist, list_tables, seed_demo_data
from .employees.controller import register as register_employees
from .events.controller import register as register_events
from .home.controller import register as register_home

logger = logging.getLogger(__name__)

_SETTING_NAMES = (
    "SECRET_KEY",
    "DB_CONFIG",
    "DEBUG",
    "TESTING",
    "CSRF_ENABLED",
    "AUTO_SEED_DB",
    "REQUEST_TIMEOUT_SECONDS",
)


def _load_settings(overrides: dict) -> dict:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in _SETTING_NAMES if hasattr(settings, name)}
    values.update(overrides)
    values["SETTINGS_MODULE"] = settings_module
    return values


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(_error):
        return render_template("404.html"), 404

    @app.errorhandler(sqlite3.Error)
    def storage_error(error):
        logger.exception("Storage failure while handling request: %s", error)
        return render_template("error.html"), 500

    @app.errorhandler(OperationCancelled)
    def cancelled(_error):
        # Client is gone or the deadline passed; nobody reads this body.
        logger.info("Request cancelled before the store operation finished")
        return "", 499


def create_app(**overrides) -> Flask:
    """Application factory.

    Keyword arguments override values from the settings module selected by
    ``APP_ENV`` (e.g. ``create_app(DB_CONFIG={"path": tmp_db})`` in tests).
    """

    load_dotenv(override=False)
    settings = _load_settings(overrides)

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["CSRF_ENABLED"] = bool(settings.get("CSRF_ENABLED", True))
    app.config["REQUEST_TIMEOUT_SECONDS"] = settings.get("REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS)

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = dict(settings["DB_CONFIG"])
    logger.info("settings=%s db=%s", settings["SETTINGS_MODULE"], db_config.get("path"))

    container = build_container(db_config=db_config)

    # Must succeed before any route exists; errors propagate to the caller.
    ensure_tables_exist(container)
    logger.info("schema ready (tables=%s)", len(list_tables(container.provider)))

    if settings.get("AUTO_SEED_DB"):
        seed_demo_data(container)

    app.extensions["office_portal"] = container

    @app.before_request
    def _attach_cancellation():
        g.cancellation = CancellationToken.with_timeout(app.config["REQUEST_TIMEOUT_SECONDS"])

    install_csrf(app)
    _register_error_handlers(app)

    register_home(app, container)
    register_employees(app, container)
    register_events(app, container)

    return app
