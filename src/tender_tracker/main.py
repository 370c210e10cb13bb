from __future__ import annotations

import importlib
import time
from datetime import timedelta
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Blueprint, Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .auth.guards import Guards
from .auth.sessions import ServerSideSessionInterface
from .common.datetime_utils import now_utc, to_iso
from .common.http import internal_error
from .config import get_settings_module
from .container import build_container
from .core.constants import DEFAULT_API_PREFIX, DEFAULT_SESSION_DAYS, SESSION_COOKIE_NAME
from .core.enums import StorageBackend
from .core.exceptions import ConfigurationError
from .core.logging import format_request_line, get_logger, setup_logging
from .database.bootstrap import ensure_admin_user, init_schema
from .database.connection import db
from .tenders.controller import register as register_tenders
from .users.controller import register as register_users

logger = get_logger("app")


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    config = {key: getattr(settings, key) for key in dir(settings) if key.isupper()}
    config.update(overrides or {})
    config["SETTINGS_MODULE"] = settings_module
    return config


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    config = load_settings(overrides)

    setup_logging(
        level=config.get("LOG_LEVEL", "INFO"),
        log_file=config.get("LOG_FILE"),
        json_format=bool(config.get("LOG_JSON", True)),
    )

    if not config.get("SECRET_KEY"):
        raise ConfigurationError("Missing SESSION_SECRET environment variable")

    storage = StorageBackend(config.get("STORAGE_BACKEND", "database"))
    sessions = StorageBackend(config.get("SESSION_BACKEND", "memory"))
    uses_database = StorageBackend.DATABASE in (storage, sessions)
    if uses_database and not config.get("DATABASE_URL"):
        raise ConfigurationError("Missing DATABASE_URL environment variable")

    app = Flask(__name__)
    app.config.update(config)
    app.config["DEBUG"] = bool(config.get("DEBUG", False))
    app.config["SESSION_COOKIE_NAME"] = SESSION_COOKIE_NAME
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_REFRESH_EACH_REQUEST"] = True
    app.permanent_session_lifetime = timedelta(days=int(config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if uses_database:
        app.config["SQLALCHEMY_DATABASE_URI"] = config["DATABASE_URL"]
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
        db.init_app(app)

    logger.info(
        "settings=%s storage=%s sessions=%s",
        config["SETTINGS_MODULE"], storage.value, sessions.value,
    )

    container = build_container(storage=storage, sessions=sessions)
    app.extensions["tender_tracker"] = container
    app.session_interface = ServerSideSessionInterface(container.session_store)

    with app.app_context():
        if uses_database and config.get("AUTO_INIT_DB"):
            init_schema()
        if config.get("AUTO_SEED_ADMIN"):
            ensure_admin_user(
                container.users_repo,
                username=config.get("ADMIN_USERNAME", "admin"),
                password=config.get("ADMIN_PASSWORD"),
            )

    prefix = config.get("API_PREFIX") or DEFAULT_API_PREFIX
    CORS(
        app,
        resources={f"{prefix}/*": {"origins": config.get("CORS_ORIGIN", "*")}},
        supports_credentials=True,
        methods=["GET", "PUT", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Content-Length", "X-Requested-With"],
    )

    api = Blueprint("api", __name__, url_prefix=prefix)
    guards = Guards(container.users_repo)

    @api.get("/health")
    def health():
        return jsonify({"status": "ok", "timestamp": to_iso(now_utc())})

    register_users(api, container, guards)
    register_tenders(api, container, guards)
    app.register_blueprint(api)

    _register_request_logging(app, prefix)
    _register_error_handlers(app)

    return app


def _register_request_logging(app: Flask, prefix: str) -> None:
    request_logger = get_logger("requests")

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if request.path.startswith(prefix):
            started = g.get("request_started", time.perf_counter())
            duration_ms = int((time.perf_counter() - started) * 1000)
            body = response.get_json(silent=True) if response.is_json else None
            request_logger.info(
                format_request_line(request.method, request.path, response.status_code, duration_ms, body),
                extra={
                    "method": request.method,
                    "path": request.path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
        return response


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def _unhandled_error(e: Exception):
        logger.exception("Unhandled error")
        return internal_error()
