from __future__ import annotations

import importlib
import logging
import logging.config
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError, VerificationTimeoutError
from .database.bootstrap import apply_schema, list_tables
from .devices.controller import register as register_devices
from .settings import get_settings_module
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (VerificationTimeoutError, 408),
    (ValidationError, 400),
)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(error, cls)), 400)
        return jsonify({"error": type(error).__name__, "message": str(error)}), status


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.config.dictConfig(getattr(settings, "LOGGING"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(db_config=db_config, settings=settings)

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("Schema ready (tables=%s)", len(list_tables(container.conn)))

    app.extensions["attendance_container"] = container

    _register_error_handlers(app)
    register_attendance(app, container)
    register_devices(app, container)
    register_users(app, container)

    return app
