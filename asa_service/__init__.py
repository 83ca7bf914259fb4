"""
project: ASA Service
module: __init__.py
https://github.com/asa-service/asa-service
License: MIT

Flask application factory and core extensions setup.

``create_app`` wires together the Flask app, Flask-SQLAlchemy, CORS, rate
limiting, JSON error handlers and the API blueprints. Configuration comes from
a ``Settings`` instance (see ``asa_service.config``). Without a database URL
(or with ``SKIP_DATABASE``) the app serves the bundled mock data instead.
"""

import logging
import uuid

from flask import Flask, current_app, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

__version__ = "1.2.0"

db = SQLAlchemy(session_options={"expire_on_commit": False})

from flask_cors import CORS  # noqa: E402

from .config import Settings  # noqa: E402
from .context import AppContext  # noqa: E402
from .database import DatabaseInitializer  # noqa: E402
from .logging_utils import get_logger  # noqa: E402
from .rate_limit import RateLimiter  # noqa: E402
from .repositories import MockRepository, SqlRepository  # noqa: E402
from .routes import available_endpoints, register_blueprints  # noqa: E402
from .services import JobQueue  # noqa: E402
from .validation import ValidationError  # noqa: E402

log = get_logger("asa_service")

# PostgreSQL SQLSTATE -> HTTP status for constraint violations
PG_ERROR_STATUS = {"23505": 409, "23503": 400, "23502": 400}


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        # Request threads and the population worker share the file
        return {"connect_args": {"timeout": 10, "check_same_thread": False}}
    return {"pool_size": 20, "pool_pre_ping": True, "pool_recycle": 1800}


def _set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=10000")
    cursor.close()


def get_context(app=None) -> AppContext:
    return (app or current_app).extensions["asa_service"]


def create_app(settings: Settings = None) -> Flask:
    settings = settings or Settings.from_env()
    app = Flask(__name__)
    app.config.update(
        ENV_NAME=settings.environment,
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
    )
    app.json.sort_keys = False

    if settings.use_mock_data:
        ctx = AppContext(settings=settings, repository=MockRepository(), database_status="skipped")
        log.info(event="mock_mode", reason="database disabled")
    else:
        app.config["SQLALCHEMY_DATABASE_URI"] = settings.database_url
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _engine_options(settings.database_url)
        db.init_app(app)
        if settings.database_url.startswith("sqlite"):
            with app.app_context():
                event.listen(db.engine, "connect", _set_sqlite_pragma)
        ctx = AppContext(settings=settings, repository=SqlRepository(), database_status="configured")
        ctx.jobs = JobQueue(app, lambda: ctx.population())
        ctx.initializer = DatabaseInitializer(settings, lambda: ctx.population())
    app.extensions["asa_service"] = ctx

    CORS(app, origins=settings.cors_origin)
    if settings.enable_rate_limiting:
        RateLimiter(settings.rate_limit_max_requests, settings.rate_limit_window_ms / 1000).init_app(app)

    register_blueprints(app, ctx)
    _register_error_handlers(app, settings)
    return app


def _register_error_handlers(app: Flask, settings: Settings) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(err: ValidationError):
        return jsonify(err.to_dict()), 400

    @app.errorhandler(404)
    def _not_found(err):
        return (
            jsonify(
                success=False,
                error="Endpoint not found",
                path=request.path,
                available_endpoints=available_endpoints(),
            ),
            404,
        )

    @app.errorhandler(HTTPException)
    def _http_error(err: HTTPException):
        return jsonify(success=False, error=err.description), err.code

    @app.errorhandler(SQLAlchemyError)
    def _database_error(err: SQLAlchemyError):
        db.session.rollback()
        code = getattr(getattr(err, "orig", None), "pgcode", None)
        status = PG_ERROR_STATUS.get(code, 500)
        log.error(event="database_error", path=request.path, pgcode=code, error=str(err).splitlines()[0])
        if status == 500 and settings.is_production:
            message = "Internal server error"
        else:
            message = str(getattr(err, "orig", None) or err).splitlines()[0]
        return jsonify(success=False, error=message), status

    @app.errorhandler(Exception)
    def _internal_error(err: Exception):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        message = "Internal server error" if settings.is_production else str(err)
        return jsonify(success=False, error=message, error_id=error_id), 500
