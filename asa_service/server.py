"""
project: ASA Service
module: server.py
https://github.com/asa-service/asa-service
License: MIT

Server bootstrap.

Configures logging, runs the database initializer and starts the Flask server.
Database failures in development fall back to mock data so the API stays
usable; in production they are fatal (exit code 1).
"""

import logging
import os
import signal
import sys
from logging.handlers import RotatingFileHandler

from sqlalchemy.exc import SQLAlchemyError

from . import create_app, db, get_context
from .config import Settings
from .logging_utils import get_logger, set_json_mode, set_level

log = get_logger("asa_service.server")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Settings):
    """Configure logging to both console and a rotating file at ``settings.log_file``.

    Keeps a few backups to avoid growth. Safe to call more than once.
    """
    set_level(settings.log_level)
    set_json_mode(settings.log_json)
    level = logging.DEBUG if settings.log_level == "debug" else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    log_file = settings.log_file
    log_dir = os.path.dirname(log_file) if log_file else None
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError:
            log_file = None
    if log_file:
        file_handler = RotatingFileHandler(settings.log_file, maxBytes=1_000_000, backupCount=3)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)


def initialize_database(app) -> bool:
    """Run the initializer; returns False when the app fell back to mock data."""
    ctx = get_context(app)
    if ctx.is_mock:
        return False
    try:
        with app.app_context():
            report = ctx.initializer.initialize()
    except SQLAlchemyError as exc:
        log.error(event="database_init_failed", error=str(exc).splitlines()[0])
        if ctx.settings.is_production:
            raise SystemExit(1)
        ctx.use_mock("unavailable")
        log.warn(event="mock_fallback", reason="database initialization failed")
        return False
    ctx.database_status = "connected"
    log.info(event="database_ready", **report.get("counts", {}))
    return True


def _install_signal_handlers(app):
    def _shutdown(signum, frame):
        log.info(event="shutdown", signal=signal.Signals(signum).name)
        ctx = get_context(app)
        if ctx.jobs is not None:
            ctx.jobs.shutdown(timeout=2.0)
        if not ctx.settings.use_mock_data:
            with app.app_context():
                db.engine.dispose()
        sys.exit(0)

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)


def start_server(settings: Settings, host=None, port=None, debug: bool = False):  # pragma: no cover (runtime only)
    """Initialize the database (or mock fallback) and serve the API."""
    configure_logging(settings)
    app = create_app(settings)
    initialize_database(app)
    _install_signal_handlers(app)
    host = host or settings.host
    port = port or settings.port
    log.info(event="listen", host=host, port=port, debug=debug, mock=get_context(app).is_mock)
    app.run(host=host, port=port, debug=debug, use_reloader=False, threaded=True)
