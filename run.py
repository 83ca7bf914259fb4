"""ASA Service CLI entry point.

Provides subcommands for running the API server, initializing the database,
running a population step and printing database status. Accepts
configuration via flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init

from asa_service import __version__

_color_init()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False

POPULATION_TYPES = ("all", "maps", "creatures", "taming", "regions", "caves", "resources", "obelisks")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    ASA Service

    Reference data API for ARK: Survival Ascended (creatures, maps, regions,
    taming). Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST              Bind address for the web server (default: 0.0.0.0)
          PORT              Port for the web server (default: 3000)
          DATABASE_URL      SQLAlchemy database URI (default: built from DB_HOST/DB_PORT/DB_NAME/DB_USER/DB_PASSWORD)
          SKIP_DATABASE     Serve mock data without a database
          SKIP_DATA_SYNC    Do not scrape/populate on an empty database
          DROP_EXISTING_DB  Drop all tables before creating the schema
          LOG_LEVEL         debug | info | warn | error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run against a local SQLite file
          python run.py server --db sqlite:///asa.db

          # Create the schema and populate an empty database
          python run.py init-db

          # Re-scrape taming data only
          python run.py populate --type taming

          # Load variables from .env then print table counts
          python run.py --env-file .env status
        """
    )

    parser = argparse.ArgumentParser(
        prog="asa-service",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ASA Service {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Initialize the database (or fall back to mock data) and serve the API",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 3000)",
    )
    server_parser.add_argument(
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or DB_* parts)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # init-db subcommand
    init_parser = subparsers.add_parser(
        "init-db",
        help="Create the schema and populate an empty database",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    init_parser.add_argument("--db", dest="db_uri", default=None, help="Database URI")
    init_parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    init_parser.add_argument("--skip-sync", action="store_true", help="Create the schema without populating")
    init_parser.set_defaults(command="init-db")

    # populate subcommand
    populate_parser = subparsers.add_parser(
        "populate",
        help="Run one population step in the foreground",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    populate_parser.add_argument("--db", dest="db_uri", default=None, help="Database URI")
    populate_parser.add_argument("--type", dest="population_type", choices=POPULATION_TYPES, default="all")
    populate_parser.set_defaults(command="populate")

    # status subcommand
    status_parser = subparsers.add_parser(
        "status",
        help="Print row counts and population status as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    status_parser.add_argument("--db", dest="db_uri", default=None, help="Database URI")
    status_parser.set_defaults(command="status")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "server"
    return args


def _error(message: str) -> None:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
    print(f"{prefix} {message}")


def _banner(mode: str, host, port, db_banner: str) -> None:
    title = f"{Fore.CYAN}{Style.BRIGHT}ASA Service Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "ASA Service Bootup"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Database:'):12} {value(db_banner)}",
        divider,
        "",
    ]
    print("\n".join(lines))


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    mode = args.command

    from asa_service.config import Settings
    from asa_service.logging_utils import log

    # Make DATABASE_URL available to Settings, but only if explicitly provided via CLI
    db_uri_cli = getattr(args, "db_uri", None)
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli
        os.environ.pop("SKIP_DATABASE", None)
    settings = Settings.from_env(getattr(args, "env_file", None))

    if mode == "server":
        from asa_service.server import start_server

        host = getattr(args, "host", None) or settings.host
        port = int(getattr(args, "port", None) or settings.port)
        db_banner = "mock data" if settings.use_mock_data else settings.database_url.split("@")[-1]
        _banner(mode, host, port, db_banner)
        debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
        log.info(event="startup", mode=mode, host=host, port=port, debug=debug)
        start_server(settings, host=host, port=port, debug=debug)
        return 0

    if settings.use_mock_data:
        _error("A database is required for this command (set DATABASE_URL or pass --db)")
        return 1

    from sqlalchemy.exc import SQLAlchemyError

    from asa_service import create_app, get_context
    from asa_service.server import configure_logging

    if mode == "init-db":
        settings.drop_existing_db = settings.drop_existing_db or args.drop
        settings.skip_data_sync = settings.skip_data_sync or args.skip_sync
    configure_logging(settings)
    app = create_app(settings)
    ctx = get_context(app)

    try:
        with app.app_context():
            if mode == "init-db":
                report = ctx.initializer.initialize()
                print(json.dumps(report, indent=2, default=str))
                return 0 if report.get("healthy") else 1
            if mode == "populate":
                ctx.initializer.connect()
                ctx.initializer.create_schema()
                result = ctx.population().run(args.population_type)
                print(json.dumps(result, indent=2))
                return 0
            if mode == "status":
                print(json.dumps(ctx.population().get_population_status(), indent=2, default=str))
                return 0
    except SQLAlchemyError as exc:
        _error(f"Database error: {str(exc).splitlines()[0]}")
        return 1
    return 1


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
