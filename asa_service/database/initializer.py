"""
project: ASA Service
module: initializer.py
https://github.com/asa-service/asa-service
License: MIT

Database bootstrap.

Runs once at startup, inside an application context:

    connect -> [drop_schema] -> create_schema -> [populate if empty] -> refresh_search_indexes

``connect`` creates the PostgreSQL database itself when it is missing.
Population failures are recorded (``data_sync_log`` / ``system_status``) but
do not stop the server; connection and schema failures propagate so the
caller can decide between exiting and falling back to mock data.
"""

from __future__ import annotations

from typing import Callable, Dict

from sqlalchemy import create_engine, func, inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from .. import db
from ..logging_utils import get_logger
from ..models import CORE_TABLES, Creature, DataSyncLog, Map, MapRegion, Resource, SystemConfig
from ..models.models import utcnow
from .migrations import apply_sql_migrations, ensure_schema_version

log = get_logger("asa_service.database")

REQUIRED_TABLES = ("maps", "creatures", "map_regions")
VALIDATED_TABLES = ("maps", "creatures", "map_regions", "resources")


class DatabaseInitializer:
    def __init__(self, settings, population_factory: Callable[[], object]):
        self.settings = settings
        self.population_factory = population_factory

    def initialize(self) -> Dict:
        self.connect()
        if self.settings.drop_existing_db:
            self.drop_schema()
        self.create_schema()
        if self.settings.skip_data_sync:
            log.info(event="data_sync_skipped")
        elif self.check_existing_data():
            log.info(event="existing_data_found")
        else:
            self.populate_with_real_data()
        self.refresh_search_indexes()
        return self.health_check()

    # -- connection ----------------------------------------------------------
    def connect(self) -> None:
        try:
            db.session.execute(text("SELECT 1"))
        except OperationalError as exc:
            db.session.rollback()
            if db.engine.dialect.name != "postgresql" or "does not exist" not in str(exc):
                raise
            self.create_database()
            db.engine.dispose()
            db.session.execute(text("SELECT 1"))
        log.info(event="database_connected", dialect=db.engine.dialect.name)

    def create_database(self) -> None:
        url = make_url(self.settings.database_url)
        admin = create_engine(url.set(database="postgres"), isolation_level="AUTOCOMMIT")
        try:
            with admin.connect() as conn:
                quoted = admin.dialect.identifier_preparer.quote(url.database)
                conn.execute(text(f"CREATE DATABASE {quoted}"))
        finally:
            admin.dispose()
        log.info(event="database_created", name=url.database)

    # -- schema --------------------------------------------------------------
    def drop_schema(self) -> None:
        log.warn(event="dropping_schema")
        db.drop_all()
        db.session.commit()

    def schema_exists(self) -> bool:
        tables = set(inspect(db.engine).get_table_names())
        return all(name in tables for name in REQUIRED_TABLES)

    def create_schema(self) -> None:
        if self.schema_exists():
            log.info(event="schema_exists")
        else:
            db.create_all()
            log.info(event="schema_created")
        apply_sql_migrations()
        ensure_schema_version()

    def check_existing_data(self) -> bool:
        return any(model.query.limit(1).count() for model in (Map, Creature, Resource))

    # -- population ----------------------------------------------------------
    def populate_with_real_data(self) -> Dict[str, int]:
        entry = DataSyncLog(sync_type="initial_population", status="started")
        db.session.add(entry)
        db.session.commit()
        log.info(event="initial_population_start")
        try:
            results = self.population_factory().populate_all_data()
        except Exception as exc:
            db.session.rollback()
            entry.status = "error"
            entry.message = str(exc)
            entry.completed_at = utcnow()
            db.session.commit()
            log.error(event="initial_population_failed", error=str(exc))
            return {}
        entry.status = "completed"
        entry.records_processed = sum(results.values())
        entry.message = "Initial population completed"
        entry.completed_at = utcnow()
        db.session.commit()
        return results

    def refresh_search_indexes(self) -> None:
        if db.engine.dialect.name != "postgresql":
            return
        db.session.execute(text("ANALYZE"))
        db.session.commit()
        log.info(event="search_indexes_refreshed")

    # -- reporting -----------------------------------------------------------
    def health_check(self) -> Dict:
        try:
            db.session.execute(text("SELECT 1"))
            counts = {name: model.query.count() for name, model in CORE_TABLES.items()}
            return {"healthy": True, "schema_version": SystemConfig.get("schema_version"), "counts": counts}
        except SQLAlchemyError as exc:
            db.session.rollback()
            return {"healthy": False, "error": str(exc).splitlines()[0]}

    def validate_data(self) -> Dict:
        """Row totals per table and how many rows miss required text fields."""
        checks = {
            "maps": (Map, [Map.name, Map.slug]),
            "creatures": (Creature, [Creature.name, Creature.slug]),
            "map_regions": (MapRegion, [MapRegion.name, MapRegion.category]),
            "resources": (Resource, [Resource.name, Resource.resource_type]),
        }
        report = {}
        total_records = 0
        for name, (model, columns) in checks.items():
            total = model.query.count()
            issues = 0
            for column in columns:
                issues += model.query.filter((column.is_(None)) | (func.trim(column) == "")).count()
            report[name] = {"total": total, "valid": max(total - issues, 0), "issues": issues}
            total_records += total
        return {"tables": report, "total_records": total_records}

    def close(self) -> None:
        db.session.remove()
        db.engine.dispose()
