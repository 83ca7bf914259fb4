"""Incremental SQL migrations.

Files in ``migrations/`` are applied in name order on every start. Statements
are split naively on ``;`` and must be idempotent (``IF NOT EXISTS``); a
statement that fails is rolled back and skipped so one bad index never blocks
startup.
"""

from __future__ import annotations

import glob
import os
from typing import List, Tuple

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..logging_utils import get_logger
from ..models import SystemConfig

log = get_logger("asa_service.database")

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")
SCHEMA_VERSION = "3.1.0"


def migration_files(directory: str = MIGRATIONS_DIR) -> List[str]:
    if not os.path.isdir(directory):
        return []
    return sorted(glob.glob(os.path.join(directory, "*.sql")))


def split_statements(sql_text: str) -> List[str]:
    statements = []
    for chunk in sql_text.split(";"):
        lines = [ln for ln in chunk.splitlines() if ln.strip() and not ln.strip().startswith("--")]
        if lines:
            statements.append("\n".join(lines).strip())
    return statements


def apply_sql_migrations(directory: str = MIGRATIONS_DIR) -> Tuple[int, int]:
    """Run every migration statement; returns (applied, failed)."""
    applied = failed = 0
    for path in migration_files(directory):
        with open(path, "r", encoding="utf-8") as f:
            statements = split_statements(f.read())
        for stmt in statements:
            try:
                db.session.execute(text(stmt))
                db.session.commit()
                applied += 1
            except SQLAlchemyError as exc:
                db.session.rollback()
                failed += 1
                log.warn(event="migration_statement_failed", file=os.path.basename(path), error=str(exc).splitlines()[0])
    log.info(event="migrations_applied", applied=applied, failed=failed)
    return applied, failed


def ensure_schema_version(version: str = SCHEMA_VERSION) -> str:
    if SystemConfig.get("schema_version") != version:
        SystemConfig.set("schema_version", version)
    return version
