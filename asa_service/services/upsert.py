"""Dialect-aware ``INSERT .. ON CONFLICT DO UPDATE`` for the population service.

PostgreSQL and SQLite both implement the ``ON CONFLICT`` clause and
SQLAlchemy exposes the same ``on_conflict_do_update`` API for each, so the
statement is built against whichever dialect the engine uses.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from sqlalchemy.dialects import postgresql, sqlite

from .. import db
from ..models.models import utcnow

_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class UnsupportedDialect(RuntimeError):
    pass


def _insert_for(table):
    name = db.engine.dialect.name
    try:
        return _INSERTS[name](table)
    except KeyError:
        raise UnsupportedDialect(f"Upsert is not supported on '{name}'")


def upsert(
    model,
    values: Dict[str, Any],
    conflict_on: Iterable[str],
    update: Optional[Iterable[str]] = None,
) -> Optional[int]:
    """Insert ``values`` or update the row matching ``conflict_on``.

    ``update`` names the columns to overwrite on conflict (default: every
    supplied column except the conflict keys). ``updated_at`` is always bumped.
    Returns the row id. The caller owns the transaction.
    """
    table = model.__table__
    conflict_on = list(conflict_on)
    now = utcnow()
    row = dict(values)
    if "updated_at" in table.c:
        row.setdefault("created_at", now)
        row["updated_at"] = now
    stmt = _insert_for(table).values(**row)
    columns = list(update) if update is not None else [k for k in values if k not in conflict_on]
    set_ = {c: stmt.excluded[c] for c in columns}
    if "updated_at" in table.c:
        set_["updated_at"] = now
    if set_:
        stmt = stmt.on_conflict_do_update(index_elements=conflict_on, set_=set_)
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=conflict_on)
    result = db.session.execute(stmt.returning(table.c.id))
    return result.scalar()
