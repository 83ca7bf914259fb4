from .initializer import VALIDATED_TABLES, DatabaseInitializer  # noqa: F401 re-export
from .migrations import SCHEMA_VERSION, apply_sql_migrations, ensure_schema_version  # noqa: F401

__all__ = ["DatabaseInitializer", "VALIDATED_TABLES", "SCHEMA_VERSION", "apply_sql_migrations", "ensure_schema_version"]
