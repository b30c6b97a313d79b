"""Versioned schema migrations.

Each migration runs once, in its own transaction, and is recorded in
``schema_migrations``. Later entries add the columns the catalog grew over
time; on a database created from the current models those columns already
exist, which is expected and only logged.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import inspect, insert, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from app.database.base import Base
from app.models import import_all_models
from app.models.schema_migration import SchemaMigration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    apply: Callable[[Connection], None]


def _create_tables(conn: Connection) -> None:
    Base.metadata.create_all(bind=conn)


def _add_column(table_name: str, column_name: str) -> Callable[[Connection], None]:
    def apply(conn: Connection) -> None:
        existing = {column["name"] for column in inspect(conn).get_columns(table_name)}
        if column_name in existing:
            logger.info("Column %s.%s already exists, skipping.", table_name, column_name)
            return
        column = Base.metadata.tables[table_name].c[column_name]
        preparer = conn.dialect.identifier_preparer
        ddl = column.type.compile(dialect=conn.dialect)
        conn.exec_driver_sql(
            "ALTER TABLE {} ADD COLUMN {} {}".format(
                preparer.quote(table_name), preparer.quote(column_name), ddl
            )
        )
        logger.info("Added column %s.%s", table_name, column_name)

    return apply


MIGRATIONS = (
    Migration(1, "create products, sales, history and clients tables", _create_tables),
    Migration(2, "add whole-unit price to products", _add_column("products", "whole_unit_price")),
    Migration(3, "add purchase date to products", _add_column("products", "purchased_on")),
    Migration(4, "add supplier to products", _add_column("products", "supplier")),
    Migration(5, "add registering user to products", _add_column("products", "registered_by")),
    Migration(6, "add details to history", _add_column("history", "details")),
)


def applied_versions(engine: Engine) -> set[int]:
    with engine.connect() as conn:
        return set(conn.execute(select(SchemaMigration.version)).scalars())


def apply_migrations(engine: Engine, migrations=MIGRATIONS) -> list[int]:
    """Apply pending migrations in version order; return the versions applied."""
    import_all_models()
    SchemaMigration.__table__.create(bind=engine, checkfirst=True)

    done = applied_versions(engine)
    applied = []
    for migration in sorted(migrations, key=lambda item: item.version):
        if migration.version in done:
            continue
        try:
            with engine.begin() as conn:
                migration.apply(conn)
                conn.execute(
                    insert(SchemaMigration).values(
                        version=migration.version,
                        description=migration.description,
                        applied_at=datetime.now(timezone.utc),
                    )
                )
        except IntegrityError:
            logger.info("Migration %s was applied by another process.", migration.version)
            continue
        logger.info("Applied migration %s: %s", migration.version, migration.description)
        applied.append(migration.version)
    return applied


__all__ = ["MIGRATIONS", "Migration", "applied_versions", "apply_migrations"]
