import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

_DEFAULT_SQLITE_BUSY_TIMEOUT_SECONDS = 30


def is_sqlite_url(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def _is_sqlite_memory(database_url: str) -> bool:
    url = make_url(database_url)
    if url.database in (None, "", ":memory:"):
        return True
    return url.query.get("mode") == "memory"


def create_store_engine(
    database_url: str,
    *,
    busy_timeout_seconds: int = _DEFAULT_SQLITE_BUSY_TIMEOUT_SECONDS,
) -> Engine:
    """Build the engine every session of the process draws from.

    On SQLite the driver's implicit transaction handling is replaced with an
    explicit ``BEGIN IMMEDIATE``, so a transaction takes the write lock before
    its first read and read-validate-write sequences cannot interleave.
    """
    is_sqlite = is_sqlite_url(database_url)
    is_memory = is_sqlite and _is_sqlite_memory(database_url)

    connect_args = {}
    engine_kwargs: dict[str, object] = dict(pool_pre_ping=True)
    if is_sqlite:
        connect_args = {"check_same_thread": False, "timeout": busy_timeout_seconds}
        if is_memory:
            engine_kwargs.update(poolclass=StaticPool)

    engine = create_engine(database_url, connect_args=connect_args, **engine_kwargs)

    if is_sqlite:
        busy_timeout_ms = busy_timeout_seconds * 1000

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, _connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms}")
                if not is_memory:
                    try:
                        cursor.execute("PRAGMA journal_mode=WAL")
                        cursor.execute("PRAGMA synchronous=NORMAL")
                    except sqlite3.DatabaseError:
                        logger.warning("WAL journal mode unavailable for %s", database_url)
            finally:
                cursor.close()

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


__all__ = ["create_store_engine", "is_sqlite_url"]
