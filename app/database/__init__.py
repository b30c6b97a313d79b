from app.database.base import Base
from app.database.engine import create_store_engine, is_sqlite_url
from app.database.session import create_session_factory, get_db

__all__ = ["Base", "create_session_factory", "create_store_engine", "get_db", "is_sqlite_url"]
