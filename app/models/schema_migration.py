from sqlalchemy import Column, DateTime, Integer, String

from app.database.base import Base


class SchemaMigration(Base):
    __tablename__ = "schema_migrations"

    version = Column(Integer, primary_key=True, autoincrement=False)
    description = Column(String(200), nullable=False)
    applied_at = Column(DateTime(timezone=True), nullable=False)


__all__ = ["SchemaMigration"]
