from sqlalchemy import Column, Integer, Numeric, String

from app.database.base import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    balance = Column(Numeric(10, 2), nullable=False, default=0)


__all__ = ["Client"]
