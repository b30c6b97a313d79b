from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Enum, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.constants import PRODUCT_KINDS, PRODUCT_STATUSES, STATUS_AVAILABLE
from app.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    kind = Column(Enum(*PRODUCT_KINDS, name="product_kind"), nullable=False)
    code = Column(String(100))

    name = Column(String(200))
    category = Column(String(100))
    color = Column(String(100))
    author = Column(String(200))
    origin = Column(String(100))
    image_url = Column(String(300))

    supplier = Column(String(200))
    purchased_on = Column(Date)
    registered_by = Column(String(100))

    unit_price = Column(Numeric(10, 2), nullable=False)
    whole_unit_price = Column(Numeric(10, 2))
    quantity_total = Column(Numeric(10, 2), nullable=False)
    quantity_remaining = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(*PRODUCT_STATUSES, name="product_status"),
        nullable=False,
        default=STATUS_AVAILABLE,
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    sales = relationship(
        "Sale",
        back_populates="product",
        cascade="all, delete-orphan",
    )
    history = relationship(
        "HistoryEntry",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("kind", "code", name="uq_products_kind_code"),
        Index("idx_products_kind", "kind"),
    )


__all__ = ["Product"]
