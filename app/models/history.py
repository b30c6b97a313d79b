from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database.base import Base


class HistoryEntry(Base):
    __tablename__ = "history"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    action = Column(String(200), nullable=False)
    details = Column(Text)
    actor = Column(String(100))

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    product = relationship("Product", back_populates="history")

    __table_args__ = (
        Index("idx_history_product_created", "product_id", "created_at"),
    )


__all__ = ["HistoryEntry"]
