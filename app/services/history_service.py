from typing import Optional, cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.constants import PRODUCT_KINDS
from app.models.history import HistoryEntry
from app.models.product import Product


def list_history(db: Session, product_id: int, kind: Optional[str] = None) -> list[HistoryEntry]:
    """History of one product, newest first.

    An unknown ``kind`` matches no product, so it yields an empty list.
    """
    stmt = select(HistoryEntry).where(HistoryEntry.product_id == product_id)
    if kind is not None:
        kind = str(kind).strip().lower()
        if kind not in PRODUCT_KINDS:
            return []
        stmt = stmt.join(Product, Product.id == HistoryEntry.product_id).where(Product.kind == kind)
    history = db.execute(
        stmt.order_by(HistoryEntry.created_at.desc(), HistoryEntry.id.desc())
    ).scalars().all()
    return cast(list[HistoryEntry], list(history))
