"""The sale transaction.

Every step from the stock check to the history entry runs inside one
transaction. The product row is locked on read (``FOR UPDATE``; SQLite
connections open with ``BEGIN IMMEDIATE``) and the decrement itself is a
conditional update that only matches while enough stock remains, so two
concurrent sales of the same product cannot both pass the check.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import HISTORY_SALE, STATUS_AVAILABLE, STATUS_DEPLETED
from app.core.errors import BadRequest, InsufficientStock, StoreError
from app.models.history import HistoryEntry
from app.models.product import Product
from app.models.sales import Sale
from app.services.product_service import get_product, validate_kind

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass
class SaleResult:
    sale: Sale
    remaining: Decimal
    status: str
    total: Decimal


def compute_total(
    unit_price,
    quantity,
    precomputed_total=None,
    *,
    trust_client_total: bool = False,
) -> Decimal:
    computed = (Decimal(unit_price) * Decimal(quantity)).quantize(CENT, rounding=ROUND_HALF_UP)
    if precomputed_total is None:
        return computed
    supplied = Decimal(precomputed_total).quantize(CENT, rounding=ROUND_HALF_UP)
    if trust_client_total:
        return supplied
    if supplied != computed:
        logger.warning("Ignoring client-supplied total %s; charging %s", supplied, computed)
    return computed


def _insufficient(product: Product, quantity: Decimal) -> InsufficientStock:
    logger.warning(
        "Rejected sale of %s from product %s: only %s remaining",
        quantity,
        product.id,
        product.quantity_remaining,
        extra={"product_id": product.id, "kind": product.kind, "quantity": quantity},
    )
    return InsufficientStock(
        "Stock insuficiente: disponible {}, solicitado {}".format(product.quantity_remaining, quantity)
    )


def _sale_details(quantity: Decimal, client: Optional[str], total: Decimal) -> str:
    return "Cantidad {} para {}, total {}".format(quantity, client or "cliente no registrado", total)


def record_sale(
    db: Session,
    product_id: int,
    quantity,
    *,
    seller: str,
    client: Optional[str] = None,
    precomputed_total=None,
    kind: Optional[str] = None,
    trust_client_total: bool = False,
) -> SaleResult:
    kind = validate_kind(kind)
    quantity = Decimal(quantity)
    if quantity <= 0:
        raise BadRequest("La cantidad vendida debe ser mayor que cero")
    if quantity != quantity.quantize(CENT):
        raise BadRequest("La cantidad vendida admite como máximo dos decimales")

    try:
        product = get_product(db, product_id, kind, for_update=True)
        if quantity > product.quantity_remaining:
            raise _insufficient(product, quantity)

        total = compute_total(
            product.unit_price,
            quantity,
            precomputed_total,
            trust_client_total=trust_client_total,
        )
        sale = Sale(
            product_id=product.id,
            quantity=quantity,
            unit_price=product.unit_price,
            total_price=total,
            seller=seller,
            client=client,
        )
        db.add(sale)
        db.flush()

        # Quantities are whole cents; the rounding only absorbs SQLite REAL drift.
        result = db.execute(
            update(Product)
            .where(Product.id == product.id, Product.quantity_remaining >= quantity)
            .values(quantity_remaining=func.round(Product.quantity_remaining - quantity, 2))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise _insufficient(product, quantity)
        db.execute(
            update(Product)
            .where(Product.id == product.id)
            .values(
                status=case(
                    (Product.quantity_remaining <= 0, STATUS_DEPLETED),
                    else_=STATUS_AVAILABLE,
                )
            )
            .execution_options(synchronize_session=False)
        )
        remaining, status = db.execute(
            select(Product.quantity_remaining, Product.status).where(Product.id == product.id)
        ).one()

        db.add(
            HistoryEntry(
                product_id=product.id,
                action=HISTORY_SALE,
                details=_sale_details(quantity, client, total),
                actor=seller,
            )
        )
        db.expire(product)
        db.commit()
    except (StoreError, SQLAlchemyError):
        db.rollback()
        raise

    logger.info(
        "Recorded sale %s: %s of product %s for %s (remaining %s)",
        sale.id,
        quantity,
        product_id,
        total,
        remaining,
        extra={"sale_id": sale.id, "product_id": product_id, "quantity": quantity, "seller": seller},
    )
    return SaleResult(sale=sale, remaining=remaining, status=status, total=total)


def list_sales(db: Session, kind: Optional[str] = None) -> list[tuple[Sale, Product]]:
    kind = validate_kind(kind)
    stmt = select(Sale, Product).join(Product, Product.id == Sale.product_id)
    if kind is not None:
        stmt = stmt.where(Product.kind == kind)
    rows = db.execute(stmt.order_by(Sale.created_at.desc(), Sale.id.desc())).all()
    return [(sale, product) for sale, product in rows]


__all__ = ["SaleResult", "compute_total", "list_sales", "record_sale"]
