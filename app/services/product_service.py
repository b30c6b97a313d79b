import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import (
    HISTORY_CREATED,
    HISTORY_UPDATED,
    KIND_LABELS,
    PRODUCT_KINDS,
    PRODUCT_STATUSES,
    STATUS_AVAILABLE,
    STATUS_DEPLETED,
)
from app.core.errors import BadRequest, DuplicateKey, NotFound, StoreError
from app.models.history import HistoryEntry
from app.models.product import Product

logger = logging.getLogger(__name__)


def validate_kind(kind: Optional[str]) -> Optional[str]:
    if kind is None:
        return None
    normalized = str(kind).strip().lower()
    if normalized not in PRODUCT_KINDS:
        raise BadRequest("tipo_producto inválido")
    return normalized


def normalize_status(value) -> str:
    key = str(value).strip().lower()
    if key not in PRODUCT_STATUSES:
        raise BadRequest(
            "estado inválido: {} (valores permitidos: {})".format(value, ", ".join(PRODUCT_STATUSES))
        )
    return key


def status_for_remaining(remaining) -> str:
    return STATUS_DEPLETED if remaining <= 0 else STATUS_AVAILABLE


def _label(kind: Optional[str]) -> str:
    return KIND_LABELS.get(kind, "Producto")


def get_product(
    db: Session,
    product_id: int,
    kind: Optional[str] = None,
    *,
    for_update: bool = False,
) -> Product:
    stmt = select(Product).where(Product.id == product_id)
    if for_update:
        stmt = stmt.with_for_update()
    product = db.execute(stmt).scalars().first()
    if product is None or (kind is not None and product.kind != kind):
        raise NotFound("{} no encontrado".format(_label(kind)))
    return product


def _duplicate_message(code) -> str:
    return "Ya existe un registro con el código {}".format(code)


def _ensure_code_available(db: Session, kind: str, code, *, exclude_id=None) -> None:
    if code is None:
        return
    stmt = select(Product.id).where(Product.kind == kind, Product.code == code)
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)
    if db.execute(stmt).first() is not None:
        raise DuplicateKey(_duplicate_message(code))


@contextmanager
def _catalog_write(db: Session, code=None):
    """Commit on success; roll back and translate code collisions on failure."""
    try:
        yield
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if code is not None:
            raise DuplicateKey(_duplicate_message(code)) from exc
        raise
    except (StoreError, SQLAlchemyError):
        db.rollback()
        raise


def list_products(db: Session, kind: str) -> list[Product]:
    rows = db.execute(
        select(Product).where(Product.kind == kind).order_by(Product.id.desc())
    ).scalars().all()
    return list(rows)


def create_product(db: Session, kind: str, fields: dict, *, actor: Optional[str] = None) -> Product:
    fields = dict(fields)
    fields.pop("quantity_remaining", None)
    status = fields.pop("status", None)
    code = fields.get("code")
    total = Decimal(fields["quantity_total"])

    with _catalog_write(db, code):
        _ensure_code_available(db, kind, code)
        product = Product(
            kind=kind,
            quantity_remaining=total,
            status=normalize_status(status) if status is not None else status_for_remaining(total),
            **fields,
        )
        db.add(product)
        db.flush()
        db.add(
            HistoryEntry(
                product_id=product.id,
                action=HISTORY_CREATED,
                details="Cantidad inicial {}, precio {}".format(total, product.unit_price),
                actor=actor,
            )
        )
    logger.info(
        "Registered %s %s (code=%s)",
        kind,
        product.id,
        product.code,
        extra={"product_id": product.id, "kind": kind},
    )
    return product


def update_product(
    db: Session,
    kind: str,
    product_id: int,
    fields: dict,
    *,
    actor: Optional[str] = None,
) -> Product:
    """Apply a partial update; ``None`` values leave the column unchanged.

    A new ``quantity_total`` shifts the remaining stock by the same delta,
    clamped to ``[0, quantity_total]``. Status follows stock unless given.
    """
    fields = {key: value for key, value in fields.items() if value is not None}
    code = fields.get("code")

    with _catalog_write(db, code):
        product = get_product(db, product_id, kind, for_update=True)

        status = fields.pop("status", None)
        if status is not None:
            status = normalize_status(status)
        if code is not None and code != product.code:
            _ensure_code_available(db, kind, code, exclude_id=product.id)

        current_total = product.quantity_total
        current_remaining = product.quantity_remaining
        new_total = fields.pop("quantity_total", None)
        new_remaining = fields.pop("quantity_remaining", None)

        total = Decimal(new_total) if new_total is not None else current_total
        if new_remaining is not None:
            remaining = Decimal(new_remaining)
            if remaining < 0 or remaining > total:
                raise BadRequest("La cantidad disponible debe estar entre 0 y {}".format(total))
        elif new_total is not None:
            remaining = min(max(current_remaining + (total - current_total), Decimal("0")), total)
        else:
            remaining = current_remaining

        changed = sorted(fields)
        for column, value in fields.items():
            setattr(product, column, value)

        stock_changed = total != current_total or remaining != current_remaining
        if stock_changed:
            changed.append("quantity")
            product.quantity_total = total
            product.quantity_remaining = remaining
        if status is not None:
            changed.append("status")
            product.status = status
        elif stock_changed:
            product.status = status_for_remaining(remaining)

        db.add(
            HistoryEntry(
                product_id=product.id,
                action=HISTORY_UPDATED,
                details="Campos: {}".format(", ".join(changed)) if changed else None,
                actor=actor,
            )
        )
    logger.info("Updated %s %s", kind, product.id, extra={"product_id": product.id, "kind": kind})
    return product


def delete_product(db: Session, kind: str, product_id: int) -> None:
    with _catalog_write(db):
        product = get_product(db, product_id, kind, for_update=True)
        db.delete(product)
    logger.info(
        "Deleted %s %s with its sales and history",
        kind,
        product_id,
        extra={"product_id": product_id, "kind": kind},
    )


__all__ = [
    "create_product",
    "delete_product",
    "get_product",
    "list_products",
    "normalize_status",
    "status_for_remaining",
    "update_product",
    "validate_kind",
]
