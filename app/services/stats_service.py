from typing import Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from app.core.constants import STATUS_AVAILABLE, STATUS_DEPLETED, STATUS_SOLD
from app.models.product import Product
from app.models.sales import Sale
from app.services.product_service import validate_kind


def _count_status(status: str):
    return func.coalesce(func.sum(case((Product.status == status, 1), else_=0)), 0)


def sales_statistics(db: Session, kind: Optional[str] = None) -> dict:
    kind = validate_kind(kind)
    stmt = select(
        func.count(Sale.id),
        func.coalesce(func.sum(Sale.quantity), 0),
        func.coalesce(func.sum(Sale.total_price), 0),
        func.coalesce(func.avg(Sale.total_price), 0),
        func.coalesce(func.max(Sale.total_price), 0),
    )
    if kind is not None:
        stmt = stmt.join(Product, Product.id == Sale.product_id).where(Product.kind == kind)
    count, quantity, revenue, average, largest = db.execute(stmt).one()
    return {
        "total_ventas": int(count or 0),
        "cantidad_vendida": float(quantity or 0),
        "ingresos_totales": round(float(revenue or 0), 2),
        "venta_promedio": round(float(average or 0), 2),
        "venta_maxima": round(float(largest or 0), 2),
    }


def inventory_statistics(db: Session, kind: Optional[str] = None) -> dict:
    kind = validate_kind(kind)
    stmt = select(
        func.count(Product.id),
        _count_status(STATUS_AVAILABLE),
        _count_status(STATUS_SOLD),
        _count_status(STATUS_DEPLETED),
        func.coalesce(func.sum(Product.quantity_total), 0),
        func.coalesce(func.sum(Product.quantity_remaining), 0),
        func.coalesce(func.sum(Product.quantity_remaining * Product.unit_price), 0),
    )
    if kind is not None:
        stmt = stmt.where(Product.kind == kind)
    count, available, sold, depleted, total, remaining, value = db.execute(stmt).one()
    return {
        "total_productos": int(count or 0),
        "disponibles": int(available or 0),
        "vendidos": int(sold or 0),
        "agotados": int(depleted or 0),
        "cantidad_total": float(total or 0),
        "cantidad_disponible": float(remaining or 0),
        "valor_inventario": round(float(value or 0), 2),
    }
