from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import Settings
from app.dependencies import get_app_settings, get_db
from app.schemas.sale import SaleCreate, SaleListItem, SaleRead, SaleReceipt, SaleResponse
from app.services.sale_service import list_sales, record_sale

router = APIRouter(prefix="/ventas", tags=["Ventas"])


@router.post("", response_model=SaleResponse)
def create_sale(
    payload: SaleCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    result = record_sale(
        db,
        payload.product_id,
        payload.quantity,
        seller=payload.seller,
        client=payload.client,
        precomputed_total=payload.precomputed_total,
        kind=payload.kind,
        trust_client_total=settings.SALES_TRUST_CLIENT_TOTAL,
    )
    receipt = SaleReceipt(
        **SaleRead.model_validate(result.sale).model_dump(),
        cantidad_restante=float(result.remaining),
        estado=result.status,
    )
    return SaleResponse(message="Venta registrada", total=float(result.total), venta=receipt)


@router.get("", response_model=list[SaleListItem])
def get_sales(
    tipo: Optional[str] = Query(None, description="rollo, libro o cafe"),
    db: Session = Depends(get_db),
):
    items = []
    for sale, product in list_sales(db, tipo):
        items.append(
            SaleListItem(
                **SaleRead.model_validate(sale).model_dump(),
                tipo_producto=product.kind,
                producto=product.name or product.category,
                codigo=product.code,
                color=product.color,
                tipo_tela=product.category,
            )
        )
    return items


__all__ = ["router"]
