from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.dependencies import get_db
from app.schemas.stats import InventoryStatistics, SalesStatistics
from app.services.stats_service import inventory_statistics, sales_statistics

router = APIRouter(prefix="/estadisticas", tags=["Estadísticas"])


@router.get("/ventas", response_model=SalesStatistics)
def sales_summary(
    tipo: Optional[str] = Query(None, description="rollo, libro o cafe"),
    db: Session = Depends(get_db),
):
    return sales_statistics(db, tipo)


@router.get("/inventario", response_model=InventoryStatistics)
def inventory_summary(
    tipo: Optional[str] = Query(None, description="rollo, libro o cafe"),
    db: Session = Depends(get_db),
):
    return inventory_statistics(db, tipo)


__all__ = ["router"]
