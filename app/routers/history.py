from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.dependencies import get_db
from app.schemas.history import HistoryRead
from app.services.history_service import list_history

router = APIRouter(prefix="/historial", tags=["Historial"])


@router.get("/{product_id}", response_model=list[HistoryRead])
def product_history(product_id: int, db: Session = Depends(get_db)):
    return [HistoryRead.model_validate(entry) for entry in list_history(db, product_id)]


@router.get("/{tipo}/{product_id}", response_model=list[HistoryRead])
def product_history_by_kind(tipo: str, product_id: int, db: Session = Depends(get_db)):
    return [HistoryRead.model_validate(entry) for entry in list_history(db, product_id, tipo)]


__all__ = ["router"]
