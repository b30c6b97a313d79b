from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.constants import KIND_COFFEE
from app.dependencies import get_db
from app.schemas.product import CoffeeCreate, CoffeeRead, CoffeeUpdate
from app.services.product_service import create_product, delete_product, list_products, update_product

router = APIRouter(prefix="/cafes", tags=["Cafés"])


@router.get("", response_model=list[CoffeeRead])
def list_coffees(db: Session = Depends(get_db)):
    return [CoffeeRead.model_validate(coffee) for coffee in list_products(db, KIND_COFFEE)]


@router.post("", status_code=201)
def create_coffee(payload: CoffeeCreate, db: Session = Depends(get_db)):
    coffee = create_product(db, KIND_COFFEE, payload.to_columns())
    return {"id": coffee.id, "message": "Café agregado", "cafe": CoffeeRead.model_validate(coffee)}


@router.put("/{coffee_id}")
def update_coffee(coffee_id: int, payload: CoffeeUpdate, db: Session = Depends(get_db)):
    coffee = update_product(db, KIND_COFFEE, coffee_id, payload.to_columns(exclude_unset=True))
    return {"message": "Café actualizado", "cafe": CoffeeRead.model_validate(coffee)}


@router.delete("/{coffee_id}")
def delete_coffee(coffee_id: int, db: Session = Depends(get_db)):
    delete_product(db, KIND_COFFEE, coffee_id)
    return {"message": "Café eliminado"}


__all__ = ["router"]
