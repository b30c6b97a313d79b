from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.constants import KIND_ROLL
from app.dependencies import get_db
from app.schemas.product import RollCreate, RollRead, RollUpdate
from app.services.product_service import create_product, delete_product, list_products, update_product

router = APIRouter(prefix="/rollos", tags=["Rollos"])


@router.get("", response_model=list[RollRead])
def list_rolls(db: Session = Depends(get_db)):
    return [RollRead.model_validate(roll) for roll in list_products(db, KIND_ROLL)]


@router.post("", response_model=RollRead, status_code=201)
def create_roll(payload: RollCreate, db: Session = Depends(get_db)):
    roll = create_product(db, KIND_ROLL, payload.to_columns(), actor=payload.actor())
    return RollRead.model_validate(roll)


@router.put("/{roll_id}")
def update_roll(roll_id: int, payload: RollUpdate, db: Session = Depends(get_db)):
    roll = update_product(
        db,
        KIND_ROLL,
        roll_id,
        payload.to_columns(exclude_unset=True),
        actor=payload.actor(),
    )
    return {"message": "Rollo actualizado", "rollo": RollRead.model_validate(roll)}


@router.delete("/{roll_id}")
def delete_roll(roll_id: int, db: Session = Depends(get_db)):
    delete_product(db, KIND_ROLL, roll_id)
    return {"message": "Rollo eliminado"}


__all__ = ["router"]
