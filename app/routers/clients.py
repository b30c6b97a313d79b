from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.dependencies import get_db
from app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from app.services.client_service import create_client, delete_client, list_clients, update_client

router = APIRouter(prefix="/clientes", tags=["Clientes"])


@router.get("", response_model=list[ClientRead])
def get_clients(db: Session = Depends(get_db)):
    return [ClientRead.model_validate(client) for client in list_clients(db)]


@router.post("", response_model=ClientRead, status_code=201)
def add_client(payload: ClientCreate, db: Session = Depends(get_db)):
    client = create_client(db, payload.nombre, payload.saldo_total)
    return ClientRead.model_validate(client)


@router.put("/{client_id}")
def edit_client(client_id: int, payload: ClientUpdate, db: Session = Depends(get_db)):
    client = update_client(
        db,
        client_id,
        {"name": payload.nombre, "balance": payload.saldo_total},
    )
    return {"message": "Cliente actualizado", "cliente": ClientRead.model_validate(client)}


@router.delete("/{client_id}")
def remove_client(client_id: int, db: Session = Depends(get_db)):
    delete_client(db, client_id)
    return {"message": "Cliente eliminado"}


__all__ = ["router"]
