import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFound
from app.models.clients import Client

logger = logging.getLogger(__name__)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def get_client(db: Session, client_id: int) -> Client:
    client = db.get(Client, client_id)
    if client is None:
        raise NotFound("Cliente no encontrado")
    return client


def list_clients(db: Session) -> list[Client]:
    return list(db.execute(select(Client).order_by(Client.id.desc())).scalars().all())


def create_client(db: Session, name: str, balance=0) -> Client:
    client = Client(name=name, balance=balance)
    db.add(client)
    _commit(db)
    logger.info("Registered client %s", client.id)
    return client


def update_client(db: Session, client_id: int, fields: dict) -> Client:
    client = get_client(db, client_id)
    for column, value in fields.items():
        if value is not None:
            setattr(client, column, value)
    _commit(db)
    return client


def delete_client(db: Session, client_id: int) -> None:
    client = get_client(db, client_id)
    db.delete(client)
    _commit(db)
    logger.info("Deleted client %s", client_id)
