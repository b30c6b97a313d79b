from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.constants import KIND_BOOK
from app.dependencies import get_db
from app.schemas.product import BookCreate, BookRead, BookUpdate
from app.services.product_service import create_product, delete_product, list_products, update_product

router = APIRouter(prefix="/libros", tags=["Libros"])


@router.get("", response_model=list[BookRead])
def list_books(db: Session = Depends(get_db)):
    return [BookRead.model_validate(book) for book in list_products(db, KIND_BOOK)]


@router.post("", status_code=201)
def create_book(payload: BookCreate, db: Session = Depends(get_db)):
    book = create_product(db, KIND_BOOK, payload.to_columns())
    return {"id": book.id, "message": "Libro agregado", "libro": BookRead.model_validate(book)}


@router.put("/{book_id}")
def update_book(book_id: int, payload: BookUpdate, db: Session = Depends(get_db)):
    book = update_product(db, KIND_BOOK, book_id, payload.to_columns(exclude_unset=True))
    return {"message": "Libro actualizado", "libro": BookRead.model_validate(book)}


@router.delete("/{book_id}")
def delete_book(book_id: int, db: Session = Depends(get_db)):
    delete_product(db, KIND_BOOK, book_id)
    return {"message": "Libro eliminado"}


__all__ = ["router"]
