from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field


class CatalogPayload(BaseModel):
    """Request body whose wire fields map onto ``products`` columns.

    ``COLUMNS`` maps each wire field to the column(s) it writes.
    """

    COLUMNS: ClassVar[dict[str, tuple[str, ...]]] = {}
    ACTOR_FIELD: ClassVar[Optional[str]] = None

    def to_columns(self, *, exclude_unset: bool = False) -> dict:
        values = self.model_dump(exclude_unset=exclude_unset)
        columns = {}
        for field_name, targets in self.COLUMNS.items():
            if field_name not in values:
                continue
            for target in targets:
                columns[target] = values[field_name]
        return columns

    def actor(self) -> Optional[str]:
        if self.ACTOR_FIELD is None:
            return None
        return getattr(self, self.ACTOR_FIELD)


# ==============================
# Fabric rolls
# ==============================
_ROLL_COLUMNS = {
    "tipo_tela": ("category",),
    "color": ("color",),
    "codigo": ("code",),
    "cantidad_total": ("quantity_total",),
    "cantidad_disponible": ("quantity_remaining",),
    "precio_por_metro": ("unit_price",),
    "precio_rollo_completo": ("whole_unit_price",),
    "fecha_compra": ("purchased_on",),
    "proveedor": ("supplier",),
    "registrado_por": ("registered_by",),
    "estado": ("status",),
}


class RollCreate(CatalogPayload):
    COLUMNS: ClassVar[dict[str, tuple[str, ...]]] = _ROLL_COLUMNS
    ACTOR_FIELD: ClassVar[Optional[str]] = "registrado_por"

    tipo_tela: str = Field(min_length=1)
    color: str = Field(min_length=1)
    codigo: str = Field(min_length=1)
    cantidad_total: Decimal = Field(ge=0, decimal_places=2)
    precio_por_metro: Decimal = Field(ge=0)
    precio_rollo_completo: Optional[Decimal] = Field(None, ge=0)
    fecha_compra: Optional[date] = None
    proveedor: Optional[str] = None
    registrado_por: Optional[str] = None


class RollUpdate(CatalogPayload):
    COLUMNS: ClassVar[dict[str, tuple[str, ...]]] = _ROLL_COLUMNS
    ACTOR_FIELD: ClassVar[Optional[str]] = "registrado_por"

    tipo_tela: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, min_length=1)
    codigo: Optional[str] = Field(None, min_length=1)
    cantidad_total: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    cantidad_disponible: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    precio_por_metro: Optional[Decimal] = Field(None, ge=0)
    precio_rollo_completo: Optional[Decimal] = Field(None, ge=0)
    fecha_compra: Optional[date] = None
    proveedor: Optional[str] = None
    registrado_por: Optional[str] = None
    estado: Optional[str] = None


class RollRead(BaseModel):
    id: int
    tipo_tela: Optional[str] = Field(None, validation_alias="category")
    color: Optional[str] = None
    codigo: Optional[str] = Field(None, validation_alias="code")
    cantidad_total: float = Field(validation_alias="quantity_total")
    cantidad_disponible: float = Field(validation_alias="quantity_remaining")
    precio_por_metro: float = Field(validation_alias="unit_price")
    precio_rollo_completo: Optional[float] = Field(None, validation_alias="whole_unit_price")
    fecha_compra: Optional[date] = Field(None, validation_alias="purchased_on")
    proveedor: Optional[str] = Field(None, validation_alias="supplier")
    registrado_por: Optional[str] = Field(None, validation_alias="registered_by")
    estado: str = Field(validation_alias="status")
    fecha_registro: datetime = Field(validation_alias="created_at")

    model_config = ConfigDict(from_attributes=True)


# ==============================
# Books
# ==============================
_BOOK_COLUMNS = {
    "titulo": ("name",),
    "autor": ("author",),
    "categoria": ("category",),
    "precio": ("unit_price",),
    "codigo": ("code",),
    "imageUrl": ("image_url",),
    "estado": ("status",),
}


class BookCreate(CatalogPayload):
    COLUMNS: ClassVar[dict[str, tuple[str, ...]]] = {**_BOOK_COLUMNS, "stock": ("quantity_total",)}

    titulo: str = Field(min_length=1)
    autor: Optional[str] = None
    categoria: Optional[str] = None
    precio: Decimal = Field(ge=0)
    stock: Decimal = Field(ge=0, decimal_places=2)
    codigo: Optional[str] = None
    imageUrl: Optional[str] = None


class BookUpdate(CatalogPayload):
    COLUMNS: ClassVar[dict[str, tuple[str, ...]]] = {
        **_BOOK_COLUMNS,
        "stock": ("quantity_total", "quantity_remaining"),
    }

    titulo: Optional[str] = Field(None, min_length=1)
    autor: Optional[str] = None
    categoria: Optional[str] = None
    precio: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    codigo: Optional[str] = None
    imageUrl: Optional[str] = None
    estado: Optional[str] = None


class BookRead(BaseModel):
    id: int
    titulo: Optional[str] = Field(None, validation_alias="name")
    autor: Optional[str] = Field(None, validation_alias="author")
    categoria: Optional[str] = Field(None, validation_alias="category")
    precio: float = Field(validation_alias="unit_price")
    stock: float = Field(validation_alias="quantity_remaining")
    codigo: Optional[str] = Field(None, validation_alias="code")
    imageUrl: Optional[str] = Field(None, validation_alias="image_url")
    estado: str = Field(validation_alias="status")
    fecha_registro: datetime = Field(validation_alias="created_at")

    model_config = ConfigDict(from_attributes=True)


# ==============================
# Coffees
# ==============================
_COFFEE_COLUMNS = {
    "nombre": ("name",),
    "tipo": ("category",),
    "origen": ("origin",),
    "precio": ("unit_price",),
    "codigo": ("code",),
    "imageUrl": ("image_url",),
    "estado": ("status",),
}


class CoffeeCreate(CatalogPayload):
    COLUMNS: ClassVar[dict[str, tuple[str, ...]]] = {**_COFFEE_COLUMNS, "stock": ("quantity_total",)}

    nombre: str = Field(min_length=1)
    tipo: Optional[str] = None
    origen: Optional[str] = None
    precio: Decimal = Field(ge=0)
    stock: Decimal = Field(ge=0, decimal_places=2)
    codigo: Optional[str] = None
    imageUrl: Optional[str] = None


class CoffeeUpdate(CatalogPayload):
    COLUMNS: ClassVar[dict[str, tuple[str, ...]]] = {
        **_COFFEE_COLUMNS,
        "stock": ("quantity_total", "quantity_remaining"),
    }

    nombre: Optional[str] = Field(None, min_length=1)
    tipo: Optional[str] = None
    origen: Optional[str] = None
    precio: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    codigo: Optional[str] = None
    imageUrl: Optional[str] = None
    estado: Optional[str] = None


class CoffeeRead(BaseModel):
    id: int
    nombre: Optional[str] = Field(None, validation_alias="name")
    tipo: Optional[str] = Field(None, validation_alias="category")
    origen: Optional[str] = Field(None, validation_alias="origin")
    precio: float = Field(validation_alias="unit_price")
    stock: float = Field(validation_alias="quantity_remaining")
    codigo: Optional[str] = Field(None, validation_alias="code")
    imageUrl: Optional[str] = Field(None, validation_alias="image_url")
    estado: str = Field(validation_alias="status")
    fecha_registro: datetime = Field(validation_alias="created_at")

    model_config = ConfigDict(from_attributes=True)
