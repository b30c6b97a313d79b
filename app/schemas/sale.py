from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from app.core.constants import KIND_ROLL


class SaleCreate(BaseModel):
    product_id: int = Field(validation_alias=AliasChoices("rollo_id", "producto_id"))
    quantity: Decimal = Field(
        gt=0,
        decimal_places=2,
        validation_alias=AliasChoices("cantidad_vendida", "cantidad"),
    )
    seller: str = Field(min_length=1, validation_alias="vendedor")
    client: Optional[str] = Field(None, validation_alias="cliente")
    precomputed_total: Optional[Decimal] = Field(None, ge=0, validation_alias="precio_total")
    kind: Optional[str] = Field(None, validation_alias="tipo_producto")

    @model_validator(mode="before")
    @classmethod
    def roll_id_implies_roll(cls, data):
        # `rollo_id` only ever addresses fabric rolls.
        if isinstance(data, dict) and "rollo_id" in data and data.get("tipo_producto") is None:
            data = {**data, "tipo_producto": KIND_ROLL}
        return data


class SaleRead(BaseModel):
    id: int
    producto_id: int = Field(validation_alias="product_id")
    cantidad_vendida: float = Field(validation_alias="quantity")
    precio_unitario: float = Field(validation_alias="unit_price")
    precio_total: float = Field(validation_alias="total_price")
    vendedor: Optional[str] = Field(None, validation_alias="seller")
    cliente: Optional[str] = Field(None, validation_alias="client")
    fecha: datetime = Field(validation_alias="created_at")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class SaleReceipt(SaleRead):
    cantidad_restante: float
    estado: str


class SaleListItem(SaleRead):
    tipo_producto: str
    producto: Optional[str] = None
    codigo: Optional[str] = None
    color: Optional[str] = None
    tipo_tela: Optional[str] = None


class SaleResponse(BaseModel):
    message: str
    total: float
    venta: SaleReceipt
