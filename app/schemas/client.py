from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientCreate(BaseModel):
    nombre: str = Field(min_length=1)
    saldo_total: Decimal = Decimal("0")


class ClientUpdate(BaseModel):
    nombre: Optional[str] = Field(None, min_length=1)
    saldo_total: Optional[Decimal] = None


class ClientRead(BaseModel):
    id: int
    nombre: str = Field(validation_alias="name")
    saldo_total: float = Field(validation_alias="balance")

    model_config = ConfigDict(from_attributes=True)
