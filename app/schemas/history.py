from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HistoryRead(BaseModel):
    id: int
    producto_id: int = Field(validation_alias="product_id")
    accion: str = Field(validation_alias="action")
    detalles: Optional[str] = Field(None, validation_alias="details")
    usuario: Optional[str] = Field(None, validation_alias="actor")
    fecha: datetime = Field(validation_alias="created_at")

    model_config = ConfigDict(from_attributes=True)
