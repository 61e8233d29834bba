from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional


class PagoCreate(BaseModel):
    prestamo_id: int
    monto_pagado: Decimal = Field(gt=0)
    monto_mora: Decimal = Field(default=Decimal("0"), ge=0)
    fecha_pago: Optional[datetime] = None
    # a partial payment is only persisted once the operator confirms it
    confirmar_pago_parcial: bool = False


class PagoOut(BaseModel):
    id: int
    prestamo_id: int
    monto_pagado: float
    monto_mora: float
    fecha_pago: datetime
    numero_semana: int
    estado: str
    es_pago_parcial: bool
    monto_restante: float

    class Config:
        from_attributes = True
