from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal, List
from datetime import date, datetime
from decimal import Decimal


class MovimientoCajaCreate(BaseModel):
    tipo: Literal["INGRESO", "EGRESO"]
    categoria: str = Field(..., min_length=1, max_length=50)
    monto: Decimal = Field(gt=0)  # ✅ keep Decimal (don’t use float)
    prestamo_id: Optional[int] = None
    cliente_id: Optional[int] = None
    descripcion: Optional[str] = None
    fecha: Optional[datetime] = None

    @field_validator("categoria", mode="before")
    def upper_categoria(cls, v):
        return str(v).strip().upper() if v is not None else v


class MovimientoCajaOut(BaseModel):
    id: int
    tipo: str
    categoria: str
    monto: float
    prestamo_id: Optional[int] = None
    cliente_id: Optional[int] = None
    descripcion: Optional[str] = None
    fecha: datetime
    creado_por: int

    class Config:
        from_attributes = True


class MovimientoDiaOut(BaseModel):
    fecha: date
    ingreso: float
    egreso: float


class ResumenCajaOut(BaseModel):
    saldo_actual: float
    total_ingresos: float
    total_egresos: float
    movimientos_por_dia: List[MovimientoDiaOut]
