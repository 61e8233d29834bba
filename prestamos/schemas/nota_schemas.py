from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Literal

TipoNota = Literal["GENERAL", "PAGO", "INCIDENCIA", "RECORDATORIO"]


class NotaBase(BaseModel):
    titulo: str = Field(..., min_length=1, max_length=200)
    contenido: str = Field(..., min_length=1)
    tipo: TipoNota = "GENERAL"
    importante: bool = False


class NotaCreate(NotaBase):
    pass


class NotaUpdate(BaseModel):
    titulo: Optional[str] = Field(default=None, min_length=1, max_length=200)
    contenido: Optional[str] = Field(default=None, min_length=1)
    tipo: Optional[TipoNota] = None
    importante: Optional[bool] = None


class NotaOut(NotaBase):
    id: int
    prestamo_id: int
    fecha_creacion: Optional[datetime] = None
    creado_por: Optional[int] = None

    class Config:
        from_attributes = True
