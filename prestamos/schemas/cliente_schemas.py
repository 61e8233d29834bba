from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


class ClienteBase(BaseModel):
    nombre: str = Field(..., min_length=1)
    telefono: str = Field(..., min_length=1)
    direccion: str = Field(..., min_length=1)
    # generated as CL-<n> when omitted
    documento_identidad: Optional[str] = None
    email: Optional[str] = None
    notas: Optional[str] = None
    cobrador_id: Optional[int] = None
    ruta: Optional[str] = None

    @field_validator("documento_identidad", "email", "notas", "ruta", mode="before")
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class ClienteCreate(ClienteBase):
    pass


class ClienteUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1)
    telefono: Optional[str] = Field(default=None, min_length=1)
    direccion: Optional[str] = Field(default=None, min_length=1)
    documento_identidad: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    notas: Optional[str] = None
    cobrador_id: Optional[int] = None
    ruta: Optional[str] = None


class ClienteOut(ClienteBase):
    id: int
    documento_identidad: str
    fecha_registro: Optional[datetime] = None

    class Config:
        from_attributes = True


class TotalPagadoOut(BaseModel):
    totalPagado: float
