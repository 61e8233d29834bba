# prestamos/schemas/cobrador_schemas.py

from pydantic import BaseModel, Field
from typing import List, Optional


class CobradorBase(BaseModel):
    nombre: str = Field(..., min_length=1)
    telefono: str = Field(..., min_length=1)
    user_id: int
    zona: str = Field(..., min_length=1)
    activo: bool = True


class CobradorCreate(CobradorBase):
    """Data needed to register an existing COBRADOR user as a collector."""
    pass


class CobradorUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1)
    telefono: Optional[str] = Field(default=None, min_length=1)
    zona: Optional[str] = Field(default=None, min_length=1)
    activo: Optional[bool] = None


class CobradorOut(CobradorBase):
    id: int

    class Config:
        from_attributes = True


class AsignarClientesPayload(BaseModel):
    cliente_ids: List[int] = Field(..., min_length=1)
