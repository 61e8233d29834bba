from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ConfiguracionCreate(BaseModel):
    clave: str = Field(..., min_length=1)
    valor: str = Field(..., min_length=1)
    categoria: str = Field("sistema", min_length=1, max_length=50)
    descripcion: str = Field("", max_length=500)


class ConfiguracionUpdate(BaseModel):
    valor: Optional[str] = Field(default=None, min_length=1)
    categoria: Optional[str] = Field(default=None, min_length=1, max_length=50)
    descripcion: Optional[str] = Field(default=None, max_length=500)


class ConfiguracionOut(BaseModel):
    id: int
    clave: str
    valor: str
    categoria: str
    descripcion: Optional[str] = None
    updated_on: Optional[datetime] = None

    class Config:
        from_attributes = True
