from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, Literal

Rol = Literal["ADMIN", "USUARIO", "COBRADOR"]


class UserRegister(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)
    nombre: str = Field(..., min_length=1, max_length=150)
    rol: Rol = "USUARIO"
    email: Optional[str] = None

    @field_validator("username", "nombre", mode="before")
    def strip_text(cls, v):
        return str(v).strip() if v is not None else v


class UserLogin(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    id: int
    username: str
    nombre: str
    email: Optional[str] = None
    rol: str
    activo: bool
    created_on: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    nombre: Optional[str] = None
    email: Optional[str] = None
    rol: Optional[Rol] = None
    activo: Optional[bool] = None
    password: Optional[str] = Field(default=None, min_length=1)


class CambiarCredenciales(BaseModel):
    password_actual: str
    nuevo_username: Optional[str] = None
    nueva_password: Optional[str] = Field(default=None, min_length=1)

    @field_validator("nuevo_username", mode="before")
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None
