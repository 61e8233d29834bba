from pydantic import BaseModel
from datetime import date
from typing import Optional


class CobroDiaOut(BaseModel):
    prestamo_id: int
    cliente_id: int
    cliente_nombre: str
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    ruta: Optional[str] = None
    cobrador_id: Optional[int] = None

    numero_cuota: int
    monto_cuota: float
    proxima_fecha_pago: date
    estado: str
    dias_atraso: int


class CronogramaGlobalRow(BaseModel):
    prestamo_id: int
    cliente_id: int
    cliente_nombre: str
    cobrador_id: Optional[int] = None

    numero: int
    fecha: date
    monto: float
    # PENDIENTE / PAGADO / PARCIAL / ATRASADO
    estado: str
    monto_pagado: float = 0
    monto_restante: float = 0
