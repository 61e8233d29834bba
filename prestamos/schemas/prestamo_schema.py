from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Optional, Literal

Frecuencia = Literal["SEMANAL", "QUINCENAL", "MENSUAL"]


class PrestamoCreate(BaseModel):
    cliente_id: int

    monto_prestado: Decimal = Field(gt=0)
    tasa_interes: Decimal = Field(gt=0)
    numero_semanas: int = Field(gt=0)
    fecha_prestamo: date
    frecuencia_pago: Frecuencia = "SEMANAL"

    tasa_mora: Decimal = Field(default=Decimal("5"), ge=0)
    fecha_inicial_personalizada: Optional[date] = None
    dia_pago: Optional[int] = Field(default=None, ge=0, le=6)


class PrestamoUpdate(BaseModel):
    monto_prestado: Optional[Decimal] = Field(default=None, gt=0)
    tasa_interes: Optional[Decimal] = Field(default=None, gt=0)
    numero_semanas: Optional[int] = Field(default=None, gt=0)
    fecha_prestamo: Optional[date] = None
    frecuencia_pago: Optional[Frecuencia] = None
    tasa_mora: Optional[Decimal] = Field(default=None, ge=0)
    estado: Optional[Literal["ACTIVO", "PAGADO", "ATRASADO"]] = None
    proxima_fecha_pago: Optional[date] = None
    # null clears these two
    fecha_inicial_personalizada: Optional[date] = None
    dia_pago: Optional[int] = Field(default=None, ge=0, le=6)


class PrestamoOut(BaseModel):
    id: int
    cliente_id: int

    monto_prestado: float
    tasa_interes: float
    tasa_mora: float
    fecha_prestamo: date
    frecuencia_pago: str

    estado: str
    monto_total_pagar: float
    numero_semanas: int
    pago_semanal: float
    semanas_pagadas: int
    proxima_fecha_pago: date
    dias_atraso: int
    monto_mora_acumulada: float

    fecha_inicial_personalizada: Optional[date] = None
    dia_pago: Optional[int] = None
    cronograma_eliminado: bool = False

    class Config:
        from_attributes = True


class CuotaOut(BaseModel):
    numero: int
    fecha: date
    monto: float
    # PENDIENTE / PAGADO / PARCIAL / ATRASADO
    estado: str
    monto_pagado: float = 0
    monto_restante: float = 0
    mora: float = 0
    pago_id: Optional[int] = None


class AmortizacionRow(BaseModel):
    numero: int
    fecha: date
    pago: float
    principal: float
    interes: float
    balance: float


class CalculoPrestamo(BaseModel):
    monto_prestado: Decimal = Field(gt=0)
    tasa_interes: Decimal = Field(gt=0)
    numero_semanas: int = Field(gt=0)
    frecuencia_pago: Frecuencia = "SEMANAL"
    fecha_inicio: Optional[date] = None


class ResultadoCalculoPrestamo(BaseModel):
    monto_prestado: float
    tasa_interes: float
    interes: float
    monto_total_pagar: float
    pago_semanal: float
    numero_pagos: int
    frecuencia_pago: str


class FechaInicialPayload(BaseModel):
    fecha_inicial_personalizada: Optional[date] = None
    cronograma_eliminado: Optional[bool] = None


class DiaPagoPayload(BaseModel):
    dia_pago: int = Field(ge=0, le=6)


class ActualizarEstadosOut(BaseModel):
    revisados: int
    atrasados: int
    al_dia: int
