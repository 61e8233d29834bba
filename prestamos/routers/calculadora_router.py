from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from prestamos.core.security import AUTHENTICATED
from prestamos.schemas.prestamo_schema import (
    AmortizacionRow,
    CalculoPrestamo,
    ResultadoCalculoPrestamo,
)
from prestamos.utils.loan_calculations import (
    build_amortization_schedule,
    compute_loan_totals,
    money,
)

router = APIRouter(prefix="/api/calcular-prestamo", tags=["Calculadora"], dependencies=AUTHENTICATED)


@router.post("", response_model=ResultadoCalculoPrestamo)
def calcular_prestamo(payload: CalculoPrestamo):
    """Preview of a loan's totals; nothing is stored."""
    try:
        total, periodic = compute_loan_totals(
            payload.monto_prestado, payload.tasa_interes, payload.numero_semanas
        )
    except ValueError as e:
        raise HTTPException(400, str(e))

    return ResultadoCalculoPrestamo(
        monto_prestado=float(money(payload.monto_prestado)),
        tasa_interes=float(payload.tasa_interes),
        interes=float(money(total - money(payload.monto_prestado))),
        monto_total_pagar=float(total),
        pago_semanal=float(periodic),
        numero_pagos=payload.numero_semanas,
        frecuencia_pago=payload.frecuencia_pago,
    )


@router.post("/amortizacion", response_model=list[AmortizacionRow])
def calcular_amortizacion(payload: CalculoPrestamo):
    try:
        return build_amortization_schedule(
            payload.monto_prestado,
            payload.tasa_interes,
            payload.numero_semanas,
            payload.fecha_inicio or date.today(),
            payload.frecuencia_pago,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))
