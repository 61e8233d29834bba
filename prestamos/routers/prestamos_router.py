import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED
from prestamos.models.cliente_model import Cliente
from prestamos.models.prestamo_model import Prestamo
from prestamos.schemas.cliente_schemas import TotalPagadoOut
from prestamos.schemas.prestamo_schema import (
    ActualizarEstadosOut,
    AmortizacionRow,
    CuotaOut,
    DiaPagoPayload,
    FechaInicialPayload,
    PrestamoCreate,
    PrestamoOut,
    PrestamoUpdate,
)
from prestamos.utils.database import get_db
from prestamos.utils.loan_calculations import (
    build_amortization_schedule,
    compute_loan_totals,
    money,
)
from prestamos.utils.loan_status import (
    ATRASADO,
    PAGADO,
    build_cronograma,
    first_due_date,
    period_due_date,
    refresh_status,
    total_pagado,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prestamos", tags=["Prestamos"], dependencies=AUTHENTICATED)

# loan columns a PUT may set back to null
NULLABLE_FIELDS = ("fecha_inicial_personalizada", "dia_pago")
# fields that move the payment calendar
CALENDAR_FIELDS = {"fecha_prestamo", "frecuencia_pago", "numero_semanas", "fecha_inicial_personalizada", "dia_pago"}


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def get_prestamo_or_404(db: Session, prestamo_id: int) -> Prestamo:
    prestamo = db.query(Prestamo).filter(Prestamo.id == prestamo_id).first()
    if not prestamo:
        raise HTTPException(404, "Préstamo no encontrado")
    return prestamo


def apply_totals(prestamo: Prestamo) -> None:
    try:
        total, periodic = compute_loan_totals(
            prestamo.monto_prestado, prestamo.tasa_interes, prestamo.numero_semanas
        )
    except ValueError as e:
        raise HTTPException(400, str(e))
    prestamo.monto_total_pagar = total
    prestamo.pago_semanal = periodic


# =================================================
# 🔹 STATIC ROUTES
# =================================================
@router.get("", response_model=list[PrestamoOut])
def list_prestamos(
        cliente_id: Optional[int] = Query(None),
        estado: Optional[str] = Query(None),
        db: Session = Depends(get_db),
):
    q = db.query(Prestamo)
    if cliente_id is not None:
        q = q.filter(Prestamo.cliente_id == cliente_id)
    if estado:
        q = q.filter(Prestamo.estado == estado.upper())
    return q.order_by(Prestamo.fecha_prestamo.desc(), Prestamo.id.desc()).all()


@router.post("", response_model=PrestamoOut, status_code=status.HTTP_201_CREATED)
def create_prestamo(payload: PrestamoCreate, db: Session = Depends(get_db)):
    cliente = db.query(Cliente.id).filter(Cliente.id == payload.cliente_id).first()
    if not cliente:
        raise HTTPException(404, "Cliente no encontrado")

    prestamo = Prestamo(
        cliente_id=payload.cliente_id,
        monto_prestado=money(payload.monto_prestado),
        tasa_interes=payload.tasa_interes,
        tasa_mora=payload.tasa_mora,
        numero_semanas=payload.numero_semanas,
        fecha_prestamo=payload.fecha_prestamo,
        frecuencia_pago=payload.frecuencia_pago,
        fecha_inicial_personalizada=payload.fecha_inicial_personalizada,
        dia_pago=payload.dia_pago,
        estado="ACTIVO",
        semanas_pagadas=0,
        dias_atraso=0,
        monto_mora_acumulada=money(0),
        cronograma_eliminado=False,
    )
    apply_totals(prestamo)
    prestamo.proxima_fecha_pago = first_due_date(prestamo)

    db.add(prestamo)
    db.commit()
    db.refresh(prestamo)
    logger.info(
        "Prestamo created: id=%s cliente=%s total=%s cuota=%s",
        prestamo.id, prestamo.cliente_id, prestamo.monto_total_pagar, prestamo.pago_semanal,
    )
    return prestamo


@router.post("/actualizar-estados", response_model=ActualizarEstadosOut)
def actualizar_estados(db: Session = Depends(get_db)):
    """Re-evaluate days late and estado for every loan that is still open."""
    today = date.today()
    abiertos = db.query(Prestamo).filter(Prestamo.estado != PAGADO).all()

    atrasados = 0
    for prestamo in abiertos:
        if refresh_status(prestamo, today) == ATRASADO:
            atrasados += 1

    db.commit()
    logger.info("Loan states refreshed: %d revisados, %d atrasados", len(abiertos), atrasados)
    return ActualizarEstadosOut(
        revisados=len(abiertos),
        atrasados=atrasados,
        al_dia=len(abiertos) - atrasados,
    )


# =================================================
# 🔹 DYNAMIC ROUTES
# =================================================
@router.get("/{prestamo_id}", response_model=PrestamoOut)
def get_prestamo(prestamo_id: int, db: Session = Depends(get_db)):
    return get_prestamo_or_404(db, prestamo_id)


@router.put("/{prestamo_id}", response_model=PrestamoOut)
def update_prestamo(prestamo_id: int, payload: PrestamoUpdate, db: Session = Depends(get_db)):
    prestamo = get_prestamo_or_404(db, prestamo_id)
    data = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }

    if "numero_semanas" in data and data["numero_semanas"] < prestamo.semanas_pagadas:
        raise HTTPException(
            400, "El número de pagos no puede ser menor que los pagos ya realizados"
        )

    estado = data.pop("estado", None)
    proxima = data.pop("proxima_fecha_pago", None)

    for k, v in data.items():
        setattr(prestamo, k, v)

    if {"monto_prestado", "tasa_interes", "numero_semanas"} & data.keys():
        apply_totals(prestamo)

    if proxima is not None:
        prestamo.proxima_fecha_pago = proxima
    elif CALENDAR_FIELDS & data.keys():
        prestamo.proxima_fecha_pago = period_due_date(prestamo, prestamo.semanas_pagadas + 1)

    if estado is not None:
        prestamo.estado = estado
    else:
        refresh_status(prestamo)

    db.commit()
    db.refresh(prestamo)
    logger.info("Prestamo updated: id=%s fields=%s", prestamo.id, sorted(payload.model_fields_set))
    return prestamo


@router.delete("/{prestamo_id}")
def delete_prestamo(prestamo_id: int, db: Session = Depends(get_db)):
    prestamo = get_prestamo_or_404(db, prestamo_id)
    n_pagos = len(prestamo.pagos)

    db.delete(prestamo)
    db.commit()
    logger.info("Prestamo deleted: id=%s (%d pagos removed)", prestamo_id, n_pagos)
    return {"message": "Préstamo eliminado correctamente"}


@router.get("/{prestamo_id}/total-pagado", response_model=TotalPagadoOut)
def total_pagado_prestamo(prestamo_id: int, db: Session = Depends(get_db)):
    prestamo = get_prestamo_or_404(db, prestamo_id)
    return TotalPagadoOut(totalPagado=float(total_pagado(prestamo)))


@router.get("/{prestamo_id}/cronograma", response_model=list[CuotaOut])
def get_cronograma(prestamo_id: int, db: Session = Depends(get_db)):
    prestamo = get_prestamo_or_404(db, prestamo_id)
    if prestamo.cronograma_eliminado:
        return []
    return build_cronograma(prestamo, date.today())


@router.get("/{prestamo_id}/amortizacion", response_model=list[AmortizacionRow])
def get_amortizacion(prestamo_id: int, db: Session = Depends(get_db)):
    prestamo = get_prestamo_or_404(db, prestamo_id)

    try:
        rows = build_amortization_schedule(
            prestamo.monto_prestado,
            prestamo.tasa_interes,
            prestamo.numero_semanas,
            prestamo.fecha_prestamo,
            prestamo.frecuencia_pago,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))

    # dates follow the loan's real calendar (custom start / payment weekday)
    for row in rows:
        row["fecha"] = period_due_date(prestamo, row["numero"])
    return rows


@router.post("/{prestamo_id}/set-fecha-inicial", response_model=PrestamoOut)
def set_fecha_inicial(
        prestamo_id: int,
        payload: FechaInicialPayload,
        db: Session = Depends(get_db),
):
    prestamo = get_prestamo_or_404(db, prestamo_id)

    if "fecha_inicial_personalizada" in payload.model_fields_set:
        prestamo.fecha_inicial_personalizada = payload.fecha_inicial_personalizada
    if payload.cronograma_eliminado is not None:
        prestamo.cronograma_eliminado = payload.cronograma_eliminado

    if prestamo.estado != PAGADO:
        prestamo.proxima_fecha_pago = period_due_date(prestamo, prestamo.semanas_pagadas + 1)
        refresh_status(prestamo)

    db.commit()
    db.refresh(prestamo)
    return prestamo


@router.post("/{prestamo_id}/cambiar-dia-pago", response_model=PrestamoOut)
def cambiar_dia_pago(prestamo_id: int, payload: DiaPagoPayload, db: Session = Depends(get_db)):
    prestamo = get_prestamo_or_404(db, prestamo_id)
    if prestamo.estado == PAGADO:
        raise HTTPException(400, "El préstamo ya está pagado")

    prestamo.dia_pago = payload.dia_pago
    prestamo.proxima_fecha_pago = period_due_date(prestamo, prestamo.semanas_pagadas + 1)
    refresh_status(prestamo)

    db.commit()
    db.refresh(prestamo)
    logger.info("Prestamo %s: dia_pago=%s proxima=%s", prestamo.id, prestamo.dia_pago, prestamo.proxima_fecha_pago)
    return prestamo
