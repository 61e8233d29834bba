import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED
from prestamos.models.pago_model import Pago
from prestamos.models.prestamo_model import Prestamo
from prestamos.schemas.pago_schema import PagoCreate, PagoOut
from prestamos.utils.database import get_db
from prestamos.utils.loan_calculations import classify_payment, money
from prestamos.utils.loan_status import (
    ACTIVO,
    ATRASADO,
    PAGADO,
    period_due_date,
    recompute_from_pagos,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pagos", tags=["Pagos"], dependencies=AUTHENTICATED)


@router.get("", response_model=list[PagoOut])
def list_pagos(prestamo_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    q = db.query(Pago)
    if prestamo_id is not None:
        q = q.filter(Pago.prestamo_id == prestamo_id)
    return q.order_by(Pago.fecha_pago.desc(), Pago.id.desc()).all()


@router.post("", response_model=PagoOut, status_code=status.HTTP_201_CREATED)
def create_pago(payload: PagoCreate, db: Session = Depends(get_db)):
    """
    Register a payment against a loan.

    - below the periodic amount it is partial and needs confirmar_pago_parcial,
      otherwise 409 is returned and nothing is stored
    - a full payment closes one period and moves the next due date
    - the loan is PAGADO once every period is closed
    """
    prestamo = db.query(Prestamo).filter(Prestamo.id == payload.prestamo_id).first()
    if not prestamo:
        raise HTTPException(404, "Préstamo no encontrado")

    if prestamo.estado == PAGADO:
        raise HTTPException(400, "El préstamo ya está pagado")

    periodic = money(prestamo.pago_semanal)
    try:
        es_parcial, restante = classify_payment(payload.monto_pagado, periodic)
    except ValueError as e:
        raise HTTPException(400, str(e))

    if es_parcial and not payload.confirmar_pago_parcial:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "El monto es menor que la cuota. Confirme el pago parcial.",
                "requiere_confirmacion": True,
                "pago_semanal": float(periodic),
                "monto_faltante": float(restante),
            },
        )

    pay_dt: datetime = payload.fecha_pago or datetime.now()
    vencimiento = prestamo.proxima_fecha_pago
    late = pay_dt.date() > vencimiento

    pago = Pago(
        prestamo_id=prestamo.id,
        monto_pagado=money(payload.monto_pagado),
        monto_mora=money(payload.monto_mora),
        fecha_pago=pay_dt,
        numero_semana=prestamo.semanas_pagadas + 1,
        estado="ATRASADO" if late else "A_TIEMPO",
        es_pago_parcial=es_parcial,
        monto_restante=restante,
    )
    db.add(pago)

    if payload.monto_mora:
        prestamo.monto_mora_acumulada = money(prestamo.monto_mora_acumulada) + money(payload.monto_mora)

    if not es_parcial:
        prestamo.semanas_pagadas += 1

        if prestamo.semanas_pagadas >= prestamo.numero_semanas:
            prestamo.estado = PAGADO
            prestamo.dias_atraso = 0
        else:
            prestamo.proxima_fecha_pago = period_due_date(prestamo, prestamo.semanas_pagadas + 1)
            prestamo.estado = ATRASADO if late else ACTIVO
            prestamo.dias_atraso = (pay_dt.date() - vencimiento).days if late else 0

    db.commit()
    db.refresh(pago)
    logger.info(
        "Pago registered: id=%s prestamo=%s monto=%s parcial=%s semana=%s estado_prestamo=%s",
        pago.id, prestamo.id, pago.monto_pagado, es_parcial, pago.numero_semana, prestamo.estado,
    )
    return pago


@router.get("/{pago_id}", response_model=PagoOut)
def get_pago(pago_id: int, db: Session = Depends(get_db)):
    pago = db.query(Pago).filter(Pago.id == pago_id).first()
    if not pago:
        raise HTTPException(404, "Pago no encontrado")
    return pago


@router.delete("/{pago_id}")
def delete_pago(pago_id: int, db: Session = Depends(get_db)):
    """Remove a payment and rebuild the loan counters from what is left."""
    pago = db.query(Pago).filter(Pago.id == pago_id).first()
    if not pago:
        raise HTTPException(404, "Pago no encontrado")

    prestamo = pago.prestamo
    prestamo.pagos.remove(pago)
    if pago.monto_mora:
        prestamo.monto_mora_acumulada = max(
            money(0), money(prestamo.monto_mora_acumulada) - money(pago.monto_mora)
        )
    recompute_from_pagos(prestamo)

    db.commit()
    logger.info(
        "Pago deleted: id=%s prestamo=%s semanas_pagadas=%s estado=%s",
        pago_id, prestamo.id, prestamo.semanas_pagadas, prestamo.estado,
    )
    return {"message": "Pago eliminado correctamente"}
