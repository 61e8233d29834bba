from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, joinedload

from prestamos.core.security import AUTHENTICATED
from prestamos.models.cliente_model import Cliente
from prestamos.models.prestamo_model import Prestamo
from prestamos.schemas.cobranza_schemas import CobroDiaOut, CronogramaGlobalRow
from prestamos.utils.database import get_db
from prestamos.utils.loan_status import PAGADO, build_cronograma

router = APIRouter(prefix="/api", tags=["Cobranza"], dependencies=AUTHENTICATED)


def open_loans_query(db: Session, cobrador_id: Optional[int]):
    q = (
        db.query(Prestamo)
        .join(Cliente, Cliente.id == Prestamo.cliente_id)
        .options(joinedload(Prestamo.cliente))
        .filter(Prestamo.estado != PAGADO)
    )
    if cobrador_id is not None:
        q = q.filter(Cliente.cobrador_id == cobrador_id)
    return q


@router.get("/cobros-dia", response_model=list[CobroDiaOut])
def cobros_dia(
        fecha: Optional[date] = Query(None),
        cobrador_id: Optional[int] = Query(None),
        db: Session = Depends(get_db),
):
    """Open loans whose next payment falls on ``fecha`` (today by default)."""
    fecha = fecha or date.today()

    prestamos = (
        open_loans_query(db, cobrador_id)
        .filter(Prestamo.proxima_fecha_pago == fecha)
        .order_by(Cliente.ruta.asc(), Cliente.nombre.asc())
        .all()
    )

    return [
        CobroDiaOut(
            prestamo_id=p.id,
            cliente_id=p.cliente_id,
            cliente_nombre=p.cliente.nombre,
            telefono=p.cliente.telefono,
            direccion=p.cliente.direccion,
            ruta=p.cliente.ruta,
            cobrador_id=p.cliente.cobrador_id,
            numero_cuota=p.semanas_pagadas + 1,
            monto_cuota=float(p.pago_semanal),
            proxima_fecha_pago=p.proxima_fecha_pago,
            estado=p.estado,
            dias_atraso=p.dias_atraso,
        )
        for p in prestamos
    ]


@router.get("/cronograma-global", response_model=list[CronogramaGlobalRow])
def cronograma_global(
        fecha: Optional[date] = Query(None),
        estado: Optional[str] = Query(None),
        cobrador_id: Optional[int] = Query(None),
        db: Session = Depends(get_db),
):
    """Every period of every open loan, ordered by due date."""
    today = date.today()
    estado = estado.upper() if estado else None

    prestamos = (
        open_loans_query(db, cobrador_id)
        .filter(Prestamo.cronograma_eliminado.is_(False))
        .order_by(Prestamo.id.asc())
        .all()
    )

    rows = []
    for p in prestamos:
        for cuota in build_cronograma(p, today):
            if fecha is not None and cuota["fecha"] != fecha:
                continue
            if estado and cuota["estado"] != estado:
                continue
            rows.append(
                CronogramaGlobalRow(
                    prestamo_id=p.id,
                    cliente_id=p.cliente_id,
                    cliente_nombre=p.cliente.nombre,
                    cobrador_id=p.cliente.cobrador_id,
                    numero=cuota["numero"],
                    fecha=cuota["fecha"],
                    monto=float(cuota["monto"]),
                    estado=cuota["estado"],
                    monto_pagado=float(cuota["monto_pagado"]),
                    monto_restante=float(cuota["monto_restante"]),
                )
            )

    rows.sort(key=lambda r: (r.fecha, r.prestamo_id, r.numero))
    return rows
