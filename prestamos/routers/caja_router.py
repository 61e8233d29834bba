# prestamos/routers/caja_router.py

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED, get_current_user
from prestamos.models.movimiento_caja_model import MovimientoCaja
from prestamos.models.user_model import User
from prestamos.schemas.caja_schemas import (
    MovimientoCajaCreate,
    MovimientoCajaOut,
    MovimientoDiaOut,
    ResumenCajaOut,
)
from prestamos.utils.database import get_db
from prestamos.utils.loan_calculations import money

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/caja", tags=["Caja"], dependencies=AUTHENTICATED)


@router.get("/movimientos", response_model=list[MovimientoCajaOut])
def list_movimientos(
        fecha_inicio: Optional[date] = Query(default=None),
        fecha_fin: Optional[date] = Query(default=None),
        tipo: Optional[Literal["INGRESO", "EGRESO"]] = Query(default=None),
        db: Session = Depends(get_db),
):
    q = db.query(MovimientoCaja)

    if fecha_inicio is not None:
        q = q.filter(MovimientoCaja.fecha >= datetime.combine(fecha_inicio, time.min))

    if fecha_fin is not None:
        # inclusive end day
        q = q.filter(MovimientoCaja.fecha < datetime.combine(fecha_fin + timedelta(days=1), time.min))

    if tipo is not None:
        q = q.filter(MovimientoCaja.tipo == tipo)

    return q.order_by(MovimientoCaja.fecha.desc(), MovimientoCaja.id.desc()).all()


@router.post("/movimientos", response_model=MovimientoCajaOut, status_code=status.HTTP_201_CREATED)
def create_movimiento(
        payload: MovimientoCajaCreate,
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user),
):
    data = payload.model_dump()
    data["monto"] = money(data["monto"])
    if data.get("fecha") is None:
        data["fecha"] = datetime.now()

    mov = MovimientoCaja(creado_por=user.id, **data)
    db.add(mov)
    db.commit()
    db.refresh(mov)
    logger.info("Caja %s registered: id=%s categoria=%s monto=%s", mov.tipo, mov.id, mov.categoria, mov.monto)
    return mov


@router.get("/movimientos/{movimiento_id}", response_model=MovimientoCajaOut)
def get_movimiento(movimiento_id: int, db: Session = Depends(get_db)):
    mov = db.query(MovimientoCaja).filter(MovimientoCaja.id == movimiento_id).first()
    if not mov:
        raise HTTPException(status_code=404, detail="Movimiento no encontrado")
    return mov


@router.delete("/movimientos/{movimiento_id}")
def delete_movimiento(movimiento_id: int, db: Session = Depends(get_db)):
    mov = db.query(MovimientoCaja).filter(MovimientoCaja.id == movimiento_id).first()
    if not mov:
        raise HTTPException(status_code=404, detail="Movimiento no encontrado")

    db.delete(mov)
    db.commit()
    logger.info("Caja movimiento deleted: id=%s", movimiento_id)
    return {"message": "Movimiento eliminado correctamente"}


@router.get("/resumen", response_model=ResumenCajaOut)
def resumen_caja(db: Session = Depends(get_db)):
    """Balance, totals by type and per-day totals (newest day first)."""
    total_ingresos = Decimal("0")
    total_egresos = Decimal("0")
    por_dia = {}

    for mov in db.query(MovimientoCaja).all():
        monto = money(mov.monto)
        dia = por_dia.setdefault(mov.fecha.date(), {"ingreso": Decimal("0"), "egreso": Decimal("0")})
        if mov.tipo == "INGRESO":
            total_ingresos += monto
            dia["ingreso"] += monto
        else:
            total_egresos += monto
            dia["egreso"] += monto

    return ResumenCajaOut(
        saldo_actual=float(money(total_ingresos - total_egresos)),
        total_ingresos=float(money(total_ingresos)),
        total_egresos=float(money(total_egresos)),
        movimientos_por_dia=[
            MovimientoDiaOut(fecha=d, ingreso=float(v["ingreso"]), egreso=float(v["egreso"]))
            for d, v in sorted(por_dia.items(), reverse=True)
        ],
    )
