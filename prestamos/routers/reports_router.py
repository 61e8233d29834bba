from datetime import date, datetime, time, timedelta

from fastapi import APIRouter, Depends
from sqlalchemy import extract, func, text
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED
from prestamos.models.cliente_model import Cliente
from prestamos.models.pago_model import Pago
from prestamos.models.prestamo_model import Prestamo
from prestamos.schemas.cliente_schemas import ClienteOut
from prestamos.schemas.pago_schema import PagoOut
from prestamos.schemas.prestamo_schema import PrestamoOut
from prestamos.utils.database import get_db

router = APIRouter(prefix="/api", tags=["Reports"], dependencies=AUTHENTICATED)

ESTADOS = ("ACTIVO", "ATRASADO", "PAGADO")


def monthly_totals(db: Session, fecha_col, monto_col):
    """(year, month, sum) rows grouped in the database."""
    anio = extract("year", fecha_col)
    mes = extract("month", fecha_col)
    return (
        db.query(anio, mes, func.coalesce(func.sum(monto_col), 0))
        .group_by(anio, mes)
        .all()
    )


@router.get("/estadisticas")
def estadisticas(db: Session = Depends(get_db)):
    """Dashboard counters plus the five most recent loans, payments and clients."""
    hoy = date.today()
    inicio = datetime.combine(hoy, time.min)
    fin = inicio + timedelta(days=1)

    prestamos_activos = db.query(func.count(Prestamo.id)).filter(Prestamo.estado == "ACTIVO").scalar()
    prestamos_atrasados = db.query(func.count(Prestamo.id)).filter(Prestamo.estado == "ATRASADO").scalar()
    total_prestado = db.query(func.coalesce(func.sum(Prestamo.monto_prestado), 0)).scalar()
    total_moras = db.query(func.coalesce(func.sum(Prestamo.monto_mora_acumulada), 0)).scalar()

    pagos_hoy = (
        db.query(func.coalesce(func.sum(Pago.monto_pagado), 0))
        .filter(Pago.fecha_pago >= inicio, Pago.fecha_pago < fin)
        .scalar()
    )

    ultimos_prestamos = (
        db.query(Prestamo).order_by(Prestamo.fecha_prestamo.desc(), Prestamo.id.desc()).limit(5).all()
    )
    ultimos_pagos = db.query(Pago).order_by(Pago.fecha_pago.desc(), Pago.id.desc()).limit(5).all()
    ultimos_clientes = (
        db.query(Cliente).order_by(Cliente.fecha_registro.desc(), Cliente.id.desc()).limit(5).all()
    )

    return {
        "prestamosActivos": prestamos_activos or 0,
        "totalPrestado": float(total_prestado or 0),
        "montosPagosHoy": float(pagos_hoy or 0),
        "prestamosAtrasados": prestamos_atrasados or 0,
        "totalMoras": float(total_moras or 0),
        "ultimosPrestamos": [PrestamoOut.model_validate(p) for p in ultimos_prestamos],
        "ultimosPagos": [PagoOut.model_validate(p) for p in ultimos_pagos],
        "ultimosClientes": [ClienteOut.model_validate(c) for c in ultimos_clientes],
    }


@router.get("/reportes/resumen")
def resumen(db: Session = Depends(get_db)):
    por_estado = {e: {"cantidad": 0, "monto_prestado": 0.0, "monto_total_pagar": 0.0} for e in ESTADOS}
    rows = (
        db.query(
            Prestamo.estado,
            func.count(Prestamo.id),
            func.coalesce(func.sum(Prestamo.monto_prestado), 0),
            func.coalesce(func.sum(Prestamo.monto_total_pagar), 0),
        )
        .group_by(Prestamo.estado)
        .all()
    )
    for estado, cantidad, prestado, total in rows:
        por_estado[estado] = {
            "cantidad": cantidad,
            "monto_prestado": float(prestado),
            "monto_total_pagar": float(total),
        }

    mensual = {}
    for anio, mes, monto in monthly_totals(db, Prestamo.fecha_prestamo, Prestamo.monto_prestado):
        key = f"{int(anio):04d}-{int(mes):02d}"
        mensual.setdefault(key, {"mes": key, "prestado": 0.0, "cobrado": 0.0})["prestado"] = float(monto)
    for anio, mes, monto in monthly_totals(db, Pago.fecha_pago, Pago.monto_pagado):
        key = f"{int(anio):04d}-{int(mes):02d}"
        mensual.setdefault(key, {"mes": key, "prestado": 0.0, "cobrado": 0.0})["cobrado"] = float(monto)

    cartera = db.execute(
        text("""
             select c.cobrador_id                                                  as cobrador_id,
                    coalesce(co.nombre, 'Sin cobrador')                            as cobrador,
                    count(p.id)                                                    as prestamos,
                    coalesce(sum(case
                                 when p.monto_total_pagar - coalesce(pg.pagado, 0) > 0
                                     then p.monto_total_pagar - coalesce(pg.pagado, 0)
                                 else 0 end), 0)                           as saldo_pendiente
             from prestamos p
                      join clientes c on c.id = p.cliente_id
                      left join cobradores co on co.id = c.cobrador_id
                      left join (select prestamo_id, sum(monto_pagado) as pagado
                                 from pagos
                                 group by prestamo_id) pg on pg.prestamo_id = p.id
             where p.estado <> 'PAGADO'
             group by c.cobrador_id, co.nombre
             order by cobrador
             """)
    ).mappings().all()

    return {
        "por_estado": por_estado,
        "mensual": [mensual[k] for k in sorted(mensual)],
        "cartera_por_cobrador": [
            {
                "cobrador_id": r["cobrador_id"],
                "cobrador": r["cobrador"],
                "prestamos": r["prestamos"],
                "saldo_pendiente": float(r["saldo_pendiente"]),
            }
            for r in cartera
        ],
    }
