"""Loan counters and status derived from a loan's terms and its payments."""

from datetime import date
from typing import Optional

from prestamos.models.prestamo_model import Prestamo
from prestamos.utils.loan_calculations import (
    due_date,
    money,
    next_weekday_on_or_after,
)

ACTIVO = "ACTIVO"
PAGADO = "PAGADO"
ATRASADO = "ATRASADO"


def period_due_date(prestamo: Prestamo, numero: int) -> date:
    """
    Due date of period ``numero`` (1-based).

    Every period is counted from the same anchor (custom first date or loan
    date) so monthly dates clamped to a short month do not drift.
    """
    if prestamo.fecha_inicial_personalizada:
        fecha = due_date(prestamo.fecha_inicial_personalizada, numero - 1, prestamo.frecuencia_pago)
    else:
        fecha = due_date(prestamo.fecha_prestamo, numero, prestamo.frecuencia_pago)

    if prestamo.dia_pago is not None:
        fecha = next_weekday_on_or_after(fecha, prestamo.dia_pago)
    return fecha


def first_due_date(prestamo: Prestamo) -> date:
    return period_due_date(prestamo, 1)


def days_late(prestamo: Prestamo, today: date) -> int:
    if prestamo.estado == PAGADO or not prestamo.proxima_fecha_pago:
        return 0
    return max(0, (today - prestamo.proxima_fecha_pago).days)


def refresh_status(prestamo: Prestamo, today: Optional[date] = None) -> str:
    """Recompute dias_atraso and estado against ``today``; PAGADO is final."""
    today = today or date.today()

    if prestamo.semanas_pagadas >= prestamo.numero_semanas:
        prestamo.estado = PAGADO
        prestamo.dias_atraso = 0
        return prestamo.estado

    prestamo.dias_atraso = days_late(prestamo, today)
    prestamo.estado = ATRASADO if prestamo.dias_atraso > 0 else ACTIVO
    return prestamo.estado


def recompute_from_pagos(prestamo: Prestamo, today: Optional[date] = None) -> None:
    """
    Rebuild semanas_pagadas and proxima_fecha_pago from stored payments.

    Payments are renumbered in registration order: a full payment closes the
    current period, partial ones stay on it.
    """
    periodo = 1
    for p in sorted(prestamo.pagos, key=lambda p: p.id):
        p.numero_semana = periodo
        if not p.es_pago_parcial:
            periodo += 1

    prestamo.semanas_pagadas = periodo - 1
    prestamo.proxima_fecha_pago = period_due_date(prestamo, prestamo.semanas_pagadas + 1)
    refresh_status(prestamo, today)


def total_pagado(prestamo: Prestamo):
    return money(sum((money(p.monto_pagado) for p in prestamo.pagos), money(0)))


def build_cronograma(prestamo: Prestamo, today: Optional[date] = None):
    """
    One row per period with its state taken from the stored payments:
    PAGADO, PARCIAL, ATRASADO (due before today, nothing paid) or PENDIENTE.
    """
    today = today or date.today()
    by_period = {}
    for p in prestamo.pagos:
        by_period.setdefault(p.numero_semana, []).append(p)

    periodic = money(prestamo.pago_semanal)
    rows = []
    for numero in range(1, prestamo.numero_semanas + 1):
        fecha = period_due_date(prestamo, numero)
        pagos = by_period.get(numero, [])
        pagado = money(sum((money(p.monto_pagado) for p in pagos), money(0)))
        mora = money(sum((money(p.monto_mora) for p in pagos), money(0)))

        if any(not p.es_pago_parcial for p in pagos):
            estado, restante = "PAGADO", money(0)
        elif pagos:
            estado, restante = "PARCIAL", max(money(0), money(periodic - pagado))
        elif fecha < today:
            estado, restante = "ATRASADO", periodic
        else:
            estado, restante = "PENDIENTE", periodic

        rows.append(
            {
                "numero": numero,
                "fecha": fecha,
                "monto": periodic,
                "estado": estado,
                "monto_pagado": pagado,
                "monto_restante": restante,
                "mora": mora,
                "pago_id": pagos[-1].id if pagos else None,
            }
        )
    return rows
