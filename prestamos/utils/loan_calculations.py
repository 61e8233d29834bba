from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta

SEMANAL = "SEMANAL"
QUINCENAL = "QUINCENAL"
MENSUAL = "MENSUAL"
FRECUENCIAS = (SEMANAL, QUINCENAL, MENSUAL)

ZERO = Decimal("0.00")


def money(x) -> Decimal:
    """Always return 2-decimal Decimal with HALF_UP rounding."""
    if x is None:
        x = 0
    if not isinstance(x, Decimal):
        x = Decimal(str(x))
    return x.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _validate_terms(principal, interest_rate_percent, periods):
    principal = money(principal)
    rate = Decimal(str(interest_rate_percent))
    periods = int(periods)

    if principal <= 0:
        raise ValueError("monto_prestado must be > 0")
    if rate <= 0:
        raise ValueError("tasa_interes must be > 0")
    if periods <= 0:
        raise ValueError("numero_semanas must be > 0")

    return principal, rate, periods


def compute_loan_totals(principal, interest_rate_percent, periods):
    """
    FLAT (non compounding):
      total    = principal * (1 + rate% / 100)
      periodic = total / periods

    The rate is applied once to the full principal, whatever the term.

    Example:
      principal=5000, rate=10, periods=12 => (5500.00, 458.33)
    """
    principal, rate, periods = _validate_terms(principal, interest_rate_percent, periods)

    total = money(principal * (Decimal("1") + rate / Decimal("100")))
    periodic = money(total / periods)
    return total, periodic


def due_date(origin: date, period: int, frecuencia: str = SEMANAL) -> date:
    """Due date of period number ``period`` counted from ``origin``."""
    frecuencia = (frecuencia or SEMANAL).upper()
    if frecuencia == QUINCENAL:
        return origin + timedelta(days=14 * period)
    if frecuencia == MENSUAL:
        return origin + relativedelta(months=period)
    return origin + timedelta(days=7 * period)


def build_amortization_schedule(
        principal,
        interest_rate_percent,
        periods,
        origin: date,
        frecuencia: str = SEMANAL,
):
    """
    Period-by-period projection for display.

    Interest is charged on the running balance at rate%/100/periods. This
    break-out does not reconcile exactly with the flat total; the last period
    takes whatever balance is left so the schedule always ends at 0.

    Returns a list of dicts:
      numero, fecha, pago, principal, interes, balance
    """
    principal, rate, periods = _validate_terms(principal, interest_rate_percent, periods)
    _, periodic = compute_loan_totals(principal, rate, periods)

    rate_per_period = rate / Decimal("100") / Decimal(periods)
    balance = principal
    rows = []

    for i in range(1, periods + 1):
        interest = money(balance * rate_per_period)

        if i == periods:
            principal_part = balance
        else:
            principal_part = max(ZERO, min(money(periodic - interest), balance))

        balance = money(balance - principal_part)

        rows.append(
            {
                "numero": i,
                "fecha": due_date(origin, i, frecuencia),
                "pago": periodic,
                "principal": principal_part,
                "interes": interest,
                "balance": balance,
            }
        )

    return rows


def classify_payment(amount, periodic_payment):
    """
    Returns (es_parcial, monto_restante).

    A payment below the periodic amount is partial and leaves the shortfall
    as the remaining balance for that period.
    """
    amount = money(amount)
    periodic_payment = money(periodic_payment)

    if amount <= 0:
        raise ValueError("monto_pagado must be > 0")

    if amount < periodic_payment:
        return True, money(periodic_payment - amount)
    return False, ZERO


def weekday_from_dia_pago(dia_pago: int) -> int:
    """dia_pago uses 0=domingo..6=sábado; Python's weekday() uses 0=lunes."""
    return (int(dia_pago) + 6) % 7


def next_weekday_on_or_after(d: date, dia_pago: int) -> date:
    target = weekday_from_dia_pago(dia_pago)
    return d + timedelta(days=(target - d.weekday()) % 7)
