"""Tests for payment registration and deletion."""

from datetime import datetime, time, timedelta

import pytest


def pay(client, prestamo_id, monto, **extra):
    body = {"prestamo_id": prestamo_id, "monto_pagado": monto}
    body.update(extra)
    return client.post("/api/pagos", json=body)


class TestFullPayment:
    """A payment of at least the periodic amount closes one period."""

    def test_exact_amount(self, admin_client, make_prestamo, today) -> None:
        prestamo = make_prestamo()

        resp = pay(admin_client, prestamo["id"], 458.33)

        assert resp.status_code == 201
        pago = resp.json()
        assert pago["es_pago_parcial"] is False
        assert pago["monto_restante"] == 0
        assert pago["numero_semana"] == 1
        assert pago["estado"] == "A_TIEMPO"

        loan = admin_client.get(f"/api/prestamos/{prestamo['id']}").json()
        assert loan["semanas_pagadas"] == 1
        assert loan["proxima_fecha_pago"] == (today + timedelta(days=14)).isoformat()

    def test_last_period_marks_loan_paid(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo(monto_prestado=1000, numero_semanas=2)

        pay(admin_client, prestamo["id"], 550)
        pay(admin_client, prestamo["id"], 550)

        loan = admin_client.get(f"/api/prestamos/{prestamo['id']}").json()
        assert loan["estado"] == "PAGADO"
        assert loan["semanas_pagadas"] == 2

        again = pay(admin_client, prestamo["id"], 550)
        assert again.status_code == 400

    def test_late_payment_marks_loan_late(self, admin_client, make_prestamo, today) -> None:
        prestamo = make_prestamo()
        late = datetime.combine(today + timedelta(days=10), time(10, 0))

        resp = pay(admin_client, prestamo["id"], 458.33, fecha_pago=late.isoformat())

        assert resp.json()["estado"] == "ATRASADO"
        loan = admin_client.get(f"/api/prestamos/{prestamo['id']}").json()
        assert loan["estado"] == "ATRASADO"
        assert loan["dias_atraso"] == 3

    def test_on_time_payment_restores_active(self, admin_client, make_prestamo, today) -> None:
        prestamo = make_prestamo()
        first = datetime.combine(today + timedelta(days=10), time(9, 0))
        second = datetime.combine(today + timedelta(days=12), time(9, 0))
        pay(admin_client, prestamo["id"], 458.33, fecha_pago=first.isoformat())

        resp = pay(admin_client, prestamo["id"], 458.33, fecha_pago=second.isoformat())

        assert resp.json()["estado"] == "A_TIEMPO"
        loan = admin_client.get(f"/api/prestamos/{prestamo['id']}").json()
        assert loan["estado"] == "ACTIVO"
        assert loan["dias_atraso"] == 0


class TestPartialPayment:
    """A payment below the periodic amount needs explicit confirmation."""

    def test_unconfirmed_partial_is_held(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo()

        resp = pay(admin_client, prestamo["id"], 200)

        assert resp.status_code == 409
        detail = resp.json()["detail"]
        assert detail["requiere_confirmacion"] is True
        assert detail["monto_faltante"] == pytest.approx(258.33)
        assert admin_client.get("/api/pagos", params={"prestamo_id": prestamo["id"]}).json() == []

    def test_confirmed_partial_is_stored(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo()

        resp = pay(admin_client, prestamo["id"], 200, confirmar_pago_parcial=True)

        assert resp.status_code == 201
        assert resp.json()["es_pago_parcial"] is True
        assert resp.json()["monto_restante"] == pytest.approx(258.33)

        loan = admin_client.get(f"/api/prestamos/{prestamo['id']}").json()
        assert loan["semanas_pagadas"] == 0


class TestInvalidPayments:
    """Validation of the payment body."""

    @pytest.mark.parametrize("monto", [0, -10, "abc", None])
    def test_bad_amount(self, admin_client, make_prestamo, monto) -> None:
        prestamo = make_prestamo()
        assert pay(admin_client, prestamo["id"], monto).status_code == 422

    def test_unknown_loan(self, admin_client) -> None:
        assert pay(admin_client, 999, 100).status_code == 404


class TestDeletePayment:
    """Deleting a payment rebuilds the loan counters."""

    def test_delete_recomputes(self, admin_client, make_prestamo, today) -> None:
        prestamo = make_prestamo(monto_prestado=1000, numero_semanas=2)
        first = pay(admin_client, prestamo["id"], 550).json()
        pay(admin_client, prestamo["id"], 550)

        resp = admin_client.delete(f"/api/pagos/{first['id']}")

        assert resp.status_code == 200
        loan = admin_client.get(f"/api/prestamos/{prestamo['id']}").json()
        assert loan["semanas_pagadas"] == 1
        assert loan["estado"] == "ACTIVO"
        assert loan["proxima_fecha_pago"] == (today + timedelta(days=14)).isoformat()
        assert admin_client.get(f"/api/pagos/{first['id']}").status_code == 404

    def test_delete_missing(self, admin_client) -> None:
        assert admin_client.delete("/api/pagos/1").status_code == 404

    def test_deleting_an_older_payment_renumbers_periods(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo(monto_prestado=1000, numero_semanas=3)
        first = pay(admin_client, prestamo["id"], 366.67).json()
        pay(admin_client, prestamo["id"], 366.67)

        admin_client.delete(f"/api/pagos/{first['id']}")
        nuevo = pay(admin_client, prestamo["id"], 366.67).json()

        assert nuevo["numero_semana"] == 2
        loan = admin_client.get(f"/api/prestamos/{prestamo['id']}").json()
        assert loan["semanas_pagadas"] == 2

        cronograma = admin_client.get(f"/api/prestamos/{prestamo['id']}/cronograma").json()
        assert [(c["numero"], c["estado"]) for c in cronograma] == [
            (1, "PAGADO"),
            (2, "PAGADO"),
            (3, "PENDIENTE"),
        ]

    def test_partial_payment_stays_on_open_period(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo(monto_prestado=1000, numero_semanas=3)
        first = pay(admin_client, prestamo["id"], 366.67).json()
        pay(admin_client, prestamo["id"], 100, confirmar_pago_parcial=True)

        admin_client.delete(f"/api/pagos/{first['id']}")

        pagos = admin_client.get("/api/pagos", params={"prestamo_id": prestamo["id"]}).json()
        assert [(p["numero_semana"], p["es_pago_parcial"]) for p in pagos] == [(1, True)]
        cronograma = admin_client.get(f"/api/prestamos/{prestamo['id']}/cronograma").json()
        assert cronograma[0]["estado"] == "PARCIAL"
