"""Tests for dashboard statistics and the summary report."""

from datetime import timedelta

import pytest


class TestEstadisticas:
    """Tests for /api/estadisticas."""

    def test_empty_database(self, admin_client) -> None:
        stats = admin_client.get("/api/estadisticas").json()

        assert stats["prestamosActivos"] == 0
        assert stats["totalPrestado"] == 0
        assert stats["ultimosPrestamos"] == []

    def test_counters(self, admin_client, make_prestamo, today) -> None:
        make_prestamo()
        late = make_prestamo(monto_prestado=1000, fecha_prestamo=(today - timedelta(days=30)).isoformat())
        admin_client.post("/api/prestamos/actualizar-estados")
        admin_client.post(
            "/api/pagos", json={"prestamo_id": late["id"], "monto_pagado": 91.67, "monto_mora": 5}
        )

        stats = admin_client.get("/api/estadisticas").json()

        assert stats["prestamosActivos"] == 1
        assert stats["prestamosAtrasados"] == 1
        assert stats["totalPrestado"] == 6000.0
        assert stats["montosPagosHoy"] == pytest.approx(91.67)
        assert stats["totalMoras"] == 5.0
        assert len(stats["ultimosPrestamos"]) == 2
        assert len(stats["ultimosPagos"]) == 1
        assert len(stats["ultimosClientes"]) == 2

    def test_recent_lists_are_capped(self, admin_client, make_cliente) -> None:
        for _ in range(7):
            make_cliente()

        stats = admin_client.get("/api/estadisticas").json()
        assert len(stats["ultimosClientes"]) == 5


class TestResumen:
    """Tests for /api/reportes/resumen."""

    def test_summary(self, admin_client, make_prestamo, today) -> None:
        paid = make_prestamo(monto_prestado=1000, numero_semanas=1)
        make_prestamo()
        admin_client.post("/api/pagos", json={"prestamo_id": paid["id"], "monto_pagado": 1100})

        resumen = admin_client.get("/api/reportes/resumen").json()

        assert resumen["por_estado"]["PAGADO"]["cantidad"] == 1
        assert resumen["por_estado"]["ACTIVO"]["cantidad"] == 1
        assert resumen["por_estado"]["ATRASADO"]["cantidad"] == 0

        mes = today.strftime("%Y-%m")
        assert resumen["mensual"] == [{"mes": mes, "prestado": 6000.0, "cobrado": 1100.0}]

        cartera = resumen["cartera_por_cobrador"]
        assert len(cartera) == 1
        assert cartera[0]["cobrador"] == "Sin cobrador"
        assert cartera[0]["prestamos"] == 1
        assert cartera[0]["saldo_pendiente"] == pytest.approx(5500.0)

    def test_monthly_totals_span_months(self, admin_client, make_prestamo) -> None:
        enero = make_prestamo(monto_prestado=1000, numero_semanas=4, fecha_prestamo="2024-01-15")
        make_prestamo(monto_prestado=2000, numero_semanas=4, fecha_prestamo="2024-03-02")
        admin_client.post(
            "/api/pagos",
            json={"prestamo_id": enero["id"], "monto_pagado": 275, "fecha_pago": "2024-01-20T09:00:00"},
        )
        admin_client.post(
            "/api/pagos",
            json={"prestamo_id": enero["id"], "monto_pagado": 275, "fecha_pago": "2024-02-03T09:00:00"},
        )

        mensual = admin_client.get("/api/reportes/resumen").json()["mensual"]

        assert mensual == [
            {"mes": "2024-01", "prestado": 1000.0, "cobrado": 275.0},
            {"mes": "2024-02", "prestado": 0.0, "cobrado": 275.0},
            {"mes": "2024-03", "prestado": 2000.0, "cobrado": 0.0},
        ]

    def test_outstanding_balance_counts_partial_payments(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo()
        admin_client.post(
            "/api/pagos",
            json={"prestamo_id": prestamo["id"], "monto_pagado": 200, "confirmar_pago_parcial": True},
        )
        admin_client.post("/api/pagos", json={"prestamo_id": prestamo["id"], "monto_pagado": 458.33})

        cartera = admin_client.get("/api/reportes/resumen").json()["cartera_por_cobrador"]

        assert cartera[0]["saldo_pendiente"] == pytest.approx(5500 - 200 - 458.33)
