"""Tests for the JSON export / import of the whole database."""

from conftest import ADMIN


class TestExportImport:
    """Tests for /api/sistema/exportar and /api/sistema/importar."""

    def test_export_contains_every_table(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo()
        admin_client.post("/api/pagos", json={"prestamo_id": prestamo["id"], "monto_pagado": 458.33})

        resp = admin_client.get("/api/sistema/exportar")

        assert resp.status_code == 200
        assert "attachment" in resp.headers["content-disposition"]
        tablas = resp.json()["tablas"]
        assert set(tablas) >= {"users", "clientes", "prestamos", "pagos", "notas_prestamo", "movimientos_caja"}
        assert len(tablas["pagos"]) == 1
        assert len(tablas["users"]) == 1

    def test_round_trip_replaces_data(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo()
        backup = admin_client.get("/api/sistema/exportar").json()

        make_prestamo()
        admin_client.post("/api/pagos", json={"prestamo_id": prestamo["id"], "monto_pagado": 458.33})
        assert len(admin_client.get("/api/prestamos").json()) == 2

        resp = admin_client.post("/api/sistema/importar", json=backup)

        assert resp.status_code == 200, resp.text
        assert resp.json()["tablas"]["prestamos"] == 1
        restored = admin_client.get("/api/prestamos").json()
        assert [p["id"] for p in restored] == [prestamo["id"]]
        assert restored[0]["semanas_pagadas"] == 0
        assert admin_client.get("/api/pagos").json() == []

    def test_rejects_bad_payloads(self, admin_client) -> None:
        assert admin_client.post("/api/sistema/importar", json={"x": 1}).status_code == 400
        resp = admin_client.post("/api/sistema/importar", json={"tablas": {"nope": []}})
        assert resp.status_code == 400

    def test_bad_row_rolls_back(self, admin_client, make_prestamo) -> None:
        make_prestamo()
        resp = admin_client.post(
            "/api/sistema/importar",
            json={"tablas": {"prestamos": [{"id": 1, "fecha_prestamo": "no-es-fecha"}]}},
        )

        assert resp.status_code == 400
        assert len(admin_client.get("/api/prestamos").json()) == 1

    def test_requires_admin(self, client) -> None:
        client.post("/api/register", json=ADMIN)
        client.post("/api/register", json={"username": "u", "password": "p", "nombre": "U"})
        client.post("/api/logout")
        client.post("/api/login", json={"username": "u", "password": "p"})

        assert client.get("/api/sistema/exportar").status_code == 403
