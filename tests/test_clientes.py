"""Tests for /api/clientes."""

import pytest


class TestCreateCliente:
    """Tests for client creation."""

    def test_generates_documento_when_missing(self, make_cliente) -> None:
        first = make_cliente()
        second = make_cliente(documento_identidad="   ")

        assert first["documento_identidad"] == "CL-1000"
        assert second["documento_identidad"] == "CL-1001"

    def test_generated_documento_skips_taken_numbers(self, make_cliente) -> None:
        make_cliente(documento_identidad="CL-1000")
        assert make_cliente()["documento_identidad"] == "CL-1001"

    def test_duplicate_documento_conflicts(self, admin_client, make_cliente) -> None:
        make_cliente(documento_identidad="V-123")

        resp = admin_client.post(
            "/api/clientes",
            json={"nombre": "Otro", "telefono": "1", "direccion": "x", "documento_identidad": "V-123"},
        )
        assert resp.status_code == 409

    def test_missing_required_fields(self, admin_client) -> None:
        resp = admin_client.post("/api/clientes", json={"nombre": "Solo nombre"})
        assert resp.status_code == 422

    def test_unknown_cobrador(self, admin_client) -> None:
        resp = admin_client.post(
            "/api/clientes",
            json={"nombre": "A", "telefono": "1", "direccion": "x", "cobrador_id": 999},
        )
        assert resp.status_code == 400


class TestReadUpdateDelete:
    """Tests for reading, updating and deleting clients."""

    def test_list_and_search(self, admin_client, make_cliente) -> None:
        make_cliente(nombre="Ana Pérez")
        make_cliente(nombre="Luis Gómez")

        assert len(admin_client.get("/api/clientes").json()) == 2
        found = admin_client.get("/api/clientes", params={"search": "ana"}).json()
        assert [c["nombre"] for c in found] == ["Ana Pérez"]

    def test_get_missing(self, admin_client) -> None:
        assert admin_client.get("/api/clientes/42").status_code == 404

    def test_partial_update(self, admin_client, make_cliente) -> None:
        cliente = make_cliente()

        resp = admin_client.put(f"/api/clientes/{cliente['id']}", json={"telefono": "999"})

        assert resp.status_code == 200
        assert resp.json()["telefono"] == "999"
        assert resp.json()["nombre"] == cliente["nombre"]

    def test_update_to_taken_documento(self, admin_client, make_cliente) -> None:
        a = make_cliente()
        b = make_cliente()

        resp = admin_client.put(
            f"/api/clientes/{b['id']}", json={"documento_identidad": a["documento_identidad"]}
        )
        assert resp.status_code == 409

    def test_delete_without_loans(self, admin_client, make_cliente) -> None:
        cliente = make_cliente()

        assert admin_client.delete(f"/api/clientes/{cliente['id']}").status_code == 200
        assert admin_client.get(f"/api/clientes/{cliente['id']}").status_code == 404

    def test_delete_with_loans_is_refused(self, admin_client, make_prestamo) -> None:
        prestamo = make_prestamo()

        resp = admin_client.delete(f"/api/clientes/{prestamo['cliente_id']}")
        assert resp.status_code == 400


class TestTotalPagado:
    """Tests for /api/clientes/{id}/total-pagado."""

    def test_sums_payments_of_every_loan(self, admin_client, make_cliente, make_prestamo) -> None:
        cliente = make_cliente()
        p1 = make_prestamo(cliente_id=cliente["id"])
        p2 = make_prestamo(cliente_id=cliente["id"], monto_prestado=1000, numero_semanas=4)

        admin_client.post("/api/pagos", json={"prestamo_id": p1["id"], "monto_pagado": 458.33})
        admin_client.post("/api/pagos", json={"prestamo_id": p2["id"], "monto_pagado": 275})

        resp = admin_client.get(f"/api/clientes/{cliente['id']}/total-pagado")
        assert resp.status_code == 200
        assert resp.json()["totalPagado"] == pytest.approx(733.33)
