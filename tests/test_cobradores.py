"""Tests for collectors and client assignment."""

import pytest


@pytest.fixture
def cobrador_user(admin_client):
    resp = admin_client.post(
        "/api/register",
        json={"username": "cobra@test.com", "password": "pw", "nombre": "Cobra", "rol": "COBRADOR"},
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def cobrador(admin_client, cobrador_user):
    resp = admin_client.post(
        "/api/cobradores",
        json={"nombre": "Cobra", "telefono": "555", "user_id": cobrador_user["id"], "zona": "Norte"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestCobradores:
    """Tests for /api/cobradores."""

    def test_user_must_have_cobrador_role(self, admin_client) -> None:
        me = admin_client.get("/api/user").json()
        resp = admin_client.post(
            "/api/cobradores",
            json={"nombre": "X", "telefono": "1", "user_id": me["id"], "zona": "Sur"},
        )
        assert resp.status_code == 400

    def test_one_cobrador_per_user(self, admin_client, cobrador, cobrador_user) -> None:
        resp = admin_client.post(
            "/api/cobradores",
            json={"nombre": "Y", "telefono": "1", "user_id": cobrador_user["id"], "zona": "Sur"},
        )
        assert resp.status_code == 400

    def test_available_users(self, admin_client, cobrador_user) -> None:
        disponibles = admin_client.get("/api/usuarios-disponibles-para-cobrador").json()
        assert [u["id"] for u in disponibles] == [cobrador_user["id"]]

        admin_client.post(
            "/api/cobradores",
            json={"nombre": "Cobra", "telefono": "555", "user_id": cobrador_user["id"], "zona": "Norte"},
        )
        assert admin_client.get("/api/usuarios-disponibles-para-cobrador").json() == []

    def test_update(self, admin_client, cobrador) -> None:
        resp = admin_client.put(f"/api/cobradores/{cobrador['id']}", json={"zona": "Centro"})
        assert resp.json()["zona"] == "Centro"

    def test_assign_and_list_clientes(self, admin_client, cobrador, make_cliente) -> None:
        a = make_cliente()
        b = make_cliente()
        make_cliente()

        resp = admin_client.post(
            f"/api/cobradores/{cobrador['id']}/asignar-clientes",
            json={"cliente_ids": [a["id"], b["id"]]},
        )
        assert resp.status_code == 200

        clientes = admin_client.get(f"/api/cobradores/{cobrador['id']}/clientes").json()
        assert sorted(c["id"] for c in clientes) == sorted([a["id"], b["id"]])

    def test_delete_unassigns_clientes(self, admin_client, cobrador, make_cliente) -> None:
        cliente = make_cliente(cobrador_id=cobrador["id"])

        assert admin_client.delete(f"/api/cobradores/{cobrador['id']}").status_code == 204
        assert admin_client.get(f"/api/clientes/{cliente['id']}").json()["cobrador_id"] is None
        assert admin_client.get(f"/api/cobradores/{cobrador['id']}").status_code == 404
