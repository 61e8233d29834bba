"""Pytest configuration and fixtures."""

import os

# in-memory database for the module-level engine; tests swap in their own
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import prestamos.models  # noqa: F401
from prestamos.utils.database import Base, get_db
from main import app

ADMIN = {"username": "admin@test.com", "password": "secret", "nombre": "Admin", "rol": "ADMIN"}


@pytest.fixture
def session_factory():
    """Fresh in-memory schema per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    """Session for direct inspection of what the API stored."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Anonymous API client bound to the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    """Client logged in as the first user (ADMIN) of an empty database."""
    resp = client.post("/api/register", json=ADMIN)
    assert resp.status_code == 201, resp.text
    return client


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def make_cliente(admin_client):
    """Factory creating clients through the API."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        body = {
            "nombre": f"Cliente {counter['n']}",
            "telefono": "555-0100",
            "direccion": "Calle 1",
        }
        body.update(overrides)
        resp = admin_client.post("/api/clientes", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_prestamo(admin_client, make_cliente, today):
    """Factory creating loans through the API (5000 at 10% over 12 weeks by default)."""

    def _make(**overrides):
        body = {
            "monto_prestado": 5000,
            "tasa_interes": 10,
            "numero_semanas": 12,
            "fecha_prestamo": today.isoformat(),
        }
        body.update(overrides)
        if "cliente_id" not in body:
            body["cliente_id"] = make_cliente()["id"]
        resp = admin_client.post("/api/prestamos", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
