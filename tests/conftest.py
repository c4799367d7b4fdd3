"""Shared fixtures: an isolated in-memory store per test and a TestClient over it."""
import pytest
from fastapi.testclient import TestClient

from app.services.store import EntityStore
from main import create_app

ADMIN_EMAIL = "admin@governancesystemsint.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def store():
    s = EntityStore("sqlite://", seed=True, admin_password=ADMIN_PASSWORD)
    yield s
    s.dispose()


@pytest.fixture
def empty_store():
    s = EntityStore("sqlite://")
    yield s
    s.dispose()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def employee_payload():
    def _make(**overrides):
        payload = {
            "employeeId": "GSI100",
            "firstName": "Grace",
            "lastName": "Nakato",
            "email": "grace.nakato@governancesystemsint.com",
            "position": "M&E Officer",
            "department": "Monitoring",
            "hireDate": "2024-02-01T00:00:00Z",
            "salary": "52000.00",
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def auth_headers(client):
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
