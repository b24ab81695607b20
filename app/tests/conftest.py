import os
import uuid

# La configuración se lee al importar la app
os.environ["URL_DATABASE_SQL"] = "sqlite:///./test_fleet.db"
os.environ["URL_DATABASE_REDIS"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DISCORD_WEBHOOK_URL"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ["KEY_SECRET"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = "admin@fleet.io"
os.environ["ADMIN_PASSWORD"] = "adminpassword1"

import pytest
from fastapi.testclient import TestClient

from app.core import hash_password
from app.database import Base, engine, SessionLocal
from app.main import app
from app.models import User

ADMIN_EMAIL = "admin@fleet.io"
ADMIN_PASSWORD = "adminpassword1"


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    admin = User(user_email=ADMIN_EMAIL, user_password=hash_password(ADMIN_PASSWORD), user_role="ADMIN")
    db.add(admin)
    db.commit()
    db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _login(client, email, password) -> dict:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.json()
    body = response.json()["responseObject"]
    return {
        "id": body["user"]["id"],
        "email": email,
        "password": password,
        "access": body["accessToken"],
        "refresh": body["refreshToken"],
        "headers": auth_headers(body["accessToken"]),
    }


@pytest.fixture()
def login(client):
    def _do(email, password):
        return _login(client, email, password)
    return _do


@pytest.fixture()
def make_user(client):
    """Registra un USER con email único y devuelve su sesión."""
    def _make():
        email = f"user-{uuid.uuid4().hex[:10]}@fleet.io"
        password = "password1"
        response = client.post("/api/v1/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201, response.json()
        return _login(client, email, password)
    return _make


@pytest.fixture()
def admin(client):
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture()
def make_vehicle(client):
    def _make(headers, **fields):
        payload = {
            "name": "Fleet Car",
            "license_plate": f"P{uuid.uuid4().hex[:8].upper()}",
            "model": "Toyota Avanza",
            "status": "ACTIVE",
        }
        payload.update(fields)
        response = client.post("/api/v1/vehicles", json=payload, headers=headers)
        assert response.status_code == 201, response.json()
        return response.json()["responseObject"]
    return _make


@pytest.fixture()
def telemetry_payload():
    def _payload(speed=42.5, timestamp=None):
        payload = {
            "data": {"odometer": 12000, "fuel_level": 55.5, "speed": speed, "lat": -6.2, "lon": 106.8},
        }
        if timestamp:
            payload["timestamp"] = timestamp
        return payload
    return _payload
