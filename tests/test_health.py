"""Tests for health check endpoint and application wiring."""

from fastapi.testclient import TestClient

from src.config import get_settings
from src.main import app


def test_health_check_returns_healthy() -> None:
    """Health endpoint should return healthy status."""
    with TestClient(app) as client:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == get_settings().app_version


def test_app_serves_register_login_and_current_user() -> None:
    """The lifespan wires the services so the auth flow works end to end."""
    with TestClient(app) as client:
        register = client.post(
            "/auth/register",
            json={"email": "wired@example.com", "password": "secret1", "first_name": "W"},
        )
        assert register.status_code in (201, 409)

        login = client.post(
            "/auth/login", json={"email": "wired@example.com", "password": "secret1"}
        )
        assert login.status_code == 200

        token = login.json()["access_token"]
        me = client.get("/auth", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "wired@example.com"


def test_services_unconfigured_outside_lifespan() -> None:
    """Without startup wiring the account routes report 503."""
    client = TestClient(app)

    response = client.post(
        "/auth/login", json={"email": "wired@example.com", "password": "secret1"}
    )

    assert response.status_code == 503
