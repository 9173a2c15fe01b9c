from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from src.bookstore.core.services.jwt import JwtGeneratorService
from src.bookstore.entities.identity import User

from .core import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def jwt_generator() -> JwtGeneratorService:
    return JwtGeneratorService()


@pytest.fixture
def token_factory(
    active_config, jwt_generator: JwtGeneratorService
) -> Callable[..., str]:
    """Mint session tokens without going through the login endpoint."""

    def _make_token(
        roles: list[str] | None = None,
        email: str = "reader@bookstore.com",
        now: int | None = None,
    ) -> str:
        user = User(id="user-1", username=email, email=email, roles=roles or [])
        return jwt_generator.generate_session_token(user, now=now)

    return _make_token


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    """Headers for the seeded administrator, obtained through login."""
    response = client.post(
        "/api/users/login",
        json={"emailAddress": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return bearer(response.json()["token"])


@pytest.fixture
def customer_headers(client: TestClient) -> dict[str, str]:
    """Headers for a freshly registered customer."""
    credentials = {"emailAddress": "customer@bookstore.com", "password": "Secret1"}
    assert client.post("/api/users/register", json=credentials).status_code == 200
    response = client.post("/api/users/login", json=credentials)
    assert response.status_code == 200
    return bearer(response.json()["token"])
