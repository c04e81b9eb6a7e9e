"""Tests for access-code authentication."""

import pytest
from httpx import AsyncClient

from clinica.core.security import MASTER_USER_ID, create_access_token, decode_access_token


def test_access_token_round_trip():
    """Tokens carry the subject and an expiry."""
    token = create_access_token("user-admin")
    payload = decode_access_token(token)

    assert payload is not None
    assert payload["sub"] == "user-admin"
    assert "exp" in payload


def test_decode_rejects_garbage():
    """Malformed tokens decode to None."""
    assert decode_access_token("not-a-token") is None


@pytest.mark.asyncio
async def test_login_with_access_code(client: AsyncClient, receptionist_user: dict):
    """Codes match trimmed and case-insensitively."""
    response = await client.post("/api/v1/auth/login", json={"accessCode": "  RECEP1 "})

    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["id"] == receptionist_user["id"]
    assert body["user"]["role"] == "RECEPCIONISTA"
    assert body["user"]["sedeIds"] == ["sede-centro"]


@pytest.mark.asyncio
async def test_login_with_master_code(client: AsyncClient):
    """The master code signs in as a synthetic SUPER_ADMIN."""
    response = await client.post("/api/v1/auth/login", json={"accessCode": "super123"})

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["id"] == MASTER_USER_ID
    assert user["role"] == "SUPER_ADMIN"
    assert user["companyId"] == "feet-care-main"


@pytest.mark.asyncio
async def test_login_invalid_code(client: AsyncClient, admin_user: dict):
    """Unknown codes answer 401."""
    response = await client.post("/api/v1/auth/login", json={"accessCode": "NOPE"})

    assert response.status_code == 401
    assert response.json()["message"] == "Código de acceso inválido"


@pytest.mark.asyncio
async def test_me_returns_session_user(client: AsyncClient, admin_user: dict):
    """The token issued at login resolves back to the same user."""
    login = await client.post("/api/v1/auth/login", json={"accessCode": "admin1"})
    token = login.json()["accessToken"]

    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    assert response.json()["id"] == admin_user["id"]
    assert response.json()["role"] == "ADMINISTRADOR"


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    """Missing or invalid tokens answer 401."""
    missing = await client.get("/api/v1/auth/me")
    invalid = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer bogus"})

    assert missing.status_code == 401
    assert invalid.status_code == 401
