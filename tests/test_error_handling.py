"""Tests for the JSON error envelope."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from clinica.services.appointment_service import AppointmentService


@pytest.mark.asyncio
async def test_app_exception_envelope(client: AsyncClient, admin_headers: dict):
    """Domain errors carry the exception name, message and path."""
    response = await client.get("/api/v1/appointments/missing", headers=admin_headers)

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "NotFoundException"
    assert body["path"].endswith("/api/v1/appointments/missing")


@pytest.mark.asyncio
async def test_validation_error_details(client: AsyncClient, admin_headers: dict):
    """Invalid bodies answer 422 with per-field details."""
    response = await client.post("/api/v1/appointments/", json={}, headers=admin_headers)

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "ValidationError"
    assert any(d["loc"][-1] == "patientName" for d in body["details"])


@pytest.mark.asyncio
async def test_database_error_passes_message_through(client: AsyncClient, admin_headers: dict):
    """Database failures answer 500 with the driver's message and no retry."""
    failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
    list_mock = AsyncMock(side_effect=failure)

    with patch.object(AppointmentService, "list_appointments", list_mock):
        response = await client.get("/api/v1/appointments/", headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "DatabaseError"
    assert response.json()["message"] == "connection refused"
    assert list_mock.await_count == 1
