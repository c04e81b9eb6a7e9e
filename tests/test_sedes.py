"""Tests for sedes and weekly availability."""

from datetime import time

import pytest
from httpx import AsyncClient
from pydantic import ValidationError

from clinica.core.exceptions import BadRequestException
from clinica.schemas.sedes import (
    WORK_DAYS,
    AvailabilityUpdate,
    DayAvailability,
    TimeInterval,
    default_availability,
)
from clinica.services.sede_service import copy_to_work_days


def test_default_availability():
    """Split shifts on weekdays, mornings on Saturday, closed on Sunday."""
    availability = default_availability()

    assert availability["Lunes"].is_open
    assert [(i.start, i.end) for i in availability["Viernes"].intervals] == [
        (time(9, 0), time(13, 0)),
        (time(14, 0), time(18, 0)),
    ]
    assert len(availability["Sábado"].intervals) == 1
    assert not availability["Domingo"].is_open


def test_interval_must_end_after_start():
    """Reversed or empty intervals are rejected."""
    with pytest.raises(ValidationError):
        TimeInterval(start=time(14, 0), end=time(9, 0))
    with pytest.raises(ValidationError):
        TimeInterval(start=time(9, 0), end=time(9, 0))


def test_unknown_weekday_rejected():
    """Only the seven Spanish day names are accepted."""
    with pytest.raises(ValidationError):
        AvailabilityUpdate.model_validate({"availability": {"Monday": {"isOpen": True}}})


def test_copy_to_work_days():
    """Saturday's configuration lands on Monday through Friday."""
    availability = default_availability()
    copied = copy_to_work_days(availability, "Sábado")

    for day in WORK_DAYS:
        assert copied[day] == availability["Sábado"]
    assert copied["Domingo"] == availability["Domingo"]
    assert len(availability["Lunes"].intervals) == 2


def test_copy_to_work_days_unknown_day():
    """Unknown source days are a bad request."""
    with pytest.raises(BadRequestException):
        copy_to_work_days(default_availability(), "Funday")


def test_copy_missing_day_closes_work_days():
    """A day absent from the map copies as closed."""
    copied = copy_to_work_days({}, "Domingo")
    assert copied["Lunes"] == DayAvailability()


@pytest.mark.asyncio
async def test_create_sede_defaults_availability(client: AsyncClient, admin_headers: dict):
    """New sedes get the standard week."""
    response = await client.post(
        "/api/v1/sedes/",
        json={"name": "Sede Sur", "address": "Av. Huaylas 300", "whatsapp": "51911111111"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    availability = response.json()["availability"]
    assert availability["Lunes"] == {
        "isOpen": True,
        "intervals": [{"start": "09:00", "end": "13:00"}, {"start": "14:00", "end": "18:00"}],
    }
    assert availability["Domingo"]["isOpen"] is False


@pytest.mark.asyncio
async def test_create_sede_requires_admin(client: AsyncClient, receptionist_headers: dict):
    """Receptionists cannot create sedes."""
    response = await client.post(
        "/api/v1/sedes/",
        json={"name": "Sede Sur", "address": "Av. Huaylas 300"},
        headers=receptionist_headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_sedes_scoped(
    client: AsyncClient,
    admin_headers: dict,
    receptionist_headers: dict,
    sede_norte: dict,
):
    """Receptionists list only their sedes."""
    admin_view = await client.get("/api/v1/sedes/", headers=admin_headers)
    receptionist_view = await client.get("/api/v1/sedes/", headers=receptionist_headers)

    assert [s["id"] for s in admin_view.json()] == ["sede-centro", "sede-norte"]
    assert [s["id"] for s in receptionist_view.json()] == ["sede-centro"]


@pytest.mark.asyncio
async def test_update_availability(
    client: AsyncClient, admin_headers: dict, sede_centro: dict, mock_redis
):
    """Replacing availability stores it and invalidates the sede list cache."""
    response = await client.put(
        f"/api/v1/sedes/{sede_centro['id']}/availability",
        json={
            "availability": {
                "Domingo": {"isOpen": True, "intervals": [{"start": "10:00", "end": "12:00"}]}
            }
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["availability"] == {
        "Domingo": {"isOpen": True, "intervals": [{"start": "10:00", "end": "12:00"}]}
    }
    mock_redis.delete.assert_called_with("sede:list")


@pytest.mark.asyncio
async def test_update_availability_rejects_reversed_interval(
    client: AsyncClient, admin_headers: dict, sede_centro: dict
):
    """Intervals ending before they start are a validation error."""
    response = await client.put(
        f"/api/v1/sedes/{sede_centro['id']}/availability",
        json={
            "availability": {
                "Lunes": {"isOpen": True, "intervals": [{"start": "18:00", "end": "09:00"}]}
            }
        },
        headers=admin_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_copy_to_work_days_endpoint(
    client: AsyncClient, admin_headers: dict, sede_centro: dict
):
    """Saturday hours copied onto the work week."""
    response = await client.post(
        f"/api/v1/sedes/{sede_centro['id']}/availability/copy-to-work-days",
        params={"sourceDay": "Sábado"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    availability = response.json()["availability"]
    for day in WORK_DAYS:
        assert availability[day]["intervals"] == [{"start": "09:00", "end": "13:00"}]
