"""Tests for clinical sessions and history entries."""

from datetime import date, time

import pytest
from httpx import AsyncClient
from sqlalchemy import insert, select

from clinica.models import appointments, clinical_history, patients
from clinica.schemas.treatment_plans import ClinicalSessionCreate
from clinica.services.clinical_history_service import ClinicalHistoryService
from clinica.services.treatment_plan import project_sessions


async def _status(db_session, appointment_id: str) -> str:
    result = await db_session.execute(
        select(appointments.c.status).where(appointments.c.id == appointment_id)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_finalize_marks_only_that_appointment_attended(
    client: AsyncClient,
    db_session,
    make_appointment,
    admin_headers: dict,
    patient: dict,
    sede_centro: dict,
):
    """Saving the entry flips the linked appointment to ATTENDED and nothing else."""
    await make_appointment(id="apt-a", patient_id=patient["id"], sede_id=sede_centro["id"])
    await make_appointment(id="apt-b", patient_id=patient["id"], sede_id=sede_centro["id"])

    response = await client.post(
        "/api/v1/clinical-sessions",
        json={
            "appointmentId": "apt-a",
            "diagnosis": "Onicocriptosis",
            "notes": "Uña encarnada en hallux derecho",
            "recommendations": "Curación semanal",
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    entry = response.json()["entry"]
    assert entry["appointmentId"] == "apt-a"
    assert entry["patientId"] == patient["id"]
    assert response.json()["scheduled"] == []

    assert await _status(db_session, "apt-a") == "ATENDIDO"
    assert await _status(db_session, "apt-b") == "CONFIRMADO"


@pytest.mark.asyncio
async def test_finalize_requires_diagnosis_and_notes(
    client: AsyncClient,
    make_appointment,
    admin_headers: dict,
    sede_centro: dict,
):
    """Missing diagnosis or notes is a validation error."""
    await make_appointment(id="apt-a", sede_id=sede_centro["id"])

    response = await client.post(
        "/api/v1/clinical-sessions",
        json={"appointmentId": "apt-a", "diagnosis": "", "notes": "Dolor plantar"},
        headers=admin_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_finalize_unknown_appointment(client: AsyncClient, admin_headers: dict):
    """Unknown appointments answer 404 and nothing is written."""
    response = await client.post(
        "/api/v1/clinical-sessions",
        json={"appointmentId": "missing", "diagnosis": "Fascitis", "notes": "Dolor al caminar"},
        headers=admin_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_finalize_schedules_plan(
    client: AsyncClient,
    db_session,
    make_appointment,
    admin_headers: dict,
    patient: dict,
    sede_centro: dict,
):
    """Plan drafts become CONFIRMED appointments with BEE-PLAN codes."""
    await make_appointment(
        id="apt-a",
        patient_id=patient["id"],
        sede_id=sede_centro["id"],
        professional_id="prof-1",
    )
    drafts = project_sessions(3, 7, date(2024, 3, 4), time(10, 0))

    response = await client.post(
        "/api/v1/clinical-sessions",
        json={
            "appointmentId": "apt-a",
            "diagnosis": "Fascitis plantar",
            "notes": "Dolor matutino en talón",
            "sessions": [d.model_dump(mode="json", by_alias=True) for d in drafts],
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    scheduled = response.json()["scheduled"]
    assert [s["date"] for s in scheduled] == ["2024-03-11", "2024-03-18", "2024-03-25"]
    assert all(s["status"] == "CONFIRMADO" for s in scheduled)
    assert all(s["bookingCode"].startswith("BEE-PLAN-") for s in scheduled)
    assert all(s["patientId"] == patient["id"] for s in scheduled)
    assert all(s["sedeId"] == sede_centro["id"] for s in scheduled)
    assert all(s["professionalId"] == "prof-1" for s in scheduled)
    assert await _status(db_session, "apt-a") == "ATENDIDO"


@pytest.mark.asyncio
async def test_finalize_registers_walk_in_patient(
    db_session,
    make_appointment,
    admin_user: dict,
    sede_centro: dict,
):
    """An appointment without a patient record gets one from its snapshot."""
    await make_appointment(id="apt-walk-in", sede_id=sede_centro["id"], patient_name="Elsa Ríos")

    service = ClinicalHistoryService(db_session)
    entry, scheduled = await service.finalize_session(
        admin_user,
        ClinicalSessionCreate(
            appointment_id="apt-walk-in", diagnosis="Hiperqueratosis", notes="Callosidad"
        ),
        today=date(2024, 3, 4),
    )

    result = await db_session.execute(select(patients).where(patients.c.name == "Elsa Ríos"))
    created = result.mappings().one()
    linked = await db_session.execute(
        select(appointments.c.patient_id).where(appointments.c.id == "apt-walk-in")
    )

    assert entry["patient_id"] == created["id"]
    assert entry["date"] == date(2024, 3, 4)
    assert linked.scalar_one() == created["id"]
    assert scheduled == []


@pytest.mark.asyncio
async def test_failed_attendance_rolls_back_entry(
    db_session,
    make_appointment,
    admin_user: dict,
    patient: dict,
    sede_centro: dict,
    monkeypatch,
):
    """If the ATTENDED write fails the history entry is not kept."""
    await make_appointment(id="apt-a", patient_id=patient["id"], sede_id=sede_centro["id"])
    service = ClinicalHistoryService(db_session)

    async def broken_mark_attended(appointment_id: str) -> None:
        raise RuntimeError("connection lost")

    monkeypatch.setattr(service.appointments, "mark_attended", broken_mark_attended)

    with pytest.raises(RuntimeError):
        await service.finalize_session(
            admin_user,
            ClinicalSessionCreate(appointment_id="apt-a", diagnosis="Tinea pedis", notes="Prurito"),
        )

    entries = await db_session.execute(select(clinical_history))
    assert entries.all() == []
    assert await _status(db_session, "apt-a") == "CONFIRMADO"


@pytest.mark.asyncio
async def test_history_entry_from_directory(
    client: AsyncClient,
    db_session,
    make_appointment,
    admin_headers: dict,
    patient: dict,
    sede_centro: dict,
):
    """Directory entries couple to the referenced appointment and default the plan text."""
    await make_appointment(id="apt-a", patient_id=patient["id"], sede_id=sede_centro["id"])
    drafts = project_sessions(2, 14, date(2024, 3, 1))

    response = await client.post(
        f"/api/v1/patients/{patient['id']}/history",
        json={
            "date": "2024-03-01",
            "diagnosis": "Pie diabético grado 1",
            "notes": "Control de úlcera",
            "appointmentId": "apt-a",
            "sedeId": sede_centro["id"],
            "sessions": [d.model_dump(mode="json", by_alias=True) for d in drafts],
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["entry"]["recommendations"] == "Plan de 2 sesiones."
    assert [s["date"] for s in body["scheduled"]] == ["2024-03-15", "2024-03-29"]
    assert all(s["patientName"] == patient["name"] for s in body["scheduled"])
    assert await _status(db_session, "apt-a") == "ATENDIDO"

    detail = await client.get(f"/api/v1/patients/{patient['id']}", headers=admin_headers)
    assert [h["diagnosis"] for h in detail.json()["history"]] == ["Pie diabético grado 1"]


@pytest.mark.asyncio
async def test_receptionist_cannot_finalize_other_sede(
    client: AsyncClient,
    make_appointment,
    receptionist_headers: dict,
    sede_norte: dict,
):
    """Sessions at a sede outside the user's scope are forbidden."""
    await make_appointment(id="apt-norte", sede_id=sede_norte["id"])

    response = await client.post(
        "/api/v1/clinical-sessions",
        json={"appointmentId": "apt-norte", "diagnosis": "Verruga", "notes": "Plantar"},
        headers=receptionist_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_history_entry_rejects_other_patients_appointment(
    client: AsyncClient,
    db_session,
    make_appointment,
    admin_headers: dict,
    patient: dict,
    sede_centro: dict,
):
    """An entry cannot close an appointment booked for a different patient."""
    await db_session.execute(
        insert(patients).values(
            id="patient-2", name="Elena Torres", company_id="feet-care-main"
        )
    )
    await db_session.commit()
    await make_appointment(id="apt-other", patient_id="patient-2", sede_id=sede_centro["id"])

    response = await client.post(
        f"/api/v1/patients/{patient['id']}/history",
        json={"diagnosis": "Onicomicosis", "notes": "Tópico", "appointmentId": "apt-other"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert await _status(db_session, "apt-other") == "CONFIRMADO"
    result = await db_session.execute(select(clinical_history))
    assert result.all() == []


@pytest.mark.asyncio
async def test_directory_plan_uses_short_codes(
    client: AsyncClient,
    admin_headers: dict,
    patient: dict,
    sede_centro: dict,
):
    """Sessions planned from the directory get BEE- codes and no notes."""
    drafts = project_sessions(2, 7, date(2024, 3, 1))

    response = await client.post(
        f"/api/v1/patients/{patient['id']}/history",
        json={
            "date": "2024-03-01",
            "diagnosis": "Hiperqueratosis",
            "notes": "Deslaminado",
            "sedeId": sede_centro["id"],
            "sessions": [d.model_dump(mode="json", by_alias=True) for d in drafts],
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    scheduled = response.json()["scheduled"]
    assert all(len(s["bookingCode"]) == 8 for s in scheduled)
    assert all(s["bookingCode"].startswith("BEE-") for s in scheduled)
    assert all(s["notes"] is None for s in scheduled)
