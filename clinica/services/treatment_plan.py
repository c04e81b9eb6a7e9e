"""Treatment plan session projection.

A treatment plan turns one clinical session into a series of follow-up
visits: ``num_sessions`` drafts spaced ``frequency`` days apart, starting one
interval after ``start_date``. Drafts are plain values; staff may edit or drop
individual drafts before they are materialized as appointments.
"""

import secrets
import string
from collections.abc import Callable
from datetime import date, time, timedelta
from typing import Any
from uuid import uuid4

from clinica.schemas.appointments import AppointmentStatus
from clinica.schemas.treatment_plans import SessionDraft

DEFAULT_SESSION_TIME = time(9, 0)

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def project_sessions(
    num_sessions: int,
    frequency: int,
    start_date: date | None = None,
    session_time: time | None = None,
) -> list[SessionDraft]:
    """
    Project future session drafts.

    Session ``i`` (1-based) falls on ``start_date + i * frequency`` days.
    Non-positive sizes are the caller's responsibility; the request schema
    clamps them before they reach this function.

    Args:
        num_sessions: Number of drafts to produce
        frequency: Days between consecutive sessions
        start_date: Reference date, defaults to today
        session_time: Time for every draft, defaults to 09:00

    Returns:
        Fresh list of drafts ordered by date
    """
    start = start_date or date.today()
    slot = session_time or DEFAULT_SESSION_TIME
    return [
        SessionDraft(
            id=f"draft-{uuid4().hex[:12]}",
            date=start + timedelta(days=i * frequency),
            time=slot,
        )
        for i in range(1, num_sessions + 1)
    ]


def update_draft(
    drafts: list[SessionDraft],
    draft_id: str,
    new_date: date | None = None,
    new_time: time | None = None,
) -> list[SessionDraft]:
    """Return drafts with one entry's date and/or time replaced."""
    changes: dict[str, Any] = {}
    if new_date is not None:
        changes["date"] = new_date
    if new_time is not None:
        changes["time"] = new_time
    return [d.model_copy(update=changes) if d.id == draft_id else d for d in drafts]


def remove_draft(drafts: list[SessionDraft], draft_id: str) -> list[SessionDraft]:
    """Return drafts without the given entry; other ids are untouched."""
    return [d for d in drafts if d.id != draft_id]


def plan_booking_code() -> str:
    """Booking code for an appointment created from a treatment plan."""
    return "BEE-PLAN-" + "".join(secrets.choice(_CODE_ALPHABET) for _ in range(4))


def directory_booking_code() -> str:
    """Booking code for sessions scheduled from the patient directory."""
    return "BEE-" + "".join(secrets.choice(_CODE_ALPHABET) for _ in range(4))


def materialize_sessions(
    drafts: list[SessionDraft],
    template: dict[str, Any],
    started_on: date | None,
    code_factory: Callable[[], str] = plan_booking_code,
) -> list[dict[str, Any]]:
    """
    Turn drafts into appointment rows, one per draft.

    Args:
        drafts: Drafts to schedule
        template: Patient/sede/professional fields copied onto every row
        started_on: Date of the originating clinical session; None leaves
            the notes empty
        code_factory: Generates one booking code per row

    Returns:
        Insert-ready appointment values, all CONFIRMED
    """
    notes = f"Plan iniciado el {started_on.isoformat()}" if started_on else None
    return [
        {
            **template,
            "date": draft.date,
            "time": draft.time,
            "status": AppointmentStatus.CONFIRMED.value,
            "booking_code": code_factory(),
            "notes": notes,
        }
        for draft in drafts
    ]
