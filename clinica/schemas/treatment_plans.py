"""Treatment plan and clinical session schemas."""

import datetime as dt

from pydantic import Field

from clinica.schemas.appointments import AppointmentResponse
from clinica.schemas.common import CamelModel, ClockTime
from clinica.schemas.patients import ClinicalHistoryEntryResponse

MAX_PLAN_SESSIONS = 20


class SessionDraft(CamelModel):
    """One projected future visit, editable before it is scheduled."""

    id: str
    date: dt.date
    time: ClockTime


class TreatmentPlanRequest(CamelModel):
    """Projection request; sizes are clamped here, not in the projector."""

    num_sessions: int = Field(3, ge=1, le=MAX_PLAN_SESSIONS)
    frequency: int = Field(7, ge=1, description="Days between sessions")
    start_date: dt.date | None = None
    time: ClockTime | None = None
    appointment_id: str | None = Field(
        None, description="Take the session time from this appointment"
    )


class TreatmentPlanResponse(CamelModel):
    """Projected drafts."""

    sessions: list[SessionDraft]


class ClinicalSessionCreate(CamelModel):
    """Finalize a clinical session for an appointment."""

    appointment_id: str
    diagnosis: str = Field(..., min_length=1)
    notes: str = Field(..., min_length=1)
    recommendations: str | None = None
    sessions: list[SessionDraft] = Field(default_factory=list, max_length=MAX_PLAN_SESSIONS)


class HistoryEntryCreate(CamelModel):
    """Add a history entry from the patient directory."""

    date: dt.date | None = None
    diagnosis: str = Field(..., min_length=1)
    notes: str = Field(..., min_length=1)
    recommendations: str | None = None
    professional_id: str | None = None
    appointment_id: str | None = None
    sede_id: str | None = None
    sessions: list[SessionDraft] = Field(default_factory=list, max_length=MAX_PLAN_SESSIONS)


class ClinicalSessionResponse(CamelModel):
    """Saved entry plus any scheduled plan sessions."""

    entry: ClinicalHistoryEntryResponse
    scheduled: list[AppointmentResponse] = []
