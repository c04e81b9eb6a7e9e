"""Treatment plan projection and clinical session endpoints."""

from fastapi import APIRouter, status

from clinica.dependencies import CurrentUser, DatabaseSession
from clinica.schemas.treatment_plans import (
    ClinicalSessionCreate,
    ClinicalSessionResponse,
    TreatmentPlanRequest,
    TreatmentPlanResponse,
)
from clinica.services.appointment_service import AppointmentService
from clinica.services.clinical_history_service import ClinicalHistoryService
from clinica.services.treatment_plan import project_sessions

router = APIRouter(tags=["Clinical sessions"])


@router.post(
    "/treatment-plans/projection",
    response_model=TreatmentPlanResponse,
    status_code=status.HTTP_200_OK,
    summary="Project treatment plan sessions",
)
async def project_treatment_plan(
    data: TreatmentPlanRequest,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> TreatmentPlanResponse:
    """
    Project session drafts for a treatment plan.

    Every call returns a fresh list; earlier edits to drafts are not merged.
    Without an explicit time the drafts take the time of ``appointmentId``,
    falling back to 09:00.
    """
    session_time = data.time
    if session_time is None and data.appointment_id:
        appointment = await AppointmentService(db).get_for_user(data.appointment_id, current_user)
        session_time = appointment["time"]

    drafts = project_sessions(data.num_sessions, data.frequency, data.start_date, session_time)
    return TreatmentPlanResponse(sessions=drafts)


@router.post(
    "/clinical-sessions",
    response_model=ClinicalSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Finalize clinical session",
)
async def finalize_clinical_session(
    data: ClinicalSessionCreate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> ClinicalSessionResponse:
    """
    Save the clinical entry and mark the appointment ATTENDED.

    Both writes commit together. Plan drafts, if any, are then scheduled as
    CONFIRMED appointments with ``BEE-PLAN-`` booking codes.

    Args:
        data: Diagnosis, notes, recommendations and plan drafts
        current_user: Authenticated user
        db: Database session

    Returns:
        Saved entry and scheduled sessions
    """
    service = ClinicalHistoryService(db)
    entry, scheduled = await service.finalize_session(current_user, data)
    return ClinicalSessionResponse(entry=entry, scheduled=scheduled)
