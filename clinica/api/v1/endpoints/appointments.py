"""Appointment endpoints."""

from datetime import date

from fastapi import APIRouter, Query, status

from clinica.core.permissions import ensure_sede_access
from clinica.dependencies import CurrentUser, DatabaseSession
from clinica.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentResponse,
    AppointmentStatus,
    AppointmentStatusUpdate,
    AppointmentUpdate,
)
from clinica.services.appointment_service import AppointmentService

router = APIRouter()


@router.post(
    "/",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Appointments"],
    summary="Create new appointment",
)
async def create_appointment(
    data: AppointmentCreate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Book an appointment from the staff agenda.

    Staff bookings are created CONFIRMED with a ``BEE-`` booking code.

    Args:
        data: Appointment creation data
        current_user: Authenticated user
        db: Database session

    Returns:
        Created appointment

    Raises:
        ForbiddenException: If the sede is outside the user's scope
    """
    ensure_sede_access(current_user, data.sede_id)
    service = AppointmentService(db)
    return await service.create_appointment(data, current_user["company_id"])


@router.get(
    "/",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List appointments",
)
async def list_appointments(
    current_user: CurrentUser,
    db: DatabaseSession,
    status_filter: AppointmentStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, description="Patient name or booking code"),
    sede_id: str | None = Query(None, alias="sedeId"),
    on_date: date | None = Query(None, alias="date"),
    from_date: date | None = Query(None, alias="fromDate"),
    to_date: date | None = Query(None, alias="toDate"),
) -> list[AppointmentResponse]:
    """
    List appointments visible to the authenticated user.

    Args:
        current_user: Authenticated user
        db: Database session
        status_filter: Filter by status
        search: Case-insensitive match on patient name or booking code
        sede_id: Filter by sede
        on_date: Exact date
        from_date: Range start (inclusive)
        to_date: Range end (inclusive)

    Returns:
        Appointments ordered by date and time
    """
    filters = AppointmentFilters(
        status=status_filter,
        search=search,
        sede_id=sede_id,
        on_date=on_date,
        from_date=from_date,
        to_date=to_date,
    )

    service = AppointmentService(db)
    return await service.list_appointments(current_user, filters)


@router.get(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Get appointment by ID",
)
async def get_appointment(
    appointment_id: str,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> AppointmentResponse:
    """Get a specific appointment by ID."""
    service = AppointmentService(db)
    return await service.get_for_user(appointment_id, current_user)


@router.put(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Update appointment",
)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Edit the patient snapshot, notes or status of an appointment.

    Args:
        appointment_id: Appointment ID
        data: Update data
        current_user: Authenticated user
        db: Database session

    Returns:
        Updated appointment
    """
    service = AppointmentService(db)
    return await service.update_appointment(appointment_id, current_user, data)


@router.patch(
    "/{appointment_id}/status",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Update appointment status",
)
async def update_appointment_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Write a new status (confirm, cancel, no-show, ...).

    Cancellation is a status; appointments are never deleted.
    """
    service = AppointmentService(db)
    return await service.update_appointment_status(appointment_id, current_user, data.status)
