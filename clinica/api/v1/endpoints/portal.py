"""Public booking portal endpoints (no authentication)."""

from fastapi import APIRouter, status

from clinica.config import settings
from clinica.dependencies import CacheManagerDep, DatabaseSession
from clinica.schemas.portal import (
    PortalBookingRequest,
    PortalBookingResponse,
    PortalConfigResponse,
)
from clinica.services.portal_service import PortalService

router = APIRouter(prefix="/portal", tags=["Portal"])


@router.get("/config", response_model=PortalConfigResponse, summary="Portal configuration")
async def get_portal_config(cache_manager: CacheManagerDep, db: DatabaseSession):
    """Company branding, sedes and bookable time slots."""
    return await PortalService(db, cache_manager).get_config(settings.company_id)


@router.post(
    "/bookings",
    response_model=PortalBookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request an appointment",
)
async def create_booking(
    data: PortalBookingRequest,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
):
    """
    Request an appointment from the public portal.

    The patient is registered first, then a PENDING appointment with a
    ``WEB-`` booking code is created. The response carries a WhatsApp link
    the patient uses to confirm with the sede.

    Args:
        data: Patient contact details, sede, date and time
        cache_manager: Cache for branding lookups
        db: Database session

    Returns:
        Appointment and WhatsApp deep link

    Raises:
        ValidationException: If the name is shorter than 3 characters or the
            phone does not have 9 digits
        NotFoundException: If the sede does not exist
    """
    return await PortalService(db, cache_manager).book(data, settings.company_id)
