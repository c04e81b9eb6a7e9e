"""Sede (location) endpoints."""

from fastapi import APIRouter, Query, status

from clinica.core.permissions import ensure_sede_access
from clinica.dependencies import AdminUser, CacheManagerDep, CurrentUser, DatabaseSession
from clinica.schemas.sedes import (
    WEEKDAYS,
    AvailabilityUpdate,
    DayAvailability,
    SedeCreate,
    SedeResponse,
    SedeUpdate,
)
from clinica.services.sede_service import SedeService, copy_to_work_days

router = APIRouter()


@router.get(
    "/",
    response_model=list[SedeResponse],
    status_code=status.HTTP_200_OK,
    tags=["Sedes"],
    summary="List sedes",
)
async def list_sedes(
    current_user: CurrentUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
) -> list[SedeResponse]:
    """List the sedes visible to the authenticated user."""
    return await SedeService(cache_manager).list_sedes(db, current_user)


@router.post(
    "/",
    response_model=SedeResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Sedes"],
    summary="Create sede (admin only)",
)
async def create_sede(
    data: SedeCreate,
    current_user: AdminUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
) -> SedeResponse:
    """
    Create a sede.

    Without an explicit availability the standard week is used: Monday to
    Friday 09:00-13:00 and 14:00-18:00, Saturday 09:00-13:00, Sunday closed.
    """
    return await SedeService(cache_manager).create_sede(db, data, current_user["company_id"])


@router.get(
    "/{sede_id}",
    response_model=SedeResponse,
    status_code=status.HTTP_200_OK,
    tags=["Sedes"],
    summary="Get sede by ID",
)
async def get_sede(
    sede_id: str,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> SedeResponse:
    """Get a sede within the user's scope."""
    ensure_sede_access(current_user, sede_id)
    return await SedeService().get_sede(db, sede_id)


@router.put(
    "/{sede_id}",
    response_model=SedeResponse,
    status_code=status.HTTP_200_OK,
    tags=["Sedes"],
    summary="Update sede (admin only)",
)
async def update_sede(
    sede_id: str,
    data: SedeUpdate,
    current_user: AdminUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
) -> SedeResponse:
    """Update sede details and, optionally, its availability."""
    return await SedeService(cache_manager).update_sede(db, sede_id, data)


@router.put(
    "/{sede_id}/availability",
    response_model=SedeResponse,
    status_code=status.HTTP_200_OK,
    tags=["Sedes"],
    summary="Replace weekly availability (admin only)",
)
async def update_availability(
    sede_id: str,
    data: AvailabilityUpdate,
    current_user: AdminUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
) -> SedeResponse:
    """
    Replace the weekly availability of a sede.

    Args:
        sede_id: Sede ID
        data: Map of Spanish weekday name to open flag and intervals
        current_user: Administrator
        cache_manager: Cache for the sede list
        db: Database session

    Returns:
        Updated sede
    """
    service = SedeService(cache_manager)
    return await service.update_sede(db, sede_id, SedeUpdate(availability=data.availability))


@router.post(
    "/{sede_id}/availability/copy-to-work-days",
    response_model=SedeResponse,
    status_code=status.HTTP_200_OK,
    tags=["Sedes"],
    summary="Copy one day onto Monday-Friday (admin only)",
)
async def copy_day_to_work_days(
    sede_id: str,
    current_user: AdminUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
    source_day: str = Query(..., alias="sourceDay", description=", ".join(WEEKDAYS)),
) -> SedeResponse:
    """Copy the configuration of ``sourceDay`` onto every work day."""
    service = SedeService(cache_manager)
    sede = await service.get_sede(db, sede_id)
    current = {
        day: DayAvailability.model_validate(config)
        for day, config in (sede["availability"] or {}).items()
    }
    availability = copy_to_work_days(current, source_day)
    return await service.update_sede(db, sede_id, SedeUpdate(availability=availability))
