"""Company branding endpoints."""

from fastapi import APIRouter

from clinica.dependencies import CacheManagerDep, CurrentUser, DatabaseSession, SuperAdminUser
from clinica.schemas.companies import CompanyResponse, CompanyUpdate
from clinica.services.company_service import CompanyService

router = APIRouter(prefix="/company", tags=["Company"])


@router.get("/", response_model=CompanyResponse, summary="Get company branding")
async def get_company(
    current_user: CurrentUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
):
    """Branding of the user's company."""
    return await CompanyService(cache_manager).get_company(db, current_user["company_id"])


@router.put("/", response_model=CompanyResponse, summary="Update company branding")
async def update_company(
    data: CompanyUpdate,
    current_user: SuperAdminUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
):
    """Update name, colour, logo or portal hero (SUPER_ADMIN only)."""
    service = CompanyService(cache_manager)
    return await service.update_company(db, current_user["company_id"], data)
