"""Professional endpoints."""

from fastapi import APIRouter, status

from clinica.dependencies import AdminUser, CurrentUser, DatabaseSession
from clinica.schemas.users import ProfessionalCreate, ProfessionalResponse
from clinica.services.professional_service import ProfessionalService

router = APIRouter(prefix="/professionals", tags=["Professionals"])


@router.get("/", response_model=list[ProfessionalResponse], summary="List professionals")
async def list_professionals(current_user: CurrentUser, db: DatabaseSession):
    """Professionals sharing a sede with the user; everyone for global roles."""
    return await ProfessionalService().list_professionals(db, current_user)


@router.post(
    "/",
    response_model=ProfessionalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register professional",
)
async def create_professional(
    data: ProfessionalCreate,
    current_user: AdminUser,
    db: DatabaseSession,
):
    """Register a professional profile."""
    return await ProfessionalService().create_professional(db, data, current_user["company_id"])
