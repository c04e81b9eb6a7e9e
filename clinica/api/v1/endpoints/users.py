"""Staff user endpoints (administrators only)."""

from fastapi import APIRouter, status

from clinica.core.permissions import ensure_role_assignable
from clinica.dependencies import AdminUser, DatabaseSession
from clinica.schemas.users import (
    SpecialistCreate,
    SpecialistResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from clinica.services.professional_service import ProfessionalService
from clinica.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/", response_model=list[UserResponse], summary="List staff users")
async def list_users(current_user: AdminUser, db: DatabaseSession):
    """List staff users of the administrator's company."""
    return await UserService().list_users(db, current_user["company_id"])


@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create staff user",
)
async def create_user(data: UserCreate, current_user: AdminUser, db: DatabaseSession):
    """
    Create a staff user.

    An empty email is stored as null. A duplicate email answers 409 with a
    message naming the offending address. Only a SUPER_ADMIN may create
    another SUPER_ADMIN.
    """
    ensure_role_assignable(current_user, data.role)
    return await UserService().create_user(db, data, current_user["company_id"])


@router.put("/{user_id}", response_model=UserResponse, summary="Update staff user")
async def update_user(
    user_id: str,
    data: UserUpdate,
    current_user: AdminUser,
    db: DatabaseSession,
):
    """
    Update a staff user of the administrator's company.

    Only a SUPER_ADMIN may promote someone to SUPER_ADMIN.
    """
    ensure_role_assignable(current_user, data.role)
    return await UserService().update_user(db, user_id, data, current_user["company_id"])


@router.post(
    "/specialists",
    response_model=SpecialistResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard specialist",
)
async def onboard_specialist(
    data: SpecialistCreate,
    current_user: AdminUser,
    db: DatabaseSession,
):
    """Create an ESPECIALISTA login together with its professional profile."""
    user, professional = await ProfessionalService().onboard_specialist(
        db, data, current_user["company_id"]
    )
    return SpecialistResponse(
        user=UserResponse.model_validate(user),
        professional=professional,
    )
