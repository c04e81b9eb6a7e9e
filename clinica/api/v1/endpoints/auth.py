"""Authentication endpoints."""

from fastapi import APIRouter, status

from clinica.dependencies import CurrentUser, DatabaseSession
from clinica.schemas.auth import LoginRequest, LoginResponse, SessionUser
from clinica.services.auth_service import AuthService

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Log in with an access code",
)
async def login(request: LoginRequest, db: DatabaseSession) -> LoginResponse:
    """
    Exchange a staff access code for an access token.

    Codes are matched trimmed and case-insensitively. The configured master
    code signs in as a synthetic SUPER_ADMIN.

    Args:
        request: Access code
        db: Database session

    Returns:
        Access token and the signed-in user

    Raises:
        UnauthorizedException: If the code matches no user
    """
    user, token = await AuthService().login(db, request.access_code)
    return LoginResponse(access_token=token, user=SessionUser.model_validate(user))


@router.get(
    "/me",
    response_model=SessionUser,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Current session user",
)
async def me(current_user: CurrentUser) -> SessionUser:
    """Return the user behind the bearer token."""
    return SessionUser.model_validate(current_user)
