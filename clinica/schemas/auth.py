"""Authentication schemas."""

from pydantic import Field

from clinica.schemas.common import CamelModel
from clinica.schemas.users import UserRole


class LoginRequest(CamelModel):
    """Access-code login request."""

    access_code: str = Field(..., min_length=1, max_length=100)


class SessionUser(CamelModel):
    """Authenticated staff member."""

    id: str
    name: str
    role: UserRole
    sede_ids: list[str] = []
    company_id: str | None = None
    avatar: str | None = None


class LoginResponse(CamelModel):
    """Login response with access token and user info."""

    access_token: str
    token_type: str = "bearer"
    user: SessionUser
