"""Authentication service for access codes and JWT."""

from datetime import timedelta

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.config import settings
from clinica.core.exceptions import UnauthorizedException
from clinica.core.security import (
    MASTER_USER_ID,
    create_access_token,
    decode_access_token,
    is_master_code,
)
from clinica.schemas.users import UserRole
from clinica.services.user_service import UserService

logger = structlog.get_logger(__name__)


def master_user() -> dict:
    """Synthetic SUPER_ADMIN behind the master access code."""
    return {
        "id": MASTER_USER_ID,
        "name": "Super Admin",
        "role": UserRole.SUPER_ADMIN.value,
        "sede_ids": [],
        "company_id": settings.company_id,
        "avatar": None,
    }


def session_user(user: dict) -> dict:
    """Keep only the fields a session carries."""
    return {
        "id": user["id"],
        "name": user["name"],
        "role": user["role"],
        "sede_ids": user.get("sede_ids") or [],
        "company_id": user.get("company_id") or settings.company_id,
        "avatar": user.get("avatar"),
    }


class AuthService:
    """Authentication service for handling access-code login and JWT operations."""

    def __init__(self):
        """Initialize auth service."""
        self.users = UserService()

    async def authenticate(self, db: AsyncSession, access_code: str) -> dict:
        """
        Resolve an access code to a staff member.

        The master code wins over any stored key.

        Raises:
            UnauthorizedException: If no user holds the code
        """
        if is_master_code(access_code):
            logger.info("master_code_login")
            return master_user()

        user = await self.users.get_user_by_access_code(db, access_code)
        if not user:
            logger.warning("login_failed")
            raise UnauthorizedException("Código de acceso inválido")

        logger.info("user_logged_in", user_id=user["id"], role=user["role"])
        return session_user(user)

    async def login(self, db: AsyncSession, access_code: str) -> tuple[dict, str]:
        """
        Authenticate and issue an access token.

        Returns:
            Tuple of (session user, access token)
        """
        user = await self.authenticate(db, access_code)
        token = create_access_token(
            user["id"],
            expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        )
        return user, token

    async def resolve_token(self, db: AsyncSession, token: str) -> dict | None:
        """
        Load the session user behind an access token.

        Returns:
            Session user, or None if the token is invalid or the user is gone
        """
        payload = decode_access_token(token)
        if payload is None:
            return None

        user_id = payload.get("sub")
        if not isinstance(user_id, str):
            return None

        if user_id == MASTER_USER_ID:
            return master_user()

        user = await self.users.get_user_by_id(db, user_id)
        return session_user(user) if user else None
