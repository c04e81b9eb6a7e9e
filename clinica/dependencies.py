"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.core.permissions import has_global_scope, is_super_admin
from clinica.core.redis_client import CacheManager, get_redis_client
from clinica.database import get_db
from clinica.services.auth_service import AuthService

# Security
security = HTTPBearer(auto_error=False)


def get_cache_manager() -> CacheManager:
    """Cache helper over the shared Redis client."""
    return CacheManager(get_redis_client())


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """
    Resolve the bearer token to the session user.

    Raises:
        HTTPException: If the token is missing, invalid or its user is gone
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await AuthService().resolve_token(db, credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


async def require_admin(user: Annotated[dict, Depends(get_current_user)]) -> dict:
    """Allow SUPER_ADMIN and ADMINISTRADOR only."""
    if not has_global_scope(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required",
        )
    return user


async def require_super_admin(user: Annotated[dict, Depends(get_current_user)]) -> dict:
    """Allow SUPER_ADMIN only."""
    if not is_super_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super administrator privileges required",
        )
    return user


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
AdminUser = Annotated[dict, Depends(require_admin)]
SuperAdminUser = Annotated[dict, Depends(require_super_admin)]
CacheManagerDep = Annotated[CacheManager, Depends(get_cache_manager)]
