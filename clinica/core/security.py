"""Security utilities for access codes and JWT handling."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from clinica.config import settings

# Synthetic identity behind the master access code
MASTER_USER_ID = "master-admin"


def normalize_access_code(code: str) -> str:
    """Access codes compare trimmed and case-insensitively."""
    return code.strip().upper()


def is_master_code(code: str) -> bool:
    """Check a code against the configured emergency master code."""
    return normalize_access_code(code) == normalize_access_code(settings.master_access_code)


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """
    Issue a signed access token for a staff member.

    Args:
        subject: User id (or the master identity)
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    issued_at = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + lifetime,
        "type": "access",
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Verified claims, or None for a bad signature, expiry or token type."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    return payload if payload.get("type") == "access" else None
