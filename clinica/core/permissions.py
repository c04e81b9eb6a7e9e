"""Role tiers and sede-scoped read projections.

Global roles see every sede, appointment and professional. Sede-scoped roles
only see records attached to one of the sedes listed on their account.
"""

from collections.abc import Iterable
from typing import Any

from clinica.core.exceptions import ForbiddenException
from clinica.schemas.users import UserRole

GLOBAL_ROLES = {UserRole.SUPER_ADMIN.value, UserRole.ADMIN.value}


def has_global_scope(user: dict[str, Any]) -> bool:
    """Check whether the user sees every sede."""
    return user.get("role") in GLOBAL_ROLES


def is_super_admin(user: dict[str, Any]) -> bool:
    """Check for the platform owner role."""
    return user.get("role") == UserRole.SUPER_ADMIN.value


def user_sede_ids(user: dict[str, Any]) -> set[str]:
    """Sedes assigned to the user."""
    return set(user.get("sede_ids") or [])


def can_access_sede(user: dict[str, Any], sede_id: str | None) -> bool:
    """Check whether a record attached to ``sede_id`` is visible to the user."""
    if has_global_scope(user):
        return True
    return sede_id is not None and sede_id in user_sede_ids(user)


def ensure_sede_access(user: dict[str, Any], sede_id: str | None) -> None:
    """Raise if the user may not act on the given sede."""
    if not can_access_sede(user, sede_id):
        raise ForbiddenException("Access denied to this sede")


def visible_sedes(user: dict[str, Any], sedes: Iterable[dict]) -> list[dict]:
    """Sedes the user may see."""
    if has_global_scope(user):
        return list(sedes)
    allowed = user_sede_ids(user)
    return [s for s in sedes if s["id"] in allowed]


def visible_appointments(user: dict[str, Any], appointments: Iterable[dict]) -> list[dict]:
    """Appointments booked at one of the user's sedes."""
    if has_global_scope(user):
        return list(appointments)
    allowed = user_sede_ids(user)
    return [a for a in appointments if a.get("sede_id") in allowed]


def visible_professionals(user: dict[str, Any], professionals: Iterable[dict]) -> list[dict]:
    """Professionals sharing at least one sede with the user."""
    if has_global_scope(user):
        return list(professionals)
    allowed = user_sede_ids(user)
    return [p for p in professionals if allowed.intersection(p.get("sede_ids") or [])]


def ensure_role_assignable(user: dict[str, Any], role: UserRole | str | None) -> None:
    """Only a SUPER_ADMIN may grant the SUPER_ADMIN role."""
    value = role.value if isinstance(role, UserRole) else role
    if value == UserRole.SUPER_ADMIN.value and not is_super_admin(user):
        raise ForbiddenException("Solo un Super Admin puede asignar el rol SUPER_ADMIN.")
