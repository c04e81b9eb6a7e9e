"""User service for business logic."""

from datetime import UTC, datetime

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.core.exceptions import EmailAlreadyRegisteredException, NotFoundException
from clinica.core.security import normalize_access_code
from clinica.models.base import new_id
from clinica.models.users import users
from clinica.schemas.users import UserCreate, UserUpdate

logger = structlog.get_logger(__name__)


def normalize_email(email: str | None) -> str | None:
    """Trimmed email, or None for blank values."""
    if email is None:
        return None
    email = email.strip()
    return email or None


def is_email_conflict(error: IntegrityError) -> bool:
    """Check whether an integrity error comes from the unique email index."""
    message = str(error.orig) if error.orig is not None else str(error)
    return "email" in message.lower()


class UserService:
    """Service for staff user operations."""

    async def create_user(self, db: AsyncSession, user_data: UserCreate, company_id: str) -> dict:
        """
        Create a staff user.

        Raises:
            EmailAlreadyRegisteredException: If another user holds the email
        """
        email = normalize_email(user_data.email)
        query = (
            users.insert()
            .values(
                id=new_id(),
                name=user_data.name,
                email=email,
                access_key=user_data.access_key,
                role=user_data.role.value,
                company_id=company_id,
                sede_ids=user_data.sede_ids,
                avatar=user_data.avatar or "",
            )
            .returning(users)
        )

        try:
            result = await db.execute(query)
            user = result.mappings().one()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if is_email_conflict(e):
                logger.warning("user_email_conflict", email=email)
                raise EmailAlreadyRegisteredException(user_data.email) from e
            raise

        logger.info("user_created", user_id=user["id"], role=user["role"])
        return dict(user)

    async def get_user_by_id(self, db: AsyncSession, user_id: str) -> dict | None:
        """Get user by ID."""
        query = select(users).where(users.c.id == user_id)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_access_code(self, db: AsyncSession, code: str) -> dict | None:
        """Find the user whose access key matches, ignoring case."""
        normalized = normalize_access_code(code)
        if not normalized:
            return None
        query = select(users).where(func.upper(func.trim(users.c.access_key)) == normalized)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def list_users(self, db: AsyncSession, company_id: str | None = None) -> list[dict]:
        """List staff users ordered by name."""
        query = select(users).order_by(users.c.name)
        if company_id:
            query = query.where(users.c.company_id == company_id)
        result = await db.execute(query)
        return [dict(u) for u in result.mappings().all()]

    async def update_user(
        self, db: AsyncSession, user_id: str, user_data: UserUpdate, company_id: str
    ) -> dict:
        """
        Update a staff user belonging to ``company_id``.

        Users of other companies are reported as not found.

        Raises:
            NotFoundException: If the user does not exist
            EmailAlreadyRegisteredException: If another user holds the email
        """
        update_data = user_data.model_dump(exclude_unset=True)
        if "email" in update_data:
            update_data["email"] = normalize_email(update_data["email"])
        if update_data.get("role") is not None:
            update_data["role"] = user_data.role.value

        if not update_data:
            user = await self.get_user_by_id(db, user_id)
            if not user or user["company_id"] != company_id:
                raise NotFoundException("User not found")
            return user

        update_data["updated_at"] = datetime.now(UTC)
        query = (
            update(users)
            .where(users.c.id == user_id, users.c.company_id == company_id)
            .values(**update_data)
            .returning(users)
        )

        try:
            result = await db.execute(query)
            user = result.mappings().first()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if is_email_conflict(e):
                logger.warning("user_email_conflict", email=update_data.get("email"))
                raise EmailAlreadyRegisteredException(user_data.email, on_update=True) from e
            raise

        if not user:
            raise NotFoundException("User not found")

        logger.info("user_updated", user_id=user_id)
        return dict(user)
