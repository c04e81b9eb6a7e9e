"""Professional (specialist) service."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.core.exceptions import EmailAlreadyRegisteredException
from clinica.core.permissions import visible_professionals
from clinica.models.base import new_id
from clinica.models.professionals import professionals
from clinica.models.users import users
from clinica.schemas.users import ProfessionalCreate, SpecialistCreate, UserRole
from clinica.services.user_service import is_email_conflict, normalize_email

logger = structlog.get_logger(__name__)


def default_avatar(seed: str) -> str:
    """Placeholder avatar keyed on an email, access key or id."""
    return f"https://i.pravatar.cc/150?u={seed}"


class ProfessionalService:
    """Service for professional operations."""

    async def create_professional(
        self, db: AsyncSession, data: ProfessionalCreate, company_id: str
    ) -> dict:
        """Register a professional profile."""
        query = (
            professionals.insert()
            .values(
                id=new_id(),
                name=data.name,
                specialty=data.specialty,
                avatar=data.avatar,
                sede_ids=data.sede_ids,
                user_id=data.user_id,
                company_id=company_id,
            )
            .returning(professionals)
        )
        result = await db.execute(query)
        professional = dict(result.mappings().one())
        await db.commit()

        logger.info("professional_created", professional_id=professional["id"])
        return professional

    async def onboard_specialist(
        self, db: AsyncSession, data: SpecialistCreate, company_id: str
    ) -> tuple[dict, dict]:
        """
        Create a specialist login and its professional profile together.

        Both rows are written in one transaction.

        Returns:
            Tuple of (user, professional)
        """
        user_id = new_id()
        email = normalize_email(data.email)
        avatar = data.avatar or default_avatar(email or user_id)

        user_query = (
            users.insert()
            .values(
                id=user_id,
                name=data.name,
                email=email,
                access_key=data.access_key,
                role=UserRole.SPECIALIST.value,
                company_id=company_id,
                sede_ids=data.sede_ids,
                avatar=avatar,
            )
            .returning(users)
        )
        professional_query = (
            professionals.insert()
            .values(
                id=new_id(),
                name=data.name,
                specialty=data.specialty,
                avatar=avatar,
                sede_ids=data.sede_ids,
                user_id=user_id,
                company_id=company_id,
            )
            .returning(professionals)
        )

        try:
            user = dict((await db.execute(user_query)).mappings().one())
            professional = dict((await db.execute(professional_query)).mappings().one())
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if is_email_conflict(e):
                raise EmailAlreadyRegisteredException(data.email) from e
            raise

        logger.info("specialist_onboarded", user_id=user_id, professional_id=professional["id"])
        return user, professional

    async def list_professionals(self, db: AsyncSession, user: dict) -> list[dict]:
        """Professionals visible to the user."""
        result = await db.execute(select(professionals).order_by(professionals.c.name))
        rows = [dict(p) for p in result.mappings().all()]
        return visible_professionals(user, rows)
