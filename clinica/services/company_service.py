"""Company branding service."""

from datetime import UTC, datetime

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.config import settings
from clinica.core.redis_client import CacheManager
from clinica.models.companies import companies
from clinica.schemas.companies import CompanyUpdate

logger = structlog.get_logger(__name__)


def default_company(company_id: str) -> dict:
    """Branding used until the company row exists."""
    return {
        "id": company_id,
        "name": settings.company_name,
        "primary_color": settings.company_primary_color,
        "logo": None,
        "portal_hero": None,
    }


class CompanyService:
    """Service for company branding."""

    # Cache TTL in seconds
    COMPANY_CACHE_TTL = 900  # 15 minutes

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    @staticmethod
    def _get_company_cache_key(company_id: str) -> str:
        """Generate cache key for company."""
        return f"company:{company_id}"

    async def get_company(self, db: AsyncSession, company_id: str) -> dict:
        """Get company branding, falling back to configured defaults."""

        async def load() -> dict | None:
            result = await db.execute(select(companies).where(companies.c.id == company_id))
            company = result.mappings().first()
            return dict(company) if company else None

        if self.cache is None:
            company = await load()
        else:
            company = await self.cache.get_or_load(
                self._get_company_cache_key(company_id), load, ttl=self.COMPANY_CACHE_TTL
            )
        return company or default_company(company_id)

    async def update_company(
        self, db: AsyncSession, company_id: str, data: CompanyUpdate
    ) -> dict:
        """Update branding, creating the row on first write."""
        values = data.model_dump(exclude_unset=True)

        result = await db.execute(select(companies.c.id).where(companies.c.id == company_id))
        if result.first() is None:
            row = {**default_company(company_id), **values}
            query = companies.insert().values(**row).returning(companies)
        else:
            values["updated_at"] = datetime.now(UTC)
            query = (
                update(companies)
                .where(companies.c.id == company_id)
                .values(**values)
                .returning(companies)
            )

        result = await db.execute(query)
        company = dict(result.mappings().one())
        await db.commit()

        if self.cache:
            self.cache.delete(self._get_company_cache_key(company_id))

        logger.info("company_branding_updated", company_id=company_id)
        return company
