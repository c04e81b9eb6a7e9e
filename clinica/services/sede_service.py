"""Sede service: locations and weekly availability."""

from datetime import UTC, datetime
from typing import Any

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.core.exceptions import BadRequestException, NotFoundException
from clinica.core.permissions import visible_sedes
from clinica.core.redis_client import CacheManager
from clinica.models.base import new_id
from clinica.models.sedes import sedes
from clinica.schemas.sedes import (
    WEEKDAYS,
    WORK_DAYS,
    DayAvailability,
    SedeCreate,
    SedeUpdate,
    default_availability,
)

logger = structlog.get_logger(__name__)


def dump_availability(availability: dict[str, DayAvailability]) -> dict[str, Any]:
    """Serialize availability to its stored JSON shape."""
    return {
        day: config.model_dump(mode="json", by_alias=True) for day, config in availability.items()
    }


def copy_to_work_days(
    availability: dict[str, DayAvailability], source_day: str
) -> dict[str, DayAvailability]:
    """Copy one day's configuration onto Monday through Friday."""
    if source_day not in WEEKDAYS:
        raise BadRequestException(f"Unknown weekday: {source_day}")
    source = availability.get(source_day, DayAvailability())
    copied = dict(availability)
    for day in WORK_DAYS:
        copied[day] = source.model_copy(deep=True)
    return copied


class SedeService:
    """Service for sede operations."""

    # Cache TTL in seconds
    SEDE_LIST_CACHE_TTL = 300  # 5 minutes
    SEDE_LIST_CACHE_KEY = "sede:list"

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    def _invalidate(self) -> None:
        if self.cache:
            self.cache.delete(self.SEDE_LIST_CACHE_KEY)

    async def get_all_sedes(self, db: AsyncSession) -> list[dict]:
        """All sedes ordered by name, cached."""

        async def load() -> list[dict]:
            result = await db.execute(select(sedes).order_by(sedes.c.name))
            return [dict(s) for s in result.mappings().all()]

        if self.cache is None:
            return await load()
        return await self.cache.get_or_load(
            self.SEDE_LIST_CACHE_KEY, load, ttl=self.SEDE_LIST_CACHE_TTL
        )

    async def list_sedes(self, db: AsyncSession, user: dict) -> list[dict]:
        """Sedes visible to the user."""
        return visible_sedes(user, await self.get_all_sedes(db))

    async def get_sede(self, db: AsyncSession, sede_id: str) -> dict:
        """
        Get sede by ID.

        Raises:
            NotFoundException: If sede not found
        """
        result = await db.execute(select(sedes).where(sedes.c.id == sede_id))
        sede = result.mappings().first()
        if not sede:
            raise NotFoundException("Sede not found")
        return dict(sede)

    async def create_sede(self, db: AsyncSession, data: SedeCreate, company_id: str) -> dict:
        """Create a sede; availability defaults to the standard week."""
        availability = data.availability or default_availability()
        query = (
            sedes.insert()
            .values(
                id=new_id(),
                name=data.name,
                address=data.address,
                phone=data.phone,
                whatsapp=data.whatsapp,
                availability=dump_availability(availability),
                company_id=company_id,
            )
            .returning(sedes)
        )
        result = await db.execute(query)
        sede = dict(result.mappings().one())
        await db.commit()

        self._invalidate()
        logger.info("sede_created", sede_id=sede["id"], name=sede["name"])
        return sede

    async def update_sede(self, db: AsyncSession, sede_id: str, data: SedeUpdate) -> dict:
        """
        Update sede details and/or availability.

        Raises:
            NotFoundException: If sede not found
        """
        values = data.model_dump(exclude_unset=True, exclude={"availability"})
        if data.availability is not None:
            values["availability"] = dump_availability(data.availability)

        if not values:
            return await self.get_sede(db, sede_id)

        values["updated_at"] = datetime.now(UTC)
        query = update(sedes).where(sedes.c.id == sede_id).values(**values).returning(sedes)
        result = await db.execute(query)
        sede = result.mappings().first()
        if not sede:
            raise NotFoundException("Sede not found")
        await db.commit()

        self._invalidate()
        logger.info("sede_updated", sede_id=sede_id, fields=sorted(values))
        return dict(sede)
