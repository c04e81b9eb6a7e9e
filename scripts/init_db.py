"""Script to initialize the database."""

import asyncio

from sqlalchemy import select

from clinica.config import settings
from clinica.database import engine
from clinica.models import companies, metadata
from clinica.services.company_service import default_company


async def init_db() -> None:
    """Create all tables and seed the default company."""
    async with engine.begin() as conn:
        # Create all tables
        await conn.run_sync(metadata.create_all)

        result = await conn.execute(
            select(companies.c.id).where(companies.c.id == settings.company_id)
        )
        if result.first() is None:
            await conn.execute(companies.insert().values(**default_company(settings.company_id)))
            print(f"✓ Seeded company {settings.company_id}")

    await engine.dispose()
    print("✓ Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_db())
