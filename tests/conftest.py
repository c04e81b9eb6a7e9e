import os
from collections.abc import AsyncGenerator
from datetime import date, time, timedelta
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Load environment variables from .env file
load_dotenv()

# Settings are read at import time; tests never touch a real database or Redis
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

from clinica.core.redis_client import CacheManager  # noqa: E402
from clinica.core.security import MASTER_USER_ID, create_access_token  # noqa: E402
from clinica.database import get_db  # noqa: E402
from clinica.dependencies import get_cache_manager  # noqa: E402
from clinica.main import app  # noqa: E402
from clinica.models import appointments, metadata, patients, sedes, users  # noqa: E402
from clinica.schemas.sedes import default_availability  # noqa: E402
from clinica.services.sede_service import dump_availability  # noqa: E402

# In-memory SQLite shared by every connection of one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

COMPANY_ID = "feet-care-main"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session on a fresh schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def mock_redis() -> MagicMock:
    """Redis double that always misses."""
    redis = MagicMock()
    redis.get.return_value = None
    return redis


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, mock_redis: MagicMock
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_manager] = lambda: CacheManager(mock_redis)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def bearer(user_id: str) -> dict:
    """Authorization header for a user id."""
    token = create_access_token(user_id, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def sede_centro(db_session: AsyncSession) -> dict:
    """Sede the receptionist works at."""
    row = {
        "id": "sede-centro",
        "name": "Sede Centro",
        "address": "Av. Arequipa 123",
        "phone": "014445555",
        "whatsapp": "+51 987 654 321",
        "availability": dump_availability(default_availability()),
        "company_id": COMPANY_ID,
    }
    await db_session.execute(insert(sedes).values(**row))
    await db_session.commit()
    return row


@pytest_asyncio.fixture
async def sede_norte(db_session: AsyncSession) -> dict:
    """Sede outside the receptionist's scope."""
    row = {
        "id": "sede-norte",
        "name": "Sede Norte",
        "address": "Av. Universitaria 900",
        "phone": None,
        "whatsapp": None,
        "availability": dump_availability(default_availability()),
        "company_id": COMPANY_ID,
    }
    await db_session.execute(insert(sedes).values(**row))
    await db_session.commit()
    return row


async def _insert_user(db_session: AsyncSession, **values) -> dict:
    row = {
        "email": None,
        "sede_ids": [],
        "avatar": "",
        "company_id": COMPANY_ID,
        **values,
    }
    await db_session.execute(insert(users).values(**row))
    await db_session.commit()
    return row


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> dict:
    """ADMINISTRADOR with global scope."""
    return await _insert_user(
        db_session,
        id="user-admin",
        name="Ana Admin",
        email="ana@feetcare.pe",
        access_key="ADMIN1",
        role="ADMINISTRADOR",
    )


@pytest_asyncio.fixture
async def receptionist_user(db_session: AsyncSession, sede_centro: dict) -> dict:
    """RECEPCIONISTA scoped to Sede Centro."""
    return await _insert_user(
        db_session,
        id="user-recepcion",
        name="Rosa Recepción",
        access_key="recep1",
        role="RECEPCIONISTA",
        sede_ids=[sede_centro["id"]],
    )


@pytest.fixture
def admin_headers(admin_user: dict) -> dict:
    """Authentication headers for the administrator."""
    return bearer(admin_user["id"])


@pytest.fixture
def receptionist_headers(receptionist_user: dict) -> dict:
    """Authentication headers for the receptionist."""
    return bearer(receptionist_user["id"])


@pytest.fixture
def master_headers() -> dict:
    """Authentication headers for the master-code SUPER_ADMIN."""
    return bearer(MASTER_USER_ID)


@pytest_asyncio.fixture
async def patient(db_session: AsyncSession) -> dict:
    """Registered patient."""
    row = {
        "id": "patient-1",
        "name": "Carlos Quispe",
        "email": "carlos@example.com",
        "phone": "+51987111222",
        "document_id": "45678912",
        "birth_date": date(1980, 6, 15),
        "company_id": COMPANY_ID,
    }
    await db_session.execute(insert(patients).values(**row))
    await db_session.commit()
    return row


@pytest.fixture
def make_appointment(db_session: AsyncSession):
    """Factory inserting appointment rows with sensible defaults."""

    async def _make(**values) -> dict:
        row = {
            "patient_id": None,
            "patient_name": "Carlos Quispe",
            "patient_phone": "+51987111222",
            "patient_dni": "45678912",
            "patient_email": None,
            "date": date(2024, 3, 4),
            "time": time(10, 0),
            "status": "CONFIRMADO",
            "booking_code": "BEE-TEST1",
            "company_id": COMPANY_ID,
            **values,
        }
        await db_session.execute(insert(appointments).values(**row))
        await db_session.commit()
        return row

    return _make


@pytest.fixture
def sample_appointment_data(sede_centro: dict) -> dict:
    """Sample appointment payload, camelCase as sent by the front-end."""
    return {
        "patientName": "Lucía Mendoza",
        "patientPhone": "+51999888777",
        "patientDni": "70123456",
        "patientEmail": "",
        "date": "2024-05-20",
        "time": "15:30",
        "sedeId": sede_centro["id"],
        "notes": "Primera visita",
    }
