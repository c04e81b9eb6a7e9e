"""Health check endpoints."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from clinica.config import settings
from clinica.core.redis_client import check_redis_connection
from clinica.database import check_database_connection

router = APIRouter()


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Readiness response with per-dependency status."""

    database: str
    redis: str
    ai_assistant: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Basic health check",
)
async def health_check() -> HealthResponse:
    """The process is up."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    tags=["Health"],
    summary="Detailed health check",
)
async def detailed_health_check(response: Response) -> DetailedHealthResponse:
    """
    Readiness check.

    The database is required and answers 503 when unreachable. Redis only
    backs the cache and Gemini only backs the advisory assistant, so either
    being unavailable reports ``degraded`` with a 200.
    """
    db_healthy = await check_database_connection()
    redis_healthy = await check_redis_connection()
    ai_configured = bool(settings.gemini_api_key)

    if not db_healthy:
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif redis_healthy and ai_configured:
        overall = "healthy"
    else:
        overall = "degraded"

    return DetailedHealthResponse(
        status=overall,
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
        redis="healthy" if redis_healthy else "unhealthy",
        ai_assistant="configured" if ai_configured else "not_configured",
    )
