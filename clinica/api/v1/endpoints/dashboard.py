"""Dashboard endpoints."""

from fastapi import APIRouter

from clinica.dependencies import CacheManagerDep, CurrentUser, DatabaseSession
from clinica.schemas.dashboard import DashboardSummary
from clinica.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummary, summary="Dashboard summary")
async def get_summary(
    current_user: CurrentUser,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
):
    """Totals and latest appointments within the user's sede scope."""
    return await DashboardService(db, cache_manager).get_summary(current_user)
