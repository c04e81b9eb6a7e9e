"""Dashboard aggregates."""

from collections import Counter

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.models.patients import patients
from clinica.schemas.appointments import AppointmentFilters, AppointmentStatus
from clinica.services.appointment_service import AppointmentService
from clinica.services.sede_service import SedeService

RECENT_LIMIT = 5


class DashboardService:
    """Counts over the records visible to the caller."""

    def __init__(self, db: AsyncSession, cache_manager=None):
        """Initialize service with database session and optional cache."""
        self.db = db
        self.sedes = SedeService(cache_manager)

    async def get_summary(self, user: dict) -> dict:
        """Scoped totals and the latest appointments."""
        visible = await AppointmentService(self.db).list_appointments(user, AppointmentFilters())
        counts = Counter(a["status"] for a in visible)
        status_counts = {s.value: counts.get(s.value, 0) for s in AppointmentStatus}

        result = await self.db.execute(select(func.count()).select_from(patients))
        total_patients = result.scalar_one()
        sede_list = await self.sedes.list_sedes(self.db, user)

        recent = sorted(
            visible,
            key=lambda a: (a["date"], a["time"], str(a.get("created_at") or "")),
            reverse=True,
        )[:RECENT_LIMIT]

        return {
            "total_appointments": len(visible),
            "pending_appointments": status_counts[AppointmentStatus.PENDING.value],
            "status_counts": status_counts,
            "total_patients": total_patients,
            "sede_count": len(sede_list),
            "recent_appointments": recent,
        }
