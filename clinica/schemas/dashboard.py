"""Dashboard schemas."""

from clinica.schemas.appointments import AppointmentResponse
from clinica.schemas.common import CamelModel


class DashboardSummary(CamelModel):
    """Counts and recent activity visible to the current user."""

    total_appointments: int
    pending_appointments: int
    status_counts: dict[str, int]
    total_patients: int
    sede_count: int
    recent_appointments: list[AppointmentResponse]
