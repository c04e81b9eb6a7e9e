"""API v1 router configuration."""

from fastapi import APIRouter

from clinica.api.v1.endpoints import (
    ai,
    appointments,
    auth,
    clinical,
    company,
    dashboard,
    health,
    patients,
    portal,
    professionals,
    sedes,
    users,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(professionals.router, tags=["Professionals"])
api_router.include_router(company.router, tags=["Company"])
api_router.include_router(sedes.router, prefix="/sedes", tags=["Sedes"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(patients.router, prefix="/patients", tags=["Patients"])
api_router.include_router(clinical.router, tags=["Clinical sessions"])
api_router.include_router(portal.router, tags=["Portal"])
api_router.include_router(ai.router, tags=["AI"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
