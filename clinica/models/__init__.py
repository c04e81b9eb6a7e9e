"""Database models."""

from clinica.models.appointments import appointments
from clinica.models.base import metadata
from clinica.models.clinical_history import clinical_history
from clinica.models.companies import companies
from clinica.models.patients import patients
from clinica.models.professionals import professionals
from clinica.models.sedes import sedes
from clinica.models.users import users

__all__ = [
    "appointments",
    "clinical_history",
    "companies",
    "metadata",
    "patients",
    "professionals",
    "sedes",
    "users",
]
