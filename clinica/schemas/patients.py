"""Patient and clinical history schemas."""

from datetime import date, datetime
from enum import Enum

from pydantic import Field, field_validator

from clinica.schemas.common import CamelModel, blank_to_none


class PatientSort(str, Enum):
    """Directory sort keys."""

    NAME = "name"
    RECENT = "recent"
    AGE = "age"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class ClinicalHistoryEntryBase(CamelModel):
    """Fields shared by history entry requests and responses."""

    diagnosis: str = Field(..., min_length=1)
    notes: str = Field(..., min_length=1)
    recommendations: str | None = None
    professional_id: str | None = None
    appointment_id: str | None = None


class ClinicalHistoryEntryResponse(ClinicalHistoryEntryBase):
    """Clinical history entry as returned by the API."""

    id: str
    patient_id: str
    date: date
    created_at: datetime | None = None


class PatientBase(CamelModel):
    """Base patient schema."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str | None = None
    phone: str | None = Field(None, max_length=30)
    document_id: str | None = Field(None, max_length=20)
    birth_date: date | None = None

    @field_validator("email", "phone", "document_id", mode="before")
    @classmethod
    def empty_as_none(cls, v: object) -> object:
        """Store blank contact fields as null."""
        return blank_to_none(v)


class PatientCreate(PatientBase):
    """Schema for registering a patient."""


class PatientResponse(PatientBase):
    """Patient with computed age and history (newest first)."""

    id: str
    company_id: str | None = None
    age: int = 0
    history: list[ClinicalHistoryEntryResponse] = []
    created_at: datetime | None = None
