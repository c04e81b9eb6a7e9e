"""Appointment schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum

from pydantic import Field, field_validator

from clinica.schemas.common import CamelModel, ClockTime, blank_to_none, reject_null


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    PENDING = "POR CONFIRMAR"
    CONFIRMED = "CONFIRMADO"
    CANCELLED = "CANCELADO"
    COMPLETED = "COMPLETADO"
    NO_SHOW = "NO ASISTIÓ"
    ATTENDED = "ATENDIDO"


class AppointmentBase(CamelModel):
    """Base appointment schema with common fields."""

    patient_name: str = Field(..., min_length=1, max_length=200)
    patient_phone: str | None = Field(None, max_length=30)
    patient_dni: str | None = Field(None, max_length=20)
    patient_email: str | None = None
    date: date
    time: ClockTime
    sede_id: str | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("patient_phone", "patient_dni", "patient_email", mode="before")
    @classmethod
    def empty_as_none(cls, v: object) -> object:
        """Store blank contact fields as null."""
        return blank_to_none(v)


class AppointmentCreate(AppointmentBase):
    """Schema for a staff-created appointment."""

    patient_id: str | None = None
    professional_id: str | None = None
    service_id: str | None = None


class AppointmentUpdate(CamelModel):
    """Schema for editing an appointment (patient snapshot, notes, status)."""

    patient_name: str | None = Field(None, min_length=1, max_length=200)
    patient_phone: str | None = Field(None, max_length=30)
    patient_dni: str | None = Field(None, max_length=20)
    patient_email: str | None = None
    status: AppointmentStatus | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("patient_name", "status")
    @classmethod
    def required_columns_not_null(cls, v: object) -> object:
        """Explicit nulls on NOT NULL columns are rejected."""
        return reject_null(v)


class AppointmentStatusUpdate(CamelModel):
    """Schema for updating appointment status."""

    status: AppointmentStatus


class AppointmentResponse(AppointmentBase):
    """Schema for appointment response."""

    id: str
    patient_id: str | None = None
    professional_id: str | None = None
    service_id: str | None = None
    company_id: str | None = None
    status: AppointmentStatus
    booking_code: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AppointmentFilters(CamelModel):
    """Schema for appointment filtering."""

    status: AppointmentStatus | None = None
    search: str | None = None
    sede_id: str | None = None
    on_date: date | None = None
    from_date: date | None = None
    to_date: date | None = None
