"""Public booking portal schemas."""

from datetime import date

from pydantic import Field

from clinica.schemas.appointments import AppointmentResponse
from clinica.schemas.common import CamelModel, ClockTime
from clinica.schemas.companies import CompanyResponse
from clinica.schemas.sedes import SedeResponse


class PortalBookingRequest(CamelModel):
    """Booking submitted from the public portal."""

    sede_id: str
    patient_name: str = Field(..., max_length=200)
    patient_phone: str = Field(..., max_length=30)
    country_code: str = Field("+51", pattern=r"^\+\d{1,4}$")
    patient_dni: str | None = Field(None, max_length=30)
    patient_email: str | None = None
    date: date
    time: ClockTime


class PortalBookingResponse(CamelModel):
    """Created booking plus a WhatsApp link to the sede."""

    appointment: AppointmentResponse
    whatsapp_url: str


class PortalConfigResponse(CamelModel):
    """Everything the portal needs to render the booking flow."""

    company: CompanyResponse
    sedes: list[SedeResponse]
    time_slots: list[str]
