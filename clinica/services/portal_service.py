"""Public booking portal."""

import re
from datetime import date
from urllib.parse import quote

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.config import settings
from clinica.core.exceptions import ValidationException
from clinica.schemas.patients import PatientCreate
from clinica.schemas.portal import PortalBookingRequest
from clinica.services.appointment_service import AppointmentService
from clinica.services.company_service import CompanyService
from clinica.services.patient_service import PatientService
from clinica.services.sede_service import SedeService

logger = structlog.get_logger(__name__)

TIME_SLOTS = [
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "14:00",
    "15:00",
    "16:00",
    "17:00",
    "18:00",
]

PHONE_DIGITS = 9
MAX_DNI_DIGITS = 12
MIN_NAME_LENGTH = 3

# Portal patients never give a birth date
PLACEHOLDER_BIRTH_DATE = date(2000, 1, 1)


def digits_only(value: str | None) -> str:
    """Strip every non-digit character."""
    return re.sub(r"\D", "", value or "")


def validate_portal_booking(name: str | None, phone: str | None) -> bool:
    """Whether the portal form may be submitted."""
    return len((name or "").strip()) >= MIN_NAME_LENGTH and len(digits_only(phone)) == PHONE_DIGITS


def whatsapp_url(
    sede: dict, company_name: str, patient_name: str, booking_date: date, booking_time: str
) -> str:
    """Deep link opening a chat with the sede, prefilled with the booking."""
    number = digits_only(sede.get("whatsapp")) or settings.portal_fallback_whatsapp
    message = (
        f"Hola! Reservé una cita en {company_name}:\n\n"
        f"*Nombre:* {patient_name}\n"
        f"*Sede:* {sede['name']}\n"
        f"*Fecha:* {booking_date.isoformat()}\n"
        f"*Hora:* {booking_time}\n\n"
        "Espero confirmación!"
    )
    return f"https://wa.me/{number}?text={quote(message)}"


class PortalService:
    """Service behind the unauthenticated booking portal."""

    def __init__(self, db: AsyncSession, cache_manager=None):
        """Initialize service with database session and optional cache."""
        self.db = db
        self.sedes = SedeService(cache_manager)
        self.companies = CompanyService(cache_manager)

    async def get_config(self, company_id: str) -> dict:
        """Branding, sedes and bookable slots."""
        return {
            "company": await self.companies.get_company(self.db, company_id),
            "sedes": await self.sedes.get_all_sedes(self.db),
            "time_slots": TIME_SLOTS,
        }

    async def book(self, data: PortalBookingRequest, company_id: str) -> dict:
        """
        Register the patient, then request a PENDING appointment.

        The two writes are independent commits. A failure creating the
        appointment leaves the patient row in place.

        Raises:
            ValidationException: If name or phone are not acceptable
            NotFoundException: If the sede does not exist
        """
        if not validate_portal_booking(data.patient_name, data.patient_phone):
            raise ValidationException(
                "Ingrese un nombre de al menos 3 caracteres y un teléfono de 9 dígitos."
            )

        sede = await self.sedes.get_sede(self.db, data.sede_id)
        name = data.patient_name.strip()
        phone = f"{data.country_code}{digits_only(data.patient_phone)}"
        dni = digits_only(data.patient_dni)[:MAX_DNI_DIGITS] or None

        patient = await PatientService().create_patient(
            self.db,
            PatientCreate(
                name=name,
                phone=phone,
                email=data.patient_email,
                document_id=dni,
                birth_date=PLACEHOLDER_BIRTH_DATE,
            ),
            company_id,
        )

        appointment = await AppointmentService(self.db).create_pending(
            {
                "patient_id": patient["id"],
                "patient_name": name,
                "patient_phone": phone,
                "patient_dni": dni,
                "patient_email": patient["email"],
                "date": data.date,
                "time": data.time,
                "sede_id": sede["id"],
                "company_id": company_id,
            }
        )
        logger.info("portal_booking_created", appointment_id=appointment["id"])

        company = await self.companies.get_company(self.db, company_id)
        return {
            "appointment": appointment,
            "whatsapp_url": whatsapp_url(
                sede, company["name"], name, data.date, data.time.strftime("%H:%M")
            ),
        }
