"""Clinical sessions: history entries, attendance and treatment plans."""

from datetime import date
from collections.abc import Callable
from typing import Any

import structlog
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.core.exceptions import BadRequestException
from clinica.core.permissions import ensure_sede_access
from clinica.models.appointments import appointments
from clinica.models.base import new_id
from clinica.models.clinical_history import clinical_history
from clinica.schemas.patients import PatientCreate
from clinica.schemas.treatment_plans import (
    ClinicalSessionCreate,
    HistoryEntryCreate,
    SessionDraft,
)
from clinica.services.appointment_service import AppointmentService
from clinica.services.patient_service import PatientService
from clinica.services.treatment_plan import (
    directory_booking_code,
    materialize_sessions,
    plan_booking_code,
)

logger = structlog.get_logger(__name__)


class ClinicalHistoryService:
    """
    Service for recording clinical history.

    Saving an entry linked to an appointment also marks that appointment
    ATTENDED. Both writes share one transaction: either the entry and the
    attendance are stored together or neither is. Follow-up sessions from a
    treatment plan are scheduled afterwards as a separate batch.
    """

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
        self.appointments = AppointmentService(db)
        self.patients = PatientService()

    async def finalize_session(
        self,
        user: dict,
        data: ClinicalSessionCreate,
        today: date | None = None,
    ) -> tuple[dict, list[dict]]:
        """
        Close the clinical session of an appointment.

        Args:
            user: Staff member finalizing the session
            data: Diagnosis, notes, recommendations and optional plan drafts
            today: Session date, defaults to today

        Returns:
            Tuple of (history entry, scheduled follow-up appointments)
        """
        today = today or date.today()
        appointment = await self.appointments.get_for_user(data.appointment_id, user)

        try:
            patient_id = appointment["patient_id"]
            if not patient_id:
                patient_id = await self._register_walk_in(appointment)

            entry = await self._insert_entry(
                patient_id=patient_id,
                entry_date=today,
                professional_id=appointment["professional_id"],
                diagnosis=data.diagnosis,
                notes=data.notes,
                recommendations=data.recommendations,
                appointment_id=appointment["id"],
            )
            await self.appointments.mark_attended(appointment["id"])
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "clinical_session_save_failed",
                appointment_id=data.appointment_id,
                error=str(e),
            )
            raise

        logger.info(
            "clinical_session_finalized",
            appointment_id=appointment["id"],
            entry_id=entry["id"],
        )

        template = {
            "patient_id": patient_id,
            "patient_name": appointment["patient_name"],
            "patient_phone": appointment["patient_phone"],
            "patient_dni": appointment["patient_dni"],
            "patient_email": appointment["patient_email"],
            "service_id": appointment["service_id"],
            "sede_id": appointment["sede_id"],
            "professional_id": appointment["professional_id"],
            "company_id": appointment["company_id"],
        }
        scheduled = await self._schedule_plan(data.sessions, template, today)
        return entry, scheduled

    async def add_history_entry(
        self,
        user: dict,
        patient_id: str,
        data: HistoryEntryCreate,
        today: date | None = None,
    ) -> tuple[dict, list[dict]]:
        """
        Add a history entry from the patient directory.

        Returns:
            Tuple of (history entry, scheduled follow-up appointments)
        """
        today = today or date.today()
        patient = await self.patients.get_patient(self.db, patient_id)

        if data.appointment_id:
            appointment = await self.appointments.get_for_user(data.appointment_id, user)
            if appointment["patient_id"] and appointment["patient_id"] != patient_id:
                raise BadRequestException("La cita pertenece a otro paciente.")
        if data.sessions:
            ensure_sede_access(user, data.sede_id)

        recommendations = data.recommendations
        if not recommendations and data.sessions:
            recommendations = f"Plan de {len(data.sessions)} sesiones."

        try:
            entry = await self._insert_entry(
                patient_id=patient_id,
                entry_date=data.date or today,
                professional_id=data.professional_id,
                diagnosis=data.diagnosis,
                notes=data.notes,
                recommendations=recommendations or "",
                appointment_id=data.appointment_id,
            )
            if data.appointment_id:
                await self.appointments.mark_attended(data.appointment_id)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("history_entry_save_failed", patient_id=patient_id, error=str(e))
            raise

        logger.info("history_entry_added", patient_id=patient_id, entry_id=entry["id"])

        template = {
            "patient_id": patient["id"],
            "patient_name": patient["name"],
            "patient_phone": patient["phone"],
            "patient_dni": patient["document_id"],
            "patient_email": patient["email"],
            "sede_id": data.sede_id,
            "professional_id": data.professional_id,
            "company_id": patient["company_id"],
        }
        scheduled = await self._schedule_plan(
            data.sessions, template, None, code_factory=directory_booking_code
        )
        return entry, scheduled

    async def _insert_entry(self, entry_date: date, **values: Any) -> dict:
        query = (
            clinical_history.insert()
            .values(id=new_id(), date=entry_date, **values)
            .returning(clinical_history)
        )
        result = await self.db.execute(query)
        return dict(result.mappings().one())

    async def _register_walk_in(self, appointment: dict) -> str:
        """Create a patient from an appointment's snapshot fields and link it."""
        patient = await self.patients.create_patient(
            self.db,
            PatientCreate(
                name=appointment["patient_name"],
                phone=appointment["patient_phone"],
                document_id=appointment["patient_dni"],
                email=appointment["patient_email"],
            ),
            appointment["company_id"],
            commit=False,
        )
        await self.db.execute(
            update(appointments)
            .where(appointments.c.id == appointment["id"])
            .values(patient_id=patient["id"])
        )
        return patient["id"]

    async def _schedule_plan(
        self,
        drafts: list[SessionDraft],
        template: dict[str, Any],
        started_on: date | None,
        code_factory: Callable[[], str] = plan_booking_code,
    ) -> list[dict]:
        if not drafts:
            return []

        rows = materialize_sessions(drafts, template, started_on, code_factory)
        try:
            scheduled = await self.appointments.create_many(rows)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "treatment_plan_scheduling_failed",
                patient_id=template["patient_id"],
                sessions=len(drafts),
                error=str(e),
            )
            raise

        logger.info(
            "treatment_plan_scheduled",
            patient_id=template["patient_id"],
            sessions=len(scheduled),
        )
        return scheduled
