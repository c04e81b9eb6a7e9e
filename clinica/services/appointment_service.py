"""Appointment service for business logic."""

import secrets
import string
from datetime import UTC, datetime
from typing import Any

import structlog
from sqlalchemy import and_, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.core.exceptions import NotFoundException
from clinica.core.permissions import ensure_sede_access, visible_appointments
from clinica.models.appointments import appointments
from clinica.models.base import new_id
from clinica.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentStatus,
    AppointmentUpdate,
)

logger = structlog.get_logger(__name__)

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def staff_booking_code() -> str:
    """Booking code for appointments created by staff."""
    return "BEE-" + "".join(secrets.choice(_CODE_ALPHABET) for _ in range(5))


def portal_booking_code(appointment_id: str) -> str:
    """Booking code for portal requests, derived from the appointment id."""
    return "WEB-" + appointment_id[:5].upper()


class AppointmentService:
    """Service for managing appointments."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_appointment(
        self,
        data: AppointmentCreate,
        company_id: str | None,
    ) -> dict:
        """
        Create an appointment from the staff agenda.

        Staff bookings are confirmed on creation.

        Args:
            data: Appointment creation data
            company_id: Owning company

        Returns:
            Created appointment row
        """
        values = data.model_dump()
        values.update(
            {
                "id": new_id(),
                "company_id": company_id,
                "status": AppointmentStatus.CONFIRMED.value,
                "booking_code": staff_booking_code(),
            }
        )

        row = await self._insert(values)
        await self.db.commit()

        logger.info(
            "appointment_created",
            appointment_id=row["id"],
            booking_code=row["booking_code"],
            sede_id=row["sede_id"],
        )
        return row

    async def create_pending(self, values: dict[str, Any]) -> dict:
        """Create an appointment request awaiting confirmation (portal bookings)."""
        appointment_id = new_id()
        row = await self._insert(
            {
                **values,
                "id": appointment_id,
                "status": AppointmentStatus.PENDING.value,
                "booking_code": portal_booking_code(appointment_id),
            }
        )
        await self.db.commit()

        logger.info(
            "appointment_requested",
            appointment_id=row["id"],
            booking_code=row["booking_code"],
            sede_id=row["sede_id"],
        )
        return row

    async def create_many(self, rows: list[dict[str, Any]]) -> list[dict]:
        """
        Insert a batch of appointments in one statement.

        The caller commits.

        Args:
            rows: Insert-ready appointment values

        Returns:
            Created rows ordered by date and time
        """
        if not rows:
            return []

        values = [{"id": new_id(), **row} for row in rows]
        stmt = insert(appointments).values(values).returning(appointments)
        result = await self.db.execute(stmt)
        created = [dict(r) for r in result.mappings().all()]
        return sorted(created, key=lambda a: (a["date"], a["time"]))

    async def _insert(self, values: dict[str, Any]) -> dict:
        stmt = insert(appointments).values(**values).returning(appointments)
        result = await self.db.execute(stmt)
        return dict(result.mappings().one())

    async def get_appointment(self, appointment_id: str) -> dict:
        """
        Get appointment by ID.

        Raises:
            NotFoundException: If appointment not found
        """
        stmt = select(appointments).where(appointments.c.id == appointment_id)
        result = await self.db.execute(stmt)
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Appointment not found")

        return dict(row)

    async def get_for_user(self, appointment_id: str, user: dict) -> dict:
        """
        Get appointment by ID, checking the caller's sede scope.

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If the appointment's sede is out of scope
        """
        appointment = await self.get_appointment(appointment_id)
        ensure_sede_access(user, appointment["sede_id"])
        return appointment

    async def list_appointments(self, user: dict, filters: AppointmentFilters) -> list[dict]:
        """
        List appointments visible to the user.

        Args:
            user: Requesting user
            filters: Filter parameters

        Returns:
            Appointments ordered by date and time
        """
        conditions: list = []

        if filters.status:
            conditions.append(appointments.c.status == filters.status.value)

        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            conditions.append(
                or_(
                    appointments.c.patient_name.ilike(pattern),
                    appointments.c.booking_code.ilike(pattern),
                )
            )

        if filters.sede_id:
            conditions.append(appointments.c.sede_id == filters.sede_id)

        if filters.on_date:
            conditions.append(appointments.c.date == filters.on_date)

        if filters.from_date:
            conditions.append(appointments.c.date >= filters.from_date)

        if filters.to_date:
            conditions.append(appointments.c.date <= filters.to_date)

        stmt = select(appointments).order_by(appointments.c.date, appointments.c.time)
        if conditions:
            stmt = stmt.where(and_(*conditions))

        result = await self.db.execute(stmt)
        rows = [dict(r) for r in result.mappings().all()]
        return visible_appointments(user, rows)

    async def update_appointment(
        self,
        appointment_id: str,
        user: dict,
        data: AppointmentUpdate,
    ) -> dict:
        """
        Edit patient snapshot fields, notes or status.

        Last write wins; there is no version check.
        """
        await self.get_for_user(appointment_id, user)

        update_values: dict[str, Any] = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if isinstance(value, AppointmentStatus):
                update_values[field] = value.value
            else:
                update_values[field] = value

        if not update_values:
            return await self.get_appointment(appointment_id)

        return await self._update(appointment_id, update_values)

    async def update_appointment_status(
        self,
        appointment_id: str,
        user: dict,
        new_status: AppointmentStatus,
    ) -> dict:
        """
        Write a new status.

        Any status may follow any other; the agenda only conventionally moves
        PENDING -> CONFIRMED -> ATTENDED, with CANCELLED reachable from anywhere.
        """
        current = await self.get_for_user(appointment_id, user)
        row = await self._update(appointment_id, {"status": new_status.value})

        if current["status"] != new_status.value:
            logger.info(
                "appointment_status_changed",
                appointment_id=appointment_id,
                old_status=current["status"],
                new_status=new_status.value,
            )
        return row

    async def _update(self, appointment_id: str, values: dict[str, Any]) -> dict:
        values["updated_at"] = datetime.now(UTC)
        stmt = (
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(**values)
            .returning(appointments)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return dict(result.mappings().one())

    async def mark_attended(self, appointment_id: str) -> None:
        """
        Flag an appointment as ATTENDED without committing.

        Used inside the clinical-session transaction.
        """
        stmt = (
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(status=AppointmentStatus.ATTENDED.value, updated_at=datetime.now(UTC))
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundException("Appointment not found")
