"""Patient directory and clinical history reads."""

from collections import defaultdict
from datetime import date

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinica.core.exceptions import NotFoundException
from clinica.models.base import new_id
from clinica.models.clinical_history import clinical_history
from clinica.models.patients import patients
from clinica.schemas.patients import PatientCreate, PatientSort, SortOrder

logger = structlog.get_logger(__name__)


def calculate_age(birth_date: date | None, today: date | None = None) -> int:
    """Whole years since birth; 0 when unknown."""
    if not birth_date:
        return 0
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def sort_history(entries: list[dict]) -> list[dict]:
    """Newest entry first."""
    return sorted(
        entries,
        key=lambda e: (e["date"], str(e.get("created_at") or "")),
        reverse=True,
    )


class PatientService:
    """Service for patient operations."""

    async def create_patient(
        self, db: AsyncSession, data: PatientCreate, company_id: str, commit: bool = True
    ) -> dict:
        """Register a patient."""
        query = (
            patients.insert()
            .values(id=new_id(), company_id=company_id, **data.model_dump())
            .returning(patients)
        )
        result = await db.execute(query)
        patient = dict(result.mappings().one())
        if commit:
            await db.commit()

        logger.info("patient_created", patient_id=patient["id"])
        return patient

    async def list_patients(
        self,
        db: AsyncSession,
        search: str | None = None,
        sort_by: PatientSort = PatientSort.NAME,
        order: SortOrder = SortOrder.ASC,
    ) -> list[dict]:
        """
        Search and sort the patient directory.

        Args:
            db: Database session
            search: Case-insensitive name fragment or document id fragment
            sort_by: name, recent (registration time) or age (birth date)
            order: asc or desc

        Returns:
            Patients with their history attached
        """
        query = select(patients)

        if search:
            term = search.strip()
            query = query.where(
                or_(
                    patients.c.name.ilike(f"%{term}%"),
                    patients.c.document_id.contains(term),
                )
            )

        if sort_by == PatientSort.NAME:
            column = func.lower(patients.c.name)
        elif sort_by == PatientSort.RECENT:
            column = patients.c.created_at
        else:
            column = patients.c.birth_date

        # "recent" ascending lists the newest registrations first
        descending = (order == SortOrder.DESC) != (sort_by == PatientSort.RECENT)
        query = query.order_by(column.desc() if descending else column.asc(), patients.c.id)

        result = await db.execute(query)
        rows = [dict(p) for p in result.mappings().all()]
        return await self._attach_history(db, rows)

    async def get_patient(self, db: AsyncSession, patient_id: str) -> dict:
        """
        Get a patient with history.

        Raises:
            NotFoundException: If patient not found
        """
        result = await db.execute(select(patients).where(patients.c.id == patient_id))
        patient = result.mappings().first()
        if not patient:
            raise NotFoundException("Patient not found")
        return (await self._attach_history(db, [dict(patient)]))[0]

    async def _attach_history(self, db: AsyncSession, rows: list[dict]) -> list[dict]:
        if not rows:
            return rows

        ids = [p["id"] for p in rows]
        result = await db.execute(
            select(clinical_history).where(clinical_history.c.patient_id.in_(ids))
        )
        by_patient: dict[str, list[dict]] = defaultdict(list)
        for entry in result.mappings().all():
            by_patient[entry["patient_id"]].append(dict(entry))

        today = date.today()
        for patient in rows:
            patient["history"] = sort_history(by_patient.get(patient["id"], []))
            patient["age"] = calculate_age(patient.get("birth_date"), today)
        return rows
