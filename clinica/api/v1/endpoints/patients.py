"""Patient directory endpoints."""

from fastapi import APIRouter, Query, status

from clinica.dependencies import CurrentUser, DatabaseSession
from clinica.schemas.patients import PatientCreate, PatientResponse, PatientSort, SortOrder
from clinica.schemas.treatment_plans import ClinicalSessionResponse, HistoryEntryCreate
from clinica.services.clinical_history_service import ClinicalHistoryService
from clinica.services.patient_service import PatientService

router = APIRouter()


@router.get(
    "/",
    response_model=list[PatientResponse],
    status_code=status.HTTP_200_OK,
    tags=["Patients"],
    summary="Search patients",
)
async def list_patients(
    current_user: CurrentUser,
    db: DatabaseSession,
    search: str | None = Query(None, description="Name or document number"),
    sort_by: PatientSort = Query(PatientSort.NAME, alias="sortBy"),
    order: SortOrder = Query(SortOrder.ASC),
) -> list[PatientResponse]:
    """
    Search and sort the patient directory.

    Args:
        current_user: Authenticated user
        db: Database session
        search: Case-insensitive name fragment or document number fragment
        sort_by: ``name``, ``recent`` or ``age``
        order: ``asc`` or ``desc``

    Returns:
        Patients with age and clinical history
    """
    return await PatientService().list_patients(db, search, sort_by, order)


@router.post(
    "/",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Patients"],
    summary="Register patient",
)
async def create_patient(
    data: PatientCreate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> PatientResponse:
    """Register a patient for the user's company."""
    service = PatientService()
    patient = await service.create_patient(db, data, current_user["company_id"])
    return await service.get_patient(db, patient["id"])


@router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    status_code=status.HTTP_200_OK,
    tags=["Patients"],
    summary="Get patient with history",
)
async def get_patient(
    patient_id: str,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> PatientResponse:
    """Get a patient with computed age and history, newest entry first."""
    return await PatientService().get_patient(db, patient_id)


@router.post(
    "/{patient_id}/history",
    response_model=ClinicalSessionResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Patients"],
    summary="Add clinical history entry",
)
async def add_history_entry(
    patient_id: str,
    data: HistoryEntryCreate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> ClinicalSessionResponse:
    """
    Record a history entry from the patient directory.

    When the entry references an appointment, that appointment becomes
    ATTENDED in the same transaction. Plan drafts are scheduled afterwards.

    Args:
        patient_id: Patient ID
        data: Entry fields plus optional plan drafts
        current_user: Authenticated user
        db: Database session

    Returns:
        Saved entry and scheduled sessions
    """
    service = ClinicalHistoryService(db)
    entry, scheduled = await service.add_history_entry(current_user, patient_id, data)
    return ClinicalSessionResponse(entry=entry, scheduled=scheduled)
