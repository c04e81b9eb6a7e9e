"""AI assistant endpoints."""

from fastapi import APIRouter, status

from clinica.core.exceptions import BadRequestException
from clinica.dependencies import CurrentUser
from clinica.schemas.ai import ClinicalAssistantRequest, ClinicalAssistantResponse
from clinica.services import ai_service

router = APIRouter(prefix="/ai", tags=["AI"])

MIN_NOTES_LENGTH = 10


@router.post(
    "/clinical-assistant",
    response_model=ClinicalAssistantResponse,
    status_code=status.HTTP_200_OK,
    summary="Summarize notes and suggest diagnoses",
)
async def clinical_assistant(
    data: ClinicalAssistantRequest,
    current_user: CurrentUser,
) -> ClinicalAssistantResponse:
    """
    Advisory summary and differential diagnoses for free-text findings.

    Model failures never raise: the summary degrades to a fixed message and
    the suggestion to null.
    """
    notes = data.notes.strip()
    if len(notes) < MIN_NOTES_LENGTH:
        raise BadRequestException(
            "Por favor ingrese más detalles para que el asistente pueda analizarlos."
        )

    summary = await ai_service.summarize_clinical_notes(notes)
    suggestion = await ai_service.suggest_diagnosis(notes)
    return ClinicalAssistantResponse(summary=summary, suggestion=suggestion)
