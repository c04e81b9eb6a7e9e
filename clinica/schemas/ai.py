"""AI assistant schemas."""

from pydantic import Field

from clinica.schemas.common import CamelModel


class DiagnosisSuggestion(CamelModel):
    """Structured output of the diagnosis suggestion model."""

    suggestions: list[str] = []
    recommended_service: str = ""
    rationale: str | None = None


class ClinicalAssistantRequest(CamelModel):
    """Free-text findings to analyze."""

    notes: str = Field(..., max_length=10000)


class ClinicalAssistantResponse(CamelModel):
    """Advisory output; suggestion is null when the model call failed."""

    summary: str
    suggestion: DiagnosisSuggestion | None = None
