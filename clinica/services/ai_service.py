"""Advisory clinical helpers backed by Google Gemini.

Nothing here may block the clinical workflow: every failure degrades to a
fixed message or ``None``.
"""

import json

import google.generativeai as genai
import structlog

from clinica.config import settings
from clinica.schemas.ai import DiagnosisSuggestion

logger = structlog.get_logger(__name__)

SUMMARY_EMPTY_MESSAGE = "No se pudo generar el resumen clínico."
SUMMARY_ERROR_MESSAGE = "Error de conexión con el asistente de IA."


def get_gemini_model(model_name: str) -> genai.GenerativeModel:
    """Configure the client and return the requested model."""
    if not settings.gemini_api_key:
        raise ValueError("GEMINI_API_KEY is not configured")

    genai.configure(api_key=settings.gemini_api_key)
    return genai.GenerativeModel(model_name)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json fence if the model added one."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("```")[1]
        if text.startswith("json"):
            text = text[4:]
    return text.strip()


async def summarize_clinical_notes(notes: str) -> str:
    """Professional, concise summary of free-text clinical notes."""
    prompt = (
        "Resume de forma profesional y concisa las siguientes notas clínicas de un "
        "paciente. Enfócate estrictamente en hallazgos, diagnóstico y plan de "
        f'tratamiento: "{notes}"'
    )
    try:
        model = get_gemini_model(settings.gemini_summary_model)
        response = await model.generate_content_async(
            prompt,
            generation_config=genai.GenerationConfig(max_output_tokens=600),
        )
        text = (response.text or "").strip()
    except Exception as e:
        logger.error("ai_summary_failed", error=str(e))
        return SUMMARY_ERROR_MESSAGE

    return text or SUMMARY_EMPTY_MESSAGE


async def suggest_diagnosis(findings: str) -> DiagnosisSuggestion | None:
    """
    Differential diagnoses and a recommended service for the findings.

    Returns:
        Parsed suggestion, or None when the call or parsing fails
    """
    prompt = (
        f'Analiza los siguientes hallazgos clínicos: "{findings}". Proporciona una lista '
        "de posibles diagnósticos diferenciales y sugiere los servicios clínicos más "
        "adecuados. Responde exclusivamente en JSON con las claves "
        '"suggestions" (lista de textos), "recommendedService" (texto) y '
        '"rationale" (texto breve).'
    )
    try:
        model = get_gemini_model(settings.gemini_diagnosis_model)
        response = await model.generate_content_async(
            prompt,
            generation_config=genai.GenerationConfig(response_mime_type="application/json"),
        )
        payload = json.loads(strip_code_fence(response.text or "{}"))
        return DiagnosisSuggestion.model_validate(payload)
    except Exception as e:
        logger.error("ai_diagnosis_failed", error=str(e))
        return None
