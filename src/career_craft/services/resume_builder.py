"""Résumé tailoring through the LLM provider pattern.

The system prompt is built from the title dictionary, so the model writes
exactly the section headers the segmenter looks for.  The answer is a JSON
document holding the tailored résumé and a short explanation.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

from career_craft.constants.sections import Language, SectionKey, get_title_dictionary
from career_craft.services.llm_providers import LLMError
from career_craft.services.llm_service import LLMService

__all__ = [
    "TailoredResume",
    "build_resume_prompt",
    "parse_tailored_resume",
    "tailor_resume",
]

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)

_LANGUAGE_NAMES = {
    Language.ENGLISH: "English",
    Language.SPANISH: "Spanish",
}

_SECTION_GUIDES: dict[Language, dict[SectionKey, str]] = {
    Language.ENGLISH: {
        SectionKey.CONTACT: "Email, Phone, Address, GitHub or LinkedIn link, Date of Birth if available, one per line.",
        SectionKey.PROFILE: "A short, compelling summary of experience, skills and goals. Always include it.",
        SectionKey.EXPERIENCE: (
            "Reverse chronological order. For each job: Position, Company, Location on one line; "
            "dates (YYYY-MM to YYYY-MM or YYYY - Present) on the next line; then a brief description."
        ),
        SectionKey.EDUCATION: (
            "Reverse chronological order. For each entry: Degree, Institution, Location on one line; "
            "dates on the next line."
        ),
        SectionKey.SKILLS: 'Group into "Technical:" and "Soft:" where it helps.',
        SectionKey.LANGUAGES: 'Each language with its level, e.g. "Spanish - Native".',
        SectionKey.INTERESTS: "A few professional or relevant personal interests.",
    },
    Language.SPANISH: {
        SectionKey.CONTACT: "Email, Teléfono, Dirección, enlace de GitHub o LinkedIn, Fecha de Nacimiento si existe, uno por línea.",
        SectionKey.PROFILE: "Un resumen breve y convincente de experiencia, habilidades y metas. Inclúyelo siempre.",
        SectionKey.EXPERIENCE: (
            "Orden cronológico inverso. Para cada trabajo: Puesto, Empresa, Localidad en una línea; "
            "fechas (AAAA-MM a AAAA-MM o AAAA - Actualidad) en la siguiente; luego una breve descripción."
        ),
        SectionKey.EDUCATION: (
            "Orden cronológico inverso. Para cada entrada: Título, Institución, Localidad en una línea; "
            "fechas en la siguiente."
        ),
        SectionKey.SKILLS: 'Agrupa en "Técnicas:" y "Blandas:" si ayuda.',
        SectionKey.LANGUAGES: 'Cada idioma con su nivel, p. ej. "Inglés - Fluido".',
        SectionKey.INTERESTS: "Algunos intereses profesionales o personales relevantes.",
    },
}


@dataclass(frozen=True)
class TailoredResume:
    tailored_resume: str
    explanation: str


def build_resume_prompt(language: str | Language | None) -> str:
    """Build the system instructions for tailoring a résumé.

    The section titles come from the title dictionary of *language*, so the
    generated text uses exactly the headers the segmenter recognises.
    """
    dictionary = get_title_dictionary(language)
    guides = _SECTION_GUIDES[dictionary.language]
    language_name = _LANGUAGE_NAMES[dictionary.language]

    sections = "\n".join(
        f"{position}. {title}: {guides[key]}"
        for position, (key, title) in enumerate(dictionary.entries, start=2)
    )
    return (
        "You are an expert resume writer creating professional resumes tailored to a job "
        "description for a two-column layout. Highlight the candidate's strengths that are "
        "most relevant to the job and do not invent experience.\n\n"
        "Write the resume with these parts, in this order, using the exact section titles:\n"
        "1. The candidate's full name alone on the very first line, with no label.\n"
        f"{sections}\n\n"
        f"Write the resume and the explanation strictly in {language_name}. "
        "Return a JSON object with two string fields: "
        '"tailored_resume" (the full resume as plain text, no markdown) and '
        '"explanation" (why each change better matches the job description).'
    )


def _build_user_content(job_description: str, resume_text: str) -> str:
    return f"Job description:\n{job_description.strip()}\n\nOriginal resume:\n{resume_text.strip()}"


def parse_tailored_resume(text: str) -> TailoredResume:
    """Parse the model's JSON answer, tolerating a fenced code block.

    Raises:
        LLMError: If the answer is not a JSON object with both fields.
    """
    payload = text.strip()
    fenced = _FENCE_RE.match(payload)
    if fenced:
        payload = fenced.group(1).strip()

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise LLMError(f"LLM returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMError("LLM response is not a JSON object.")

    resume = data.get("tailored_resume") or data.get("tailoredResume")
    explanation = data.get("explanation")
    if not isinstance(resume, str) or not resume.strip():
        raise LLMError("LLM response is missing 'tailored_resume'.")
    if not isinstance(explanation, str):
        raise LLMError("LLM response is missing 'explanation'.")
    return TailoredResume(tailored_resume=resume.strip(), explanation=explanation.strip())


def tailor_resume(
    job_description: str,
    resume_text: str,
    language: str | Language | None = None,
    service: LLMService | None = None,
) -> TailoredResume:
    """Ask the LLM for a résumé tailored to *job_description*.

    Args:
        job_description: Text of the job offer.
        resume_text: The candidate's current résumé.
        language: Output language; English when unknown.
        service: LLM service to use. Defaults to the configured provider.

    Raises:
        LLMError: If the service cannot be created, the call fails or the
            answer cannot be parsed.
    """
    if not job_description.strip():
        raise ValueError("job_description must not be empty")
    if not resume_text.strip():
        raise ValueError("resume_text must not be empty")

    if service is None:
        try:
            service = LLMService()
        except Exception as e:
            raise LLMError(f"Failed to initialize LLM service: {e}") from e

    text = service.generate_llm_response(
        system_instructions=build_resume_prompt(language),
        user_content=_build_user_content(job_description, resume_text),
        temperature=0.4,
        json_output=True,
    )
    result = parse_tailored_resume(text)
    logger.info("Tailored resume generated (%d characters)", len(result.tailored_resume))
    return result
