"""Services"""

from career_craft.services.extraction import (
    ExtractionError,
    extract_text_from_pdf,
    fetch_text_from_url,
)
from career_craft.services.llm_providers import LLMError
from career_craft.services.resume_builder import TailoredResume, tailor_resume
from career_craft.services.resume_document import compose_resume_layout, compose_resume_pdf

__all__ = [
    "ExtractionError",
    "LLMError",
    "TailoredResume",
    "compose_resume_layout",
    "compose_resume_pdf",
    "extract_text_from_pdf",
    "fetch_text_from_url",
    "tailor_resume",
]
