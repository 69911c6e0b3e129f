"""Resume routes for the API."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from career_craft.api.dependencies import get_llm_service
from career_craft.api.schemas.resumes import (
    ResumeLayoutResponse,
    ResumeRenderRequest,
    ResumeTailorRequest,
    ResumeTailorResponse,
)
from career_craft.config import get_settings
from career_craft.layout.photo import DecodedPhoto, Photo, decode_photo
from career_craft.parsing.segmenter import split_candidate_name
from career_craft.services.extraction import (
    ExtractionError,
    extract_text_from_pdf,
    fetch_text_from_url,
)
from career_craft.services.llm_providers import LLMError
from career_craft.services.llm_service import LLMService
from career_craft.services.resume_builder import tailor_resume
from career_craft.services.resume_document import compose_resume_layout
from career_craft.utils.export import generate_filename, render_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["resumes"])


def _load_photo(photo_data_uri: str | None) -> DecodedPhoto | None:
    """Decode the request photo; an unusable one is logged and dropped."""
    if not photo_data_uri:
        return None
    try:
        photo = Photo.from_data_uri(photo_data_uri)
    except ValueError as e:
        logger.warning("Ignoring candidate photo: %s", e)
        return None
    return decode_photo(photo, max_bytes=get_settings().max_photo_bytes)


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


def _decode_pdf_data_uri(data_uri: str) -> bytes:
    header, sep, payload = data_uri.partition(",")
    if not sep:
        header, payload = "", data_uri
    if header and "application/pdf" not in header.lower():
        raise HTTPException(
            status_code=422,
            detail="Unsupported resume file type. Only PDF is supported.",
        )
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(
            status_code=422,
            detail="Resume file is not valid base64.",
        ) from e


@router.post("/layout", response_model=ResumeLayoutResponse)
def layout_resume_endpoint(data: ResumeRenderRequest) -> ResumeLayoutResponse:
    """Lay out a generated résumé and return the page description."""
    layout = compose_resume_layout(
        data.resume_text, data.language, photo=_load_photo(data.photo_data_uri)
    )
    return ResumeLayoutResponse.from_layout(layout)


@router.post("/pdf", responses={200: {"content": {"application/pdf": {}}}})
def render_resume_pdf_endpoint(data: ResumeRenderRequest) -> Response:
    """Render a generated résumé and download it as PDF."""
    layout = compose_resume_layout(
        data.resume_text, data.language, photo=_load_photo(data.photo_data_uri)
    )
    name, _ = split_candidate_name(data.resume_text)
    return Response(
        content=render_pdf(layout),
        media_type="application/pdf",
        headers=_attachment(generate_filename(name, "pdf")),
    )


@router.post("/text", responses={200: {"content": {"text/plain": {}}}})
def download_resume_text_endpoint(data: ResumeRenderRequest) -> Response:
    """Download the generated résumé text unmodified."""
    name, _ = split_candidate_name(data.resume_text)
    return Response(
        content=data.resume_text,
        media_type="text/plain; charset=utf-8",
        headers=_attachment(generate_filename(name, "txt")),
    )


@router.post("/tailor", response_model=ResumeTailorResponse)
def tailor_resume_endpoint(
    data: ResumeTailorRequest,
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
) -> ResumeTailorResponse:
    """Tailor a résumé to a job offer with the configured LLM."""
    try:
        job_description = data.job_description or ""
        if not job_description.strip() and data.job_offer_url is not None:
            job_description = fetch_text_from_url(str(data.job_offer_url))

        resume_text = data.resume_text or ""
        if not resume_text.strip() and data.resume_file_data_uri:
            resume_text = extract_text_from_pdf(_decode_pdf_data_uri(data.resume_file_data_uri))
            if not resume_text:
                raise ExtractionError(
                    "No text content found in the uploaded PDF. "
                    "The PDF might be image-based or empty."
                )
    except ExtractionError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from e

    try:
        result = tailor_resume(job_description, resume_text, data.language, service=llm_service)
    except LLMError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    return ResumeTailorResponse(
        tailored_resume=result.tailored_resume,
        explanation=result.explanation,
    )
