"""Shared dependencies for API routes."""

from __future__ import annotations

from fastapi import HTTPException, status

from career_craft.services.llm_providers import LLMError
from career_craft.services.llm_service import LLMService


def get_llm_service() -> LLMService:
    """Build the LLM service for a request.

    Tests replace this dependency through ``app.dependency_overrides``.

    Raises:
        HTTPException: If no provider is configured (503).
    """
    try:
        return LLMService()
    except LLMError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        ) from e
