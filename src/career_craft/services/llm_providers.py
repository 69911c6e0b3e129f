"""LLM providers used to tailor résumés.

A provider turns one prompt into one text answer.  Option names differ per
vendor, so each provider declares how the shared options (temperature,
max_tokens, seed, json_output) are spelled in its own request config.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import ClassVar

from dotenv import load_dotenv

# GEMINI_API_KEY and LLM_MODEL may live in a .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class LLMError(RuntimeError):
    """Raised when no LLM can be reached or its answer is unusable."""


def _required_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise LLMError(f"Missing {name} environment variable")
    return value


class LLMProvider(ABC):
    """Base class for LLM providers.

    Subclasses rename shared options through ``option_names`` and say how a
    JSON answer is requested through ``json_options``.
    """

    option_names: ClassVar[dict[str, str]] = {}
    json_options: ClassVar[dict[str, object]] = {"json_output": True}

    def generate_llm_config(
        self,
        temperature: float | None,
        max_tokens: int | None,
        seed: int | None,
        json_output: bool = False,
    ) -> dict:
        """Build the request config for this provider.

        Args:
            temperature: Controls randomness
            max_tokens: Maximum response length
            seed: Random seed for reproducibility
            json_output: Ask the model to answer with a JSON document

        Returns:
            Only the options that were set, under the provider's own names
        """
        options = {"temperature": temperature, "max_tokens": max_tokens, "seed": seed}
        config: dict = {
            self.option_names.get(name, name): value
            for name, value in options.items()
            if value is not None
        }
        if json_output:
            config.update(self.json_options)
        return config

    @abstractmethod
    def send_prompt(self, prompt: str, config: dict) -> str:
        """Send *prompt* and return the answer text.

        Raises:
            LLMError: If the provider call fails.
        """


class GeminiProvider(LLMProvider):
    """Google Gemini through the ``google-genai`` client."""

    option_names: ClassVar[dict[str, str]] = {"max_tokens": "max_output_tokens"}
    json_options: ClassVar[dict[str, object]] = {"response_mime_type": "application/json"}

    def __init__(self) -> None:
        from google import genai

        self.api_key = _required_env("GEMINI_API_KEY")
        self.model = os.environ.get("LLM_MODEL") or DEFAULT_GEMINI_MODEL
        self.client = genai.Client(api_key=self.api_key)

    def send_prompt(self, prompt: str, config: dict) -> str:
        logger.debug("Sending %d character prompt to %s", len(prompt), self.model)
        try:
            response = self.client.models.generate_content(
                model=self.model, contents=prompt, config=config
            )
        except Exception as e:
            logger.exception("Gemini request to %s failed", self.model)
            raise LLMError(f"Gemini API call failed: {e}") from e
        return (response.text or "").strip()
