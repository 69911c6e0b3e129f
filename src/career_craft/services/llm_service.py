"""LLM service with multi-provider support."""

from __future__ import annotations

import logging

from career_craft.config import get_settings
from career_craft.services.llm_providers import (
    GeminiProvider,
    LLMError,
    LLMProvider,
)

logger = logging.getLogger(__name__)

_PROVIDERS: dict[str, type[LLMProvider]] = {
    "gemini": GeminiProvider,
}


class LLMService:
    def __init__(self, provider: LLMProvider | None = None) -> None:
        """Initialize LLM service with a specific provider.

        Args:
            provider: LLM provider instance. Defaults to the one named by
                ``LLM_PROVIDER``.
        """
        self.provider = provider or LLMService._get_default_llm_provider_from_env()

    @staticmethod
    def _get_default_llm_provider_from_env() -> LLMProvider:
        """Get the configured LLM provider.

        Raises:
            LLMError: If ``LLM_PROVIDER`` names an unknown provider.
        """
        provider_name = get_settings().llm_provider
        provider_cls = _PROVIDERS.get(provider_name)
        if provider_cls is None:
            raise LLMError(f"Unknown LLM provider: {provider_name}.")
        logger.debug("Using LLM provider %s", provider_name)
        return provider_cls()

    def build_prompt(self, system_instructions: str, user_content: str) -> str:
        """Construct a full prompt with system and user parts."""
        return f"System instruction:\n{system_instructions}\n\nUser content:\n{user_content}"

    def generate_llm_response(
        self,
        system_instructions: str,
        user_content: str,
        temperature: float | None = 0.7,
        max_tokens: int | None = None,
        seed: int | None = None,
        json_output: bool = False,
    ) -> str:
        """Build a prompt and send it to the LLM in one step.

        Args:
            system_instructions: System-level instructions.
            user_content: User content.
            temperature: Controls randomness (0.0-2.0). Lower = more deterministic.
            max_tokens: Maximum response length. None = provider default.
            seed: Random seed for reproducibility (if supported by provider).
            json_output: Ask for a JSON answer (if supported by provider).

        Returns:
            The text response from the LLM.
        """
        prompt = self.build_prompt(system_instructions, user_content)
        config = self.provider.generate_llm_config(temperature, max_tokens, seed, json_output)
        return self.provider.send_prompt(prompt, config)
