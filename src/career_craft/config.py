"""Runtime settings read from the environment.

Values can be supplied through a ``.env`` file (loaded via ``python-dotenv``)
or the process environment.  Invalid numeric values fall back to defaults
rather than aborting start-up.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAX_PHOTO_BYTES = 2 * 1024 * 1024


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    default_language: str
    max_photo_bytes: int
    url_timeout: float
    llm_provider: str
    host: str
    port: int


def get_settings() -> Settings:
    """Build settings from the current environment.

    Read on every call so tests can change the environment with
    ``monkeypatch.setenv``.
    """
    return Settings(
        log_level=(_get_env("CAREER_CRAFT_LOG_LEVEL", "INFO") or "INFO").upper(),
        default_language=_get_env("CAREER_CRAFT_DEFAULT_LANGUAGE", "en") or "en",
        max_photo_bytes=_get_env_int("CAREER_CRAFT_MAX_PHOTO_BYTES", DEFAULT_MAX_PHOTO_BYTES),
        url_timeout=_get_env_float("CAREER_CRAFT_URL_TIMEOUT", 15.0),
        llm_provider=(_get_env("LLM_PROVIDER", "gemini") or "gemini").lower(),
        host=_get_env("CAREER_CRAFT_HOST", "127.0.0.1") or "127.0.0.1",
        port=_get_env_int("CAREER_CRAFT_PORT", 8000),
    )
