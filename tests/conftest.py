from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from career_craft.layout.metrics import FixedWidthMeasurer

SAMPLE_RESUME = """Jane Doe
CONTACT INFORMATION
Email: jane.doe@example.com
Phone: +34 600 123 456
linkedin.com/in/janedoe
Calle Mayor 1, Madrid
PROFESSIONAL PROFILE
Backend engineer with eight years of experience building distributed systems.
WORK EXPERIENCE
Software Engineer, Acme Corp, Madrid
2020 - Present
Built distributed systems.
Backend Developer, Foo Inc, Barcelona
2017 - 2020
Maintained APIs.
EDUCATION
BSc Computer Science, Universidad Complutense, Madrid
2013 - 2017
SKILLS
Technical: Python, Go, PostgreSQL
Soft: Communication, Mentoring
LANGUAGES
Spanish - Native
English - Fluent
INTERESTS
Open source, climbing
"""


@pytest.fixture
def sample_resume() -> str:
    """A generated résumé with every section."""
    return SAMPLE_RESUME


@pytest.fixture
def measurer() -> FixedWidthMeasurer:
    """Predictable text widths (1.5 mm per character)."""
    return FixedWidthMeasurer(char_width=1.5)


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG image."""
    buffer = BytesIO()
    Image.new("RGB", (20, 20), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A small valid JPEG image."""
    buffer = BytesIO()
    Image.new("RGB", (20, 20), color=(30, 30, 200)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env or shell settings out of the tests."""
    for name in (
        "CAREER_CRAFT_LOG_LEVEL",
        "CAREER_CRAFT_DEFAULT_LANGUAGE",
        "CAREER_CRAFT_MAX_PHOTO_BYTES",
        "CAREER_CRAFT_URL_TIMEOUT",
        "CAREER_CRAFT_HOST",
        "CAREER_CRAFT_PORT",
        "LLM_PROVIDER",
        "LLM_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
