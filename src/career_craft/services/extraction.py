"""Text extraction from uploaded résumé PDFs and job offer pages."""

from __future__ import annotations

import logging
import re
from io import BytesIO

import httpx
from bs4 import BeautifulSoup, Comment
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from career_craft.config import get_settings

__all__ = [
    "ExtractionError",
    "extract_text_from_pdf",
    "fetch_text_from_url",
    "html_to_text",
]

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_HIDDEN_TAGS = ["script", "style", "noscript", "template"]

USER_AGENT = "career-craft/0.1"


class ExtractionError(RuntimeError):
    """Raised when text cannot be extracted from a document or URL."""


def extract_text_from_pdf(data: bytes) -> str:
    """Extract the text of every page of a PDF.

    Args:
        data: Raw PDF bytes.

    Returns:
        Page texts joined by newlines, stripped.  An image-only PDF gives
        an empty string.

    Raises:
        ExtractionError: If the bytes are not a readable PDF.
    """
    if not data:
        raise ExtractionError("PDF file is empty.")
    try:
        reader = PdfReader(BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError, OSError) as e:
        logger.exception("Failed to read PDF (%d bytes)", len(data))
        raise ExtractionError(f"Error extracting text: {e}") from e
    return "\n".join(pages).strip()


def html_to_text(html: str) -> str:
    """Return the visible text of *html* as a single line.

    Script and style elements are dropped along with comments.  Entities are
    decoded and whitespace runs, no-break spaces included, become one space.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_HIDDEN_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    text = soup.get_text(" ", strip=True)
    return _WHITESPACE_RE.sub(" ", text).strip()


def fetch_text_from_url(url: str, client: httpx.Client | None = None) -> str:
    """Download a job offer page and return its visible text.

    Args:
        url: Public http(s) URL.
        client: HTTP client to use. A short-lived one is created when omitted.

    Raises:
        ExtractionError: If the request fails, the server answers with an
            error status or the page has no text.
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(
            timeout=get_settings().url_timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ExtractionError(
            f"Failed to fetch URL: {e.response.status_code} {e.response.reason_phrase}"
        ) from e
    except httpx.HTTPError as e:
        logger.exception("Request to %s failed", url)
        raise ExtractionError(f"Failed to fetch URL: {e}") from e
    finally:
        if owns_client:
            client.close()

    text = html_to_text(response.text)
    if not text:
        raise ExtractionError("Could not extract text from job offer URL.")
    logger.debug("Fetched %d characters from %s", len(text), url)
    return text
