"""Turn generated résumé text into a paginated layout or a PDF."""

from __future__ import annotations

from career_craft.constants.sections import Language, get_title_dictionary
from career_craft.layout.engine import layout_resume
from career_craft.layout.metrics import TextMeasurer
from career_craft.layout.models import DEFAULT_GEOMETRY, DocumentLayout, PageGeometry
from career_craft.layout.photo import DecodedPhoto, Photo
from career_craft.parsing.segmenter import segment_resume
from career_craft.utils.export import render_pdf


def compose_resume_layout(
    raw_text: str,
    language: str | Language | None = None,
    photo: Photo | DecodedPhoto | None = None,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
    measurer: TextMeasurer | None = None,
) -> DocumentLayout:
    """Segment, classify and lay out a generated résumé in one call."""
    dictionary = get_title_dictionary(language)
    document = segment_resume(raw_text, dictionary.language)
    return layout_resume(document, dictionary, photo=photo, geometry=geometry, measurer=measurer)


def compose_resume_pdf(
    raw_text: str,
    language: str | Language | None = None,
    photo: Photo | DecodedPhoto | None = None,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
) -> bytes:
    """Like :func:`compose_resume_layout`, rendered to PDF bytes."""
    return render_pdf(compose_resume_layout(raw_text, language, photo=photo, geometry=geometry))
