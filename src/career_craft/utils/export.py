"""Export utilities for turning résumé layouts into PDF and TXT files."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from io import BytesIO
from pathlib import Path

from fpdf import FPDF

from career_craft.layout.metrics import FONT_FAMILY, font_style, sanitize_text
from career_craft.layout.models import (
    DocumentLayout,
    DrawCommand,
    ImageCommand,
    LineCommand,
    RectCommand,
    TextCommand,
)

logger = logging.getLogger(__name__)

RULE_WIDTH = 0.4


def _sanitize_filename(name: str) -> str:
    """Remove or replace characters that are invalid in filenames."""
    # Replace invalid characters and whitespace with underscores
    sanitized = re.sub(r'[<>:"/\\|?*\s]+', "_", name.strip())
    # Remove leading/trailing underscores and dots
    sanitized = sanitized.strip("._")
    return sanitized or "resume"


def generate_filename(candidate_name: str | None, extension: str) -> str:
    """Generate a résumé filename with timestamp.

    Args:
        candidate_name: Name of the candidate (optional)
        extension: File extension (pdf or txt)

    Returns:
        Filename string such as ``Jane_Doe_resume_2025-01-01_120000.pdf``
    """
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    base_name = _sanitize_filename(candidate_name or "")
    stem = base_name if base_name == "resume" else f"{base_name}_resume"
    return f"{stem}_{timestamp}.{extension.lstrip('.')}"


def _draw(pdf: FPDF, command: DrawCommand) -> None:
    if isinstance(command, RectCommand):
        pdf.set_fill_color(*command.color)
        pdf.rect(command.x, command.y, command.width, command.height, style="F")
    elif isinstance(command, LineCommand):
        pdf.set_draw_color(*command.color)
        pdf.set_line_width(RULE_WIDTH)
        pdf.line(command.x1, command.y1, command.x2, command.y2)
    elif isinstance(command, TextCommand):
        pdf.set_font(FONT_FAMILY, font_style(command.font_weight), command.font_size)
        pdf.set_text_color(*command.color)
        pdf.text(command.x, command.y, sanitize_text(command.text))
    elif isinstance(command, ImageCommand):
        pdf.image(BytesIO(command.data), x=command.x, y=command.y, w=command.width, h=command.height)


def render_pdf(layout: DocumentLayout) -> bytes:
    """Render a page layout to PDF bytes.

    Args:
        layout: Pages of draw commands from the layout engine

    Returns:
        The PDF document
    """
    pdf = FPDF(unit="mm", format=(layout.page_width, layout.page_height))
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(layout.margin, layout.margin, layout.margin)

    for page in layout.pages:
        pdf.add_page()
        for command in page.commands:
            _draw(pdf, command)

    logger.debug("Rendered %d page(s) to PDF", len(layout.pages))
    return bytes(pdf.output())


def export_to_pdf(layout: DocumentLayout, output_path: Path) -> Path:
    """Export a résumé layout to a PDF file.

    Args:
        layout: The layout to render
        output_path: Full path for the output file

    Returns:
        Path to the created file
    """
    output_path.write_bytes(render_pdf(layout))
    return output_path


def export_to_txt(resume_text: str, output_path: Path) -> Path:
    """Export the generated résumé text to a plain text file.

    The text is written unmodified.

    Args:
        resume_text: The generated résumé
        output_path: Full path for the output file

    Returns:
        Path to the created file
    """
    output_path.write_text(resume_text, encoding="utf-8")
    return output_path
