"""Text measurement and word wrapping.

The layout engine only needs string widths.  They come from a
:class:`TextMeasurer`; the default one asks fpdf2 for the metrics of its
built-in Helvetica so the layout matches what :func:`render_pdf` draws.
"""

from __future__ import annotations

from typing import Protocol

from fpdf import FPDF

from career_craft.layout.models import FontWeight, TextStyle

__all__ = [
    "FixedWidthMeasurer",
    "FpdfTextMeasurer",
    "TextMeasurer",
    "sanitize_text",
    "wrap_text",
]

FONT_FAMILY = "Helvetica"

_FONT_STYLES = {
    FontWeight.NORMAL: "",
    FontWeight.BOLD: "B",
    FontWeight.ITALIC: "I",
}

# Characters the generator likes that the core PDF fonts cannot encode.
_REPLACEMENTS = {
    "–": "-",  # en dash
    "—": "-",  # em dash
    "−": "-",  # minus sign
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "•": "-",  # bullet
    "▪": "-",
    "◦": "-",
    "…": "...",
    "\u00a0": " ",  # no-break space
}


def sanitize_text(text: str) -> str:
    """Map typographic characters to ASCII and encode the rest as Latin-1."""
    for char, replacement in _REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def font_style(weight: FontWeight) -> str:
    """fpdf2 style string for *weight*."""
    return _FONT_STYLES[weight]


class TextMeasurer(Protocol):
    def width(self, text: str, style: TextStyle) -> float:
        """Rendered width of *text* in millimetres."""
        ...


class FpdfTextMeasurer:
    """Measure strings with fpdf2's core-font metrics."""

    def __init__(self) -> None:
        self._pdf = FPDF(unit="mm", format="A4")

    def width(self, text: str, style: TextStyle) -> float:
        self._pdf.set_font(FONT_FAMILY, font_style(style.font_weight), style.font_size)
        return self._pdf.get_string_width(sanitize_text(text))


class FixedWidthMeasurer:
    """Every character is *char_width* millimetres wide.

    Handy for predictable layouts in tests and previews.
    """

    def __init__(self, char_width: float = 2.0) -> None:
        self.char_width = char_width

    def width(self, text: str, style: TextStyle) -> float:
        return len(text) * self.char_width


def _split_word(word: str, max_width: float, style: TextStyle, measurer: TextMeasurer) -> list[str]:
    pieces: list[str] = []
    current = ""
    for char in word:
        candidate = current + char
        if current and measurer.width(candidate, style) > max_width:
            pieces.append(current)
            current = char
        else:
            current = candidate
    if current:
        pieces.append(current)
    return pieces


def wrap_text(text: str, max_width: float, style: TextStyle, measurer: TextMeasurer) -> list[str]:
    """Greedy word wrap of *text* to *max_width*.

    Args:
        text: A single logical line.  Runs of whitespace collapse to one space.
        max_width: Available width in millimetres.
        style: Style the text will be drawn in.
        measurer: Source of string widths.

    Returns:
        The visual lines, never wider than *max_width* unless a single
        character is.  Words wider than the column are split by characters.
        Blank input gives an empty list.
    """
    words = text.split()
    lines: list[str] = []
    current = ""

    for word in words:
        candidate = f"{current} {word}" if current else word
        if measurer.width(candidate, style) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        if measurer.width(word, style) <= max_width:
            current = word
        else:
            *full, current = _split_word(word, max_width, style, measurer)
            lines.extend(full)

    if current:
        lines.append(current)
    return lines
