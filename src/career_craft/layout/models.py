"""Data contracts of the layout engine.

The engine never talks to a rendering library.  It emits an abstract,
ordered list of draw commands per page; a rendering collaborator (see
:mod:`career_craft.utils.export`) turns those into document bytes.

All lengths are millimetres, origin top-left.  Colours are RGB tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

__all__ = [
    "DEFAULT_GEOMETRY",
    "Color",
    "DocumentLayout",
    "DrawCommand",
    "FontWeight",
    "ImageCommand",
    "LayoutState",
    "LineCommand",
    "PageDescription",
    "PageGeometry",
    "RectCommand",
    "StyleName",
    "TextCommand",
    "TextStyle",
]

Color = tuple[int, int, int]

# Points to millimetres.
PT_TO_MM = 25.4 / 72


class FontWeight(StrEnum):
    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"


class StyleName(StrEnum):
    """Content types the engine styles differently."""

    NAME = "name"
    SECTION_HEADER = "section_header"
    ENTRY_TITLE = "entry_title"
    DATE = "date"
    BODY = "body"
    CONTACT = "contact"


@dataclass(frozen=True)
class TextStyle:
    """Font settings and vertical advance of one content type."""

    font_weight: FontWeight
    font_size: float  # points
    color: Color
    line_height: float  # mm advanced per rendered line

    @property
    def ascent(self) -> float:
        """Distance from the top of a line to its baseline, in mm."""
        return self.font_size * PT_TO_MM * 0.8 + (self.line_height - self.font_size * PT_TO_MM) / 2


# ---------------------------------------------------------------------------
# Draw commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextCommand:
    """Place a single line of text; ``y`` is the baseline."""

    x: float
    y: float
    page: int
    text: str
    font_weight: FontWeight
    font_size: float
    color: Color
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class ImageCommand:
    x: float
    y: float
    page: int
    width: float
    height: float
    data: bytes
    image_format: str  # "PNG" or "JPEG"
    kind: Literal["image"] = "image"


@dataclass(frozen=True)
class RectCommand:
    """Filled rectangle."""

    x: float
    y: float
    page: int
    width: float
    height: float
    color: Color
    kind: Literal["rect"] = "rect"


@dataclass(frozen=True)
class LineCommand:
    x1: float
    y1: float
    x2: float
    y2: float
    page: int
    color: Color
    kind: Literal["line"] = "line"


DrawCommand = TextCommand | ImageCommand | RectCommand | LineCommand


@dataclass
class PageDescription:
    page_index: int
    commands: list[DrawCommand] = field(default_factory=list)


@dataclass
class DocumentLayout:
    """Pages produced for one résumé plus the fixed page metadata."""

    pages: list[PageDescription]
    page_width: float
    page_height: float
    margin: float
    left_column_width: float

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def commands(self) -> list[DrawCommand]:
        """All commands of all pages, in drawing order."""
        return [command for page in self.pages for command in page.commands]


# ---------------------------------------------------------------------------
# Geometry and cursor state
# ---------------------------------------------------------------------------


def _default_styles() -> dict[StyleName, TextStyle]:
    dark = (33, 37, 41)
    return {
        StyleName.NAME: TextStyle(FontWeight.BOLD, 18, (20, 50, 90), 8.0),
        StyleName.SECTION_HEADER: TextStyle(FontWeight.BOLD, 11, (20, 50, 90), 7.0),
        StyleName.ENTRY_TITLE: TextStyle(FontWeight.BOLD, 10.5, dark, 5.5),
        StyleName.DATE: TextStyle(FontWeight.ITALIC, 8.5, (108, 117, 125), 4.5),
        StyleName.BODY: TextStyle(FontWeight.NORMAL, 9.5, dark, 4.8),
        StyleName.CONTACT: TextStyle(FontWeight.NORMAL, 8.5, dark, 4.5),
    }


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page model: A4 portrait, narrow left column, wide right column."""

    page_width: float = 210.0
    page_height: float = 297.0
    margin: float = 12.0
    left_column_width: float = 58.0
    column_gap: float = 8.0
    photo_size: float = 35.0
    section_spacing: float = 5.0
    entry_spacing: float = 2.5
    blank_line_spacing: float = 2.0
    left_background: Color = (234, 239, 245)
    header_bar: Color = (206, 218, 232)
    rule_color: Color = (20, 50, 90)
    styles: dict[StyleName, TextStyle] = field(default_factory=_default_styles)

    @property
    def top(self) -> float:
        return self.margin

    @property
    def bottom(self) -> float:
        """Lowest y a line may reach."""
        return self.page_height - self.margin

    @property
    def usable_height(self) -> float:
        return self.bottom - self.top

    @property
    def left_x(self) -> float:
        return self.margin

    @property
    def right_x(self) -> float:
        return self.margin + self.left_column_width + self.column_gap

    @property
    def right_column_width(self) -> float:
        return self.page_width - self.right_x - self.margin

    @property
    def left_background_width(self) -> float:
        """The background panel runs from the page edge to mid-gutter."""
        return self.margin + self.left_column_width + self.column_gap / 2

    def style(self, name: StyleName) -> TextStyle:
        return self.styles[name]


DEFAULT_GEOMETRY = PageGeometry()


@dataclass(frozen=True)
class LayoutState:
    """Cursor position of both columns on the current page."""

    left_y: float
    right_y: float
    page_index: int = 0

    @classmethod
    def start(cls, geometry: PageGeometry) -> LayoutState:
        return cls(left_y=geometry.top, right_y=geometry.top, page_index=0)
