from __future__ import annotations

from career_craft.layout.engine import FlowItem, flow_columns, layout_resume
from career_craft.layout.metrics import (
    FixedWidthMeasurer,
    FpdfTextMeasurer,
    TextMeasurer,
    sanitize_text,
    wrap_text,
)
from career_craft.layout.models import (
    DEFAULT_GEOMETRY,
    DocumentLayout,
    DrawCommand,
    FontWeight,
    ImageCommand,
    LayoutState,
    LineCommand,
    PageDescription,
    PageGeometry,
    RectCommand,
    StyleName,
    TextCommand,
    TextStyle,
)
from career_craft.layout.photo import DecodedPhoto, Photo, decode_photo, validate_photo

__all__ = [
    "DEFAULT_GEOMETRY",
    "DecodedPhoto",
    "DocumentLayout",
    "DrawCommand",
    "FixedWidthMeasurer",
    "FlowItem",
    "FontWeight",
    "FpdfTextMeasurer",
    "ImageCommand",
    "LayoutState",
    "LineCommand",
    "PageDescription",
    "PageGeometry",
    "Photo",
    "RectCommand",
    "StyleName",
    "TextCommand",
    "TextMeasurer",
    "TextStyle",
    "decode_photo",
    "flow_columns",
    "layout_resume",
    "sanitize_text",
    "validate_photo",
    "wrap_text",
]
