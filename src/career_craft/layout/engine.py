"""Two-column résumé layout with synchronized pagination.

The engine turns a :class:`SegmentedDocument` into pages of draw commands.
The left column holds the photo, the name and the short sections; the right
column holds experience, education and skills.  Both columns are flowed as
lists of :class:`FlowItem` and interleaved: whichever column has the
smaller cursor places its next item, the left column winning ties.

When an item does not fit, both columns move to a new page together and the
left background panel is drawn first on that page.  All cursor movement goes
through immutable :class:`LayoutState` values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Literal

from career_craft.constants.sections import (
    CONTACT_LABELS,
    ENTRY_SECTIONS,
    LEFT_COLUMN_SECTIONS,
    RIGHT_COLUMN_SECTIONS,
    ContactKind,
    SectionKey,
    TitleDictionary,
)
from career_craft.layout.metrics import FpdfTextMeasurer, TextMeasurer, wrap_text
from career_craft.layout.models import (
    DEFAULT_GEOMETRY,
    DocumentLayout,
    DrawCommand,
    ImageCommand,
    LayoutState,
    LineCommand,
    PageDescription,
    PageGeometry,
    RectCommand,
    StyleName,
    TextCommand,
)
from career_craft.layout.photo import DecodedPhoto, Photo, decode_photo
from career_craft.parsing.contact import classify_contact_lines
from career_craft.parsing.entries import Entry, classify_entries, is_bullet_line
from career_craft.parsing.segmenter import SegmentedDocument

__all__ = [
    "FlowItem",
    "flow_columns",
    "layout_resume",
]

logger = logging.getLogger(__name__)

Column = Literal["left", "right"]
Decoration = Literal["bar", "rule"]

HEADER_PADDING = 2.0
BULLET_INDENT = 3.0


@dataclass(frozen=True)
class FlowItem:
    """One indivisible vertical slice of a column.

    ``kind`` is ``"text"`` for a single wrapped line, ``"image"`` for the
    photo and ``"gap"`` for vertical whitespace.  A gap at the top of a page
    is dropped, and ``space_before`` is ignored there as well.
    """

    kind: Literal["text", "image", "gap"]
    text: str = ""
    style: StyleName = StyleName.BODY
    indent: float = 0.0
    space_before: float = 0.0
    keep_with_next: bool = False
    decoration: Decoration | None = None
    image: DecodedPhoto | None = None
    height: float = 0.0

    @classmethod
    def line(
        cls,
        text: str,
        style: StyleName,
        *,
        indent: float = 0.0,
        space_before: float = 0.0,
        keep_with_next: bool = False,
        decoration: Decoration | None = None,
    ) -> FlowItem:
        return cls(
            kind="text",
            text=text,
            style=style,
            indent=indent,
            space_before=space_before,
            keep_with_next=keep_with_next,
            decoration=decoration,
        )

    @classmethod
    def gap(cls, height: float) -> FlowItem:
        return cls(kind="gap", height=height)

    def extent(self, geometry: PageGeometry) -> float:
        """Vertical space the item occupies, without ``space_before``."""
        if self.kind == "text":
            return geometry.style(self.style).line_height
        return self.height


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def _column_box(column: Column, geometry: PageGeometry) -> tuple[float, float]:
    if column == "left":
        return geometry.left_x, geometry.left_column_width
    return geometry.right_x, geometry.right_column_width


def _new_page(page_index: int, geometry: PageGeometry) -> PageDescription:
    background = RectCommand(
        x=0.0,
        y=0.0,
        page=page_index,
        width=geometry.left_background_width,
        height=geometry.page_height,
        color=geometry.left_background,
    )
    return PageDescription(page_index=page_index, commands=[background])


def _cursor(state: LayoutState, column: Column) -> float:
    return state.left_y if column == "left" else state.right_y


def _advance(state: LayoutState, column: Column, y: float) -> LayoutState:
    if column == "left":
        return replace(state, left_y=y)
    return replace(state, right_y=y)


def _break_page(state: LayoutState, geometry: PageGeometry) -> LayoutState:
    return LayoutState(left_y=geometry.top, right_y=geometry.top, page_index=state.page_index + 1)


def _required_height(items: list[FlowItem], index: int, geometry: PageGeometry, at_top: bool) -> float:
    """Height needed to place ``items[index]`` plus everything it keeps with."""
    item = items[index]
    needed = (0.0 if at_top else item.space_before) + item.extent(geometry)
    while item.keep_with_next and index + 1 < len(items):
        index += 1
        item = items[index]
        needed += item.space_before + item.extent(geometry)
    return needed


def _render_item(
    item: FlowItem, column: Column, top: float, page: int, geometry: PageGeometry
) -> list[DrawCommand]:
    x, width = _column_box(column, geometry)

    if item.kind == "image" and item.image is not None:
        size = geometry.photo_size
        return [
            ImageCommand(
                x=x + (width - size) / 2,
                y=top,
                page=page,
                width=size,
                height=size,
                data=item.image.data,
                image_format=item.image.image_format,
            )
        ]
    if item.kind != "text":
        return []

    style = geometry.style(item.style)
    commands: list[DrawCommand] = []
    text_x = x + item.indent
    if item.decoration == "bar":
        commands.append(
            RectCommand(
                x=x, y=top, page=page, width=width, height=style.line_height, color=geometry.header_bar
            )
        )
        text_x += HEADER_PADDING
    commands.append(
        TextCommand(
            x=text_x,
            y=top + style.ascent,
            page=page,
            text=item.text,
            font_weight=style.font_weight,
            font_size=style.font_size,
            color=style.color,
        )
    )
    if item.decoration == "rule":
        rule_y = top + style.line_height - 0.5
        commands.append(
            LineCommand(
                x1=x, y1=rule_y, x2=x + width, y2=rule_y, page=page, color=geometry.rule_color
            )
        )
    return commands


def flow_columns(
    left_items: list[FlowItem],
    right_items: list[FlowItem],
    geometry: PageGeometry = DEFAULT_GEOMETRY,
    state: LayoutState | None = None,
) -> list[PageDescription]:
    """Place both columns onto pages.

    Args:
        left_items: Items of the narrow left column, top to bottom.
        right_items: Items of the wide right column, top to bottom.
        geometry: Page model.
        state: Starting cursors.  Defaults to both columns at the top
            margin of the first page.

    Returns:
        At least one page.  Every page starts with the left background
        rectangle.  A line never crosses ``page_height - margin`` unless it is
        taller than a whole page.
    """
    state = state or LayoutState.start(geometry)
    pages = [_new_page(page_index, geometry) for page_index in range(state.page_index + 1)]
    queues: dict[Column, list[FlowItem]] = {"left": left_items, "right": right_items}
    positions: dict[Column, int] = {"left": 0, "right": 0}

    while positions["left"] < len(left_items) or positions["right"] < len(right_items):
        left_pending = positions["left"] < len(left_items)
        right_pending = positions["right"] < len(right_items)
        if left_pending and (not right_pending or state.left_y <= state.right_y):
            column: Column = "left"
        else:
            column = "right"

        items = queues[column]
        index = positions[column]
        item = items[index]
        positions[column] = index + 1

        cursor = _cursor(state, column)
        at_top = cursor <= geometry.top
        if item.kind == "gap" and at_top:
            continue

        if cursor + _required_height(items, index, geometry, at_top) > geometry.bottom and not at_top:
            state = _break_page(state, geometry)
            pages.append(_new_page(state.page_index, geometry))
            logger.debug("Page break before %s item %d -> page %d", column, index, state.page_index)
            if item.kind == "gap":
                continue
            cursor = _cursor(state, column)
            at_top = True

        top = cursor + (0.0 if at_top else item.space_before)
        pages[state.page_index].commands.extend(
            _render_item(item, column, top, state.page_index, geometry)
        )
        state = _advance(state, column, top + item.extent(geometry))

    return pages


# ---------------------------------------------------------------------------
# Building flow items
# ---------------------------------------------------------------------------


class _ItemBuilder:
    """Wraps text for one column and collects its flow items."""

    def __init__(self, column: Column, geometry: PageGeometry, measurer: TextMeasurer) -> None:
        self.geometry = geometry
        self.measurer = measurer
        self.width = _column_box(column, geometry)[1]
        self.decoration: Decoration = "bar" if column == "left" else "rule"
        self.items: list[FlowItem] = []

    def text(
        self,
        text: str,
        style: StyleName,
        *,
        space_before: float = 0.0,
        keep_with_next: bool = False,
        hanging_indent: float = 0.0,
    ) -> None:
        text_style = self.geometry.style(style)
        lines = wrap_text(text, self.width, text_style, self.measurer)
        if hanging_indent and len(lines) > 1:
            head = lines[0]
            rest = " ".join(lines[1:])
            lines = [head, *wrap_text(rest, self.width - hanging_indent, text_style, self.measurer)]

        for position, line in enumerate(lines):
            self.items.append(
                FlowItem.line(
                    line,
                    style,
                    indent=hanging_indent if position else 0.0,
                    space_before=space_before if position == 0 else 0.0,
                    keep_with_next=keep_with_next,
                )
            )

    def header(self, title: str) -> None:
        style = self.geometry.style(StyleName.SECTION_HEADER)
        available = self.width - (HEADER_PADDING if self.decoration == "bar" else 0.0)
        lines = wrap_text(title, available, style, self.measurer) or [title]
        for position, line in enumerate(lines):
            self.items.append(
                FlowItem.line(
                    line,
                    StyleName.SECTION_HEADER,
                    space_before=self.geometry.section_spacing if position == 0 else 0.0,
                    keep_with_next=True,
                    decoration=self.decoration,
                )
            )

    def gap(self) -> None:
        # Collapse runs of blank lines and never start a section with one.
        if self.items and self.items[-1].kind == "text" and not self.items[-1].keep_with_next:
            self.items.append(FlowItem.gap(self.geometry.blank_line_spacing))

    def body(self, lines: list[str]) -> None:
        for line in lines:
            if not line.strip():
                self.gap()
                continue
            indent = BULLET_INDENT if is_bullet_line(line) else 0.0
            self.text(line, StyleName.BODY, hanging_indent=indent)
        self.trim_trailing_gap()

    def trim_trailing_gap(self) -> None:
        while self.items and self.items[-1].kind == "gap":
            self.items.pop()


def _contact_text(kind: ContactKind, value: str, labels: dict[ContactKind, str]) -> str:
    label = labels.get(kind)
    return f"{label}: {value}" if label else value


def _add_contact(builder: _ItemBuilder, lines: list[str], labels: dict[ContactKind, str]) -> None:
    for contact in classify_contact_lines(lines):
        if not contact.value:
            continue
        builder.text(_contact_text(contact.kind, contact.value, labels), StyleName.CONTACT)


def _date_text(entry: Entry) -> str:
    return " | ".join(part for part in (entry.date_range, entry.location_part) if part)


def _add_entries(builder: _ItemBuilder, entries: list[Entry]) -> None:
    for position, entry in enumerate(entries):
        spacing = builder.geometry.entry_spacing if position else 0.0
        date_text = _date_text(entry)
        if entry.title_part:
            builder.text(
                entry.title_part,
                StyleName.ENTRY_TITLE,
                space_before=spacing,
                keep_with_next=True,
            )
            spacing = 0.0
        if date_text:
            builder.text(
                date_text,
                StyleName.DATE,
                space_before=spacing,
                keep_with_next=bool(entry.description),
            )
            spacing = 0.0
        if entry.description and spacing:
            builder.items.append(FlowItem.gap(spacing))
        builder.body(entry.description)


def _build_left(
    document: SegmentedDocument,
    dictionary: TitleDictionary,
    photo: DecodedPhoto | None,
    geometry: PageGeometry,
    measurer: TextMeasurer,
) -> list[FlowItem]:
    builder = _ItemBuilder("left", geometry, measurer)
    if photo is not None:
        builder.items.append(
            FlowItem(kind="image", image=photo, height=geometry.photo_size + geometry.entry_spacing)
        )
    if document.candidate_name:
        builder.text(document.candidate_name, StyleName.NAME)

    labels = CONTACT_LABELS.get(dictionary.language, {})
    for key in LEFT_COLUMN_SECTIONS:
        if not document.has_content(key):
            continue
        builder.header(dictionary.title_for(key))
        if key == SectionKey.CONTACT:
            _add_contact(builder, document.lines(key), labels)
        else:
            builder.body(document.lines(key))
    return builder.items


def _build_right(
    document: SegmentedDocument,
    dictionary: TitleDictionary,
    geometry: PageGeometry,
    measurer: TextMeasurer,
) -> list[FlowItem]:
    builder = _ItemBuilder("right", geometry, measurer)
    for key in RIGHT_COLUMN_SECTIONS:
        if not document.has_content(key):
            continue
        builder.header(dictionary.title_for(key))
        if key in ENTRY_SECTIONS:
            _add_entries(builder, classify_entries(document.lines(key)))
        else:
            builder.body(document.lines(key))
    return builder.items


def layout_resume(
    document: SegmentedDocument,
    dictionary: TitleDictionary,
    photo: Photo | DecodedPhoto | None = None,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
    measurer: TextMeasurer | None = None,
) -> DocumentLayout:
    """Lay out a segmented résumé on two-column pages.

    Args:
        document: Name and sections from :func:`segment_resume`.
        dictionary: Titles used for the section headers.  Its language also
            selects the contact labels.
        photo: Optional candidate photo.  An unusable photo is logged and
            left out.
        geometry: Page model.
        measurer: Source of string widths.  Defaults to fpdf2's Helvetica
            metrics.

    Returns:
        The pages with their draw commands and the page metadata.
    """
    measurer = measurer or FpdfTextMeasurer()
    decoded = photo if isinstance(photo, DecodedPhoto) else decode_photo(photo)

    left_items = _build_left(document, dictionary, decoded, geometry, measurer)
    right_items = _build_right(document, dictionary, geometry, measurer)
    pages = flow_columns(left_items, right_items, geometry)
    logger.info(
        "Laid out resume for %r on %d page(s)", document.candidate_name or "<unnamed>", len(pages)
    )

    return DocumentLayout(
        pages=pages,
        page_width=geometry.page_width,
        page_height=geometry.page_height,
        margin=geometry.margin,
        left_column_width=geometry.left_column_width,
    )
