from __future__ import annotations

from career_craft.parsing.contact import (
    ContactField,
    classify_contact_line,
    classify_contact_lines,
    strip_contact_label,
)
from career_craft.parsing.entries import (
    Entry,
    classify_entries,
    is_bullet_line,
    is_date_line,
    split_title_location,
)
from career_craft.parsing.segmenter import (
    SegmentedDocument,
    segment_resume,
    segment_sections,
    split_candidate_name,
)

__all__ = [
    "ContactField",
    "Entry",
    "SegmentedDocument",
    "classify_contact_line",
    "classify_contact_lines",
    "classify_entries",
    "is_bullet_line",
    "is_date_line",
    "segment_resume",
    "segment_sections",
    "split_candidate_name",
    "split_title_location",
]
