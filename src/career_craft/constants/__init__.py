from __future__ import annotations

from career_craft.constants.sections import (
    CONTACT_LABELS,
    ENTRY_SECTIONS,
    LEFT_COLUMN_SECTIONS,
    RIGHT_COLUMN_SECTIONS,
    TITLE_DICTIONARIES,
    ContactKind,
    Language,
    SectionKey,
    TitleDictionary,
    get_title_dictionary,
)

__all__ = [
    "CONTACT_LABELS",
    "ENTRY_SECTIONS",
    "LEFT_COLUMN_SECTIONS",
    "RIGHT_COLUMN_SECTIONS",
    "TITLE_DICTIONARIES",
    "ContactKind",
    "Language",
    "SectionKey",
    "TitleDictionary",
    "get_title_dictionary",
]
