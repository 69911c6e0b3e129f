"""Split generated résumé text into canonical sections.

The text produced by the tailoring step is one name line followed by
section headers taken from a :class:`TitleDictionary` and free-form content.
Segmentation is a single top-to-bottom pass with no back-tracking.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from career_craft.constants.sections import (
    Language,
    SectionKey,
    TitleDictionary,
    get_title_dictionary,
)

__all__ = [
    "SegmentedDocument",
    "segment_resume",
    "segment_sections",
    "split_candidate_name",
]

# Markdown the generator sometimes wraps headers in ("## SKILLS", "**SKILLS:**").
_HEADER_PREFIX = "#*_ \t"
_HEADER_SUFFIX = "*_ \t"


@dataclass
class SegmentedDocument:
    """Candidate name plus the lines of every section found in the text."""

    candidate_name: str
    sections: dict[SectionKey, list[str]] = field(default_factory=dict)

    def lines(self, key: SectionKey) -> list[str]:
        """Return the lines of *key*, or an empty list if the section is absent."""
        return self.sections.get(key, [])

    def has_content(self, key: SectionKey) -> bool:
        return any(line.strip() for line in self.lines(key))


def split_candidate_name(raw_text: str) -> tuple[str, str]:
    """Return ``(name, body)`` where *name* is the first non-empty line.

    The body is every line after the name line, unchanged.
    """
    lines = raw_text.splitlines()
    for index, line in enumerate(lines):
        if line.strip():
            return line.strip(), "\n".join(lines[index + 1 :])
    return "", ""


def _header_candidate(line: str) -> str:
    return line.strip().lstrip(_HEADER_PREFIX).rstrip(_HEADER_SUFFIX)


def segment_sections(body: str, dictionary: TitleDictionary) -> dict[SectionKey, list[str]]:
    """Group the lines of *body* under the section headers of *dictionary*.

    Args:
        body: Résumé text with the name line already removed.
        dictionary: Titles of the active language, tested in order.

    Returns:
        Mapping of section key to its trimmed lines in source order.  Lines
        that appear before any header are kept under ``PROFILE``.  Blank
        lines inside a section are kept as ``""`` because they separate
        entries; blank lines before the first section are dropped.
    """
    sections: dict[SectionKey, list[str]] = {}
    current_key: SectionKey | None = None

    for raw_line in body.splitlines():
        line = raw_line.strip()

        matched = dictionary.match(_header_candidate(line)) if line else None
        if matched is not None:
            current_key, remainder = matched
            bucket = sections.setdefault(current_key, [])
            # Inline content ("SKILLS: Python, Go") may be wrapped in emphasis too.
            remainder = remainder.strip("* \t")
            if remainder:
                bucket.append(remainder)
            continue

        if current_key is None:
            if not line:
                continue
            current_key = SectionKey.PROFILE
            sections.setdefault(current_key, [])

        sections[current_key].append(line)

    return sections


def segment_resume(raw_text: str, language: str | Language | None = None) -> SegmentedDocument:
    """Split generated résumé text into a name and canonical sections."""
    name, body = split_candidate_name(raw_text)
    dictionary = get_title_dictionary(language)
    return SegmentedDocument(candidate_name=name, sections=segment_sections(body, dictionary))
