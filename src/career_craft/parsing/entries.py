"""Group experience and education lines into structured entries.

The generator is asked to write each entry as::

    Position, Company, Location
    2020 - Present
    Description of responsibilities and achievements.

Entries are recovered with a small state machine over the section's lines.
A title line opens an entry; date and description lines attach to the open
entry.  Source order is preserved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

__all__ = [
    "Entry",
    "classify_entries",
    "is_bullet_line",
    "is_date_line",
    "split_title_location",
]

_MONTHS = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?|"
    r"ene(?:ro)?|febrero|marzo|abr(?:il)?|mayo|junio|julio|ago(?:sto)?|"
    r"sept?iembre|octubre|noviembre|dic(?:iembre)?"
)
_OPEN_END = r"present|current|now|actual|actualidad|hoy|presente"
_RANGE_SEPARATOR = r"(?:-|–|—|\bto\b|\ba\b|\bhasta\b)"

_YEAR_RANGE_RE = re.compile(
    rf"\d{{4}}(?:[-/.]\d{{1,2}})?\s*{_RANGE_SEPARATOR}\s*"
    rf"(?:\d{{1,2}}[-/.])?(?:\d{{4}}(?:[-/.]\d{{1,2}})?|(?:{_OPEN_END})\b)",
    re.IGNORECASE,
)
_MONTH_YEAR = rf"(?:{_MONTHS})\.?\s+(?:de\s+)?\d{{4}}"
_MONTH_YEAR_RE = re.compile(
    rf"^\(?\s*{_MONTH_YEAR}"
    rf"(?:\s*{_RANGE_SEPARATOR}\s*(?:{_MONTH_YEAR}|{_OPEN_END}))?\s*\)?$",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^\s*[\-•*·▪◦]\s+")
_CONNECTOR_RE = re.compile(r"\s(?:at|en)\s", re.IGNORECASE)


@dataclass
class Entry:
    """One experience or education item."""

    title_part: str = ""
    location_part: str | None = None
    date_range: str | None = None
    description: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.date_range is not None or bool(self.description)


def is_date_line(line: str) -> bool:
    """Return True when *line* carries a date range or a ``Month YYYY`` date.

    Pure and stateless: classifying the same line twice gives the same result.
    """
    stripped = line.strip()
    if not stripped:
        return False
    return bool(_YEAR_RANGE_RE.search(stripped) or _MONTH_YEAR_RE.match(stripped))


def is_bullet_line(line: str) -> bool:
    return bool(_BULLET_RE.match(line))


def split_title_location(line: str) -> tuple[str, str | None]:
    """Split a title line into ``(title, location)``.

    The segment after the last comma is the location when the line has at
    least two commas, or when it has one comma and the text before it reads
    ``Position at Company`` / ``Puesto en Empresa``.
    """
    stripped = line.strip()
    commas = stripped.count(",")
    if commas == 0:
        return stripped, None

    head, _, tail = stripped.rpartition(",")
    head, tail = head.strip(), tail.strip()
    if not head or not tail:
        return stripped, None
    if commas >= 2 or _CONNECTOR_RE.search(head):
        return head, tail
    return stripped, None


def _next_content_line(lines: list[str], index: int) -> str | None:
    for candidate in lines[index + 1 :]:
        if candidate.strip():
            return candidate
    return None


def classify_entries(lines: list[str]) -> list[Entry]:
    """Group the lines of an experience or education section into entries.

    A non-blank, non-bullet line starts a new entry when it is the first
    line of the section, when it is directly followed by a date line and
    the open entry is already complete, or when it follows a blank line
    and the open entry already has description lines.  Date lines fill the
    open entry's date range; everything else is description.

    When the section opens with a date line, every date line marks the start
    of the next entry instead and the look-ahead rule is not used.

    A section without any title line yields a single entry with an empty
    title holding every line as description.
    """
    entries: list[Entry] = []
    current: Entry | None = None
    pending_date: str | None = None
    loose: list[str] = []
    is_first_line_of_entry = True
    after_blank = False
    first_line = _next_content_line(lines, -1)
    date_first = first_line is not None and is_date_line(first_line)

    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not line:
            after_blank = True
            continue

        if is_date_line(line):
            if date_first and pending_date is None:
                pending_date = line
                is_first_line_of_entry = True
            elif date_first:
                (current.description if current is not None else loose).append(line)
            elif current is None:
                if pending_date is None:
                    pending_date = line
                else:
                    loose.append(line)
            elif current.date_range is None:
                current.date_range = line
            else:
                current.description.append(line)
            after_blank = False
            continue

        starts_entry = False
        if not is_bullet_line(line):
            if is_first_line_of_entry:
                starts_entry = True
            elif current is not None:
                following = None if date_first else _next_content_line(lines, index)
                if following is not None and is_date_line(following) and current.is_complete:
                    starts_entry = True
                elif after_blank and current.description:
                    starts_entry = True

        if starts_entry:
            title, location = split_title_location(line)
            current = Entry(title_part=title, location_part=location, date_range=pending_date)
            pending_date = None
            entries.append(current)
            is_first_line_of_entry = False
        elif current is not None:
            current.description.append(line)
        else:
            loose.append(line)
        after_blank = False

    if not entries:
        description = loose
        if pending_date is not None:
            description = [pending_date, *loose]
        if not description:
            return []
        return [Entry(title_part="", description=description)]

    if date_first and pending_date is not None:
        # A trailing date with no title after it stays with the last entry.
        entries[-1].description.append(pending_date)
        pending_date = None

    if pending_date is not None or loose:
        # Lines before the first title have no entry of their own.
        entries[0].description[:0] = [line for line in (pending_date, *loose) if line]
    return entries
