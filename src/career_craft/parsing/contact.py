"""Classify the lines of the contact section.

Each line is labelled with a :class:`ContactKind` by an ordered rule table.
The first matching rule wins.  Any label the generator already wrote
("Email: …") is removed from the value so the layout can add its own
localized label without duplicating it.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from career_craft.constants.sections import ContactKind

__all__ = [
    "ContactField",
    "classify_contact_line",
    "classify_contact_lines",
    "strip_contact_label",
]

_EMAIL_RE = re.compile(r"@|\be-?mail\b", re.IGNORECASE)
_PHONE_RE = re.compile(r"\d{3,4}[\s.\-/]?\d{3,4}[\s.\-/]?\d{3,4}")
_PHONE_KEYWORD_RE = re.compile(
    r"\b(?:tel|tel[eé]fono|phone|m[oó]vil|mobile|cell)\b", re.IGNORECASE
)
_WEB_RE = re.compile(r"linkedin\.com/|github\.com/|https?://", re.IGNORECASE)
_URL_TOKEN_RE = re.compile(r"\S*(?:linkedin\.com|github\.com|https?://|www\.)\S*", re.IGNORECASE)
_DATE_RE = re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b")
_BIRTH_KEYWORD_RE = re.compile(r"\b(?:birth|nacimiento)", re.IGNORECASE)
_ADDRESS_KEYWORD_RE = re.compile(
    r"\b(?:street|address|direcci[oó]n|city|ciudad|calle|pa[ií]s|country)\b",
    re.IGNORECASE,
)

# Longest labels first so "date of birth" wins over "birth".
_LABELS = (
    "fecha de nacimiento",
    "date of birth",
    "birth date",
    "birthdate",
    "nacimiento",
    "birth",
    "e-mail",
    "email",
    "correo electrónico",
    "correo",
    "mail",
    "teléfono",
    "telefono",
    "phone",
    "mobile",
    "móvil",
    "movil",
    "tel",
    "website",
    "linkedin",
    "github",
    "web",
    "dirección",
    "direccion",
    "address",
    "location",
    "ubicación",
)
_LABEL_RE = re.compile(
    r"^(?:" + "|".join(re.escape(label) for label in _LABELS) + r")\.?\s*:\s*",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^[\-•*·▪]\s*")


def _is_email(line: str) -> bool:
    return bool(_EMAIL_RE.search(line))


def _is_phone(line: str) -> bool:
    # Profile URLs often end in long digit runs that are not phone numbers.
    without_urls = _URL_TOKEN_RE.sub(" ", line)
    return bool(_PHONE_RE.search(without_urls) or _PHONE_KEYWORD_RE.search(without_urls))


def _is_web(line: str) -> bool:
    return bool(_WEB_RE.search(line))


def _is_birthdate(line: str) -> bool:
    return bool(_DATE_RE.search(line) or _BIRTH_KEYWORD_RE.search(line))


def _is_address(line: str) -> bool:
    return bool(_ADDRESS_KEYWORD_RE.search(line))


_RULES: tuple[tuple[ContactKind, Callable[[str], bool]], ...] = (
    (ContactKind.EMAIL, _is_email),
    (ContactKind.PHONE, _is_phone),
    (ContactKind.WEB, _is_web),
    (ContactKind.BIRTHDATE, _is_birthdate),
    (ContactKind.ADDRESS, _is_address),
)


@dataclass(frozen=True)
class ContactField:
    """A classified contact line."""

    kind: ContactKind
    raw_line: str
    value: str


def strip_contact_label(line: str) -> str:
    """Remove a leading bullet and a known ``label:`` prefix from *line*."""
    value = _BULLET_RE.sub("", line.strip())
    return _LABEL_RE.sub("", value).strip()


def classify_contact_line(line: str) -> ContactField:
    """Label a single contact line."""
    kind = ContactKind.OTHER
    for candidate, predicate in _RULES:
        if predicate(line):
            kind = candidate
            break
    return ContactField(kind=kind, raw_line=line, value=strip_contact_label(line))


def classify_contact_lines(lines: list[str]) -> list[ContactField]:
    """Label every non-blank contact line, preserving order."""
    return [classify_contact_line(line) for line in lines if line.strip()]
