"""Canonical résumé section titles per language.

The tailoring prompt instructs the language model to emit exactly these
headers, and the segmenter looks for exactly these headers.  Keeping both
sides on one table is what lets the layout engine recover the structure of
free-form generated text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Language(StrEnum):
    """Languages the résumé can be generated in."""

    ENGLISH = "en"
    SPANISH = "es"

    @classmethod
    def parse(cls, value: str | Language | None) -> Language:
        """Resolve an ISO code or a display name (``"Spanish"``) to a language.

        Unknown or empty values resolve to English.
        """
        if isinstance(value, Language):
            return value
        normalized = (value or "").strip().lower()
        return _LANGUAGE_ALIASES.get(normalized, cls.ENGLISH)


_LANGUAGE_ALIASES: dict[str, Language] = {
    "en": Language.ENGLISH,
    "english": Language.ENGLISH,
    "inglés": Language.ENGLISH,
    "ingles": Language.ENGLISH,
    "es": Language.SPANISH,
    "spanish": Language.SPANISH,
    "español": Language.SPANISH,
    "espanol": Language.SPANISH,
}


class SectionKey(StrEnum):
    """Canonical résumé sections, independent of language."""

    CONTACT = "contact"
    PROFILE = "profile"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    LANGUAGES = "languages"
    INTERESTS = "interests"


class ContactKind(StrEnum):
    """Kinds of line found in the contact section."""

    EMAIL = "email"
    PHONE = "phone"
    WEB = "web"
    ADDRESS = "address"
    BIRTHDATE = "birthdate"
    OTHER = "other"


# Column placement, in drawing order.
LEFT_COLUMN_SECTIONS: tuple[SectionKey, ...] = (
    SectionKey.CONTACT,
    SectionKey.PROFILE,
    SectionKey.LANGUAGES,
    SectionKey.INTERESTS,
)
RIGHT_COLUMN_SECTIONS: tuple[SectionKey, ...] = (
    SectionKey.EXPERIENCE,
    SectionKey.EDUCATION,
    SectionKey.SKILLS,
)
ENTRY_SECTIONS: frozenset[SectionKey] = frozenset({SectionKey.EXPERIENCE, SectionKey.EDUCATION})


@dataclass(frozen=True)
class TitleDictionary:
    """Ordered ``(SectionKey, title)`` pairs for one language.

    Titles are tested in order and the first match wins, so a title that is
    a prefix of another must come after it.
    """

    language: Language
    entries: tuple[tuple[SectionKey, str], ...]

    def title_for(self, key: SectionKey) -> str:
        """Return the localized header for *key* (the key name if absent)."""
        for entry_key, title in self.entries:
            if entry_key == key:
                return title
        return key.value.upper()

    def match(self, line: str) -> tuple[SectionKey, str] | None:
        """Return ``(key, remainder)`` when *line* starts with a known title.

        The comparison is case-insensitive and the title must end on a word
        boundary.  The remainder is whatever follows the title, with an
        optional leading ``:`` removed.
        """
        upper = line.upper()
        for key, title in self.entries:
            if not upper.startswith(title.upper()):
                continue
            remainder = line[len(title) :]
            if remainder[:1].isalnum():
                continue
            remainder = remainder.strip()
            if remainder.startswith(":"):
                remainder = remainder[1:].strip()
            return key, remainder
        return None


TITLE_DICTIONARIES: dict[Language, TitleDictionary] = {
    Language.ENGLISH: TitleDictionary(
        language=Language.ENGLISH,
        entries=(
            (SectionKey.CONTACT, "CONTACT INFORMATION"),
            (SectionKey.PROFILE, "PROFESSIONAL PROFILE"),
            (SectionKey.EXPERIENCE, "WORK EXPERIENCE"),
            (SectionKey.EDUCATION, "EDUCATION"),
            (SectionKey.SKILLS, "SKILLS"),
            (SectionKey.LANGUAGES, "LANGUAGES"),
            (SectionKey.INTERESTS, "INTERESTS"),
        ),
    ),
    Language.SPANISH: TitleDictionary(
        language=Language.SPANISH,
        entries=(
            (SectionKey.CONTACT, "DETALLES PERSONALES"),
            (SectionKey.PROFILE, "PERFIL PROFESIONAL"),
            (SectionKey.EXPERIENCE, "EXPERIENCIA LABORAL"),
            (SectionKey.EDUCATION, "FORMACIÓN"),
            (SectionKey.SKILLS, "HABILIDADES"),
            (SectionKey.LANGUAGES, "IDIOMAS"),
            (SectionKey.INTERESTS, "INTERESES"),
        ),
    ),
}

# Labels prepended to classified contact values when they are drawn.
CONTACT_LABELS: dict[Language, dict[ContactKind, str]] = {
    Language.ENGLISH: {
        ContactKind.EMAIL: "Email",
        ContactKind.PHONE: "Phone",
        ContactKind.WEB: "Web",
        ContactKind.ADDRESS: "Address",
        ContactKind.BIRTHDATE: "Date of birth",
    },
    Language.SPANISH: {
        ContactKind.EMAIL: "Email",
        ContactKind.PHONE: "Teléfono",
        ContactKind.WEB: "Web",
        ContactKind.ADDRESS: "Dirección",
        ContactKind.BIRTHDATE: "Fecha de nacimiento",
    },
}


def get_title_dictionary(language: str | Language | None) -> TitleDictionary:
    """Return the title dictionary for *language* (English when unknown)."""
    return TITLE_DICTIONARIES[Language.parse(language)]
