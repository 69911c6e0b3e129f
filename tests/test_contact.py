"""Tests for contact line classification."""

from __future__ import annotations

import pytest

from career_craft.constants import ContactKind
from career_craft.parsing.contact import (
    classify_contact_line,
    classify_contact_lines,
    strip_contact_label,
)


class TestClassifyContactLine:
    """Tests for classify_contact_line."""

    @pytest.mark.parametrize(
        ("line", "kind"),
        [
            ("jane.doe@example.com", ContactKind.EMAIL),
            ("E-mail: jane at example dot com", ContactKind.EMAIL),
            ("+34 600 123 456", ContactKind.PHONE),
            ("Teléfono: 91 555", ContactKind.PHONE),
            ("Mobile: ask me", ContactKind.PHONE),
            ("linkedin.com/in/janedoe", ContactKind.WEB),
            ("https://github.com/janedoe", ContactKind.WEB),
            ("Date of birth: 01/02/1990", ContactKind.BIRTHDATE),
            ("Fecha de nacimiento: 3 de mayo", ContactKind.BIRTHDATE),
            ("Calle Mayor 1, Madrid", ContactKind.ADDRESS),
            ("Address: 221B Baker Street", ContactKind.ADDRESS),
            ("Driving licence B", ContactKind.OTHER),
        ],
    )
    def test_kinds(self, line: str, kind: ContactKind) -> None:
        assert classify_contact_line(line).kind == kind

    def test_email_wins_over_phone(self) -> None:
        field = classify_contact_line("jane600123456@example.com")
        assert field.kind == ContactKind.EMAIL

    def test_digits_in_profile_urls_are_not_phone_numbers(self) -> None:
        field = classify_contact_line("linkedin.com/in/jane-123456789")
        assert field.kind == ContactKind.WEB

    def test_label_is_removed_from_value(self) -> None:
        field = classify_contact_line("Email: jane@x.com")

        assert field.kind == ContactKind.EMAIL
        assert field.value == "jane@x.com"
        assert field.raw_line == "Email: jane@x.com"

    def test_longest_label_is_removed(self) -> None:
        field = classify_contact_line("Date of birth: 01/02/1990")
        assert field.value == "01/02/1990"


class TestStripContactLabel:
    """Tests for strip_contact_label."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("Phone: +34 600 123 456", "+34 600 123 456"),
            ("TELÉFONO : 600 123 456", "600 123 456"),
            ("- Tel.: 600 123 456", "600 123 456"),
            ("• Web: https://jane.dev", "https://jane.dev"),
            ("jane@x.com", "jane@x.com"),
            ("Webinar host", "Webinar host"),
        ],
    )
    def test_strip(self, line: str, expected: str) -> None:
        assert strip_contact_label(line) == expected


class TestClassifyContactLines:
    """Tests for classify_contact_lines."""

    def test_blank_lines_are_skipped_and_order_kept(self) -> None:
        fields = classify_contact_lines(["jane@x.com", "", "  ", "600 123 456"])

        assert [field.kind for field in fields] == [ContactKind.EMAIL, ContactKind.PHONE]
