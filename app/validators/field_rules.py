"""
app/validators/field_rules.py

Fixed normalization and format rules for the five contact fields.

Every entry point (HTTP submission, CSV import) reads the rules from
``FIELD_RULES``; there is no other copy of these patterns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from app.domain.contact import FIELD_ORDER

_NON_DIGITS = re.compile(r"[^0-9]")
_WHITESPACE = re.compile(r"\s+")

# Letters A-Z/a-z, Latin-1 range U+00C0..U+00FF and ASCII digits.
_NAME_PATTERN = re.compile(r"[A-Za-z\u00C0-\u00FF0-9]{1,20}")
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE_PATTERN = re.compile(r"[0-9]{10}")
_EIRCODE_PATTERN = re.compile(r"[0-9][A-Za-z0-9]{5}")


def _as_text(raw_value: Any) -> str:
    if raw_value is None:
        return ""
    if isinstance(raw_value, bool):
        return "true" if raw_value else "false"
    # JSON numbers: 871234567.0 reads as "871234567", not "871234567.0".
    if isinstance(raw_value, float) and raw_value.is_integer() and abs(raw_value) < 1e21:
        return str(int(raw_value))
    return str(raw_value)


def _trim(value: str) -> str:
    return value.strip()


def _digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value).strip()


def _without_whitespace(value: str) -> str:
    return _WHITESPACE.sub("", value).strip()


@dataclass(frozen=True)
class FieldRule:
    """
    Normalizer, pattern and storage width for one logical field.
    """

    name: str
    pattern: re.Pattern[str]
    max_length: int
    normalizer: Callable[[str], str] = _trim

    def normalize(self, raw_value: Any) -> str:
        return self.normalizer(_as_text(raw_value))

    def is_valid(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None


FIELD_RULES: dict[str, FieldRule] = {
    "first_name": FieldRule(name="first_name", pattern=_NAME_PATTERN, max_length=20),
    "second_name": FieldRule(name="second_name", pattern=_NAME_PATTERN, max_length=20),
    "email": FieldRule(name="email", pattern=_EMAIL_PATTERN, max_length=255),
    "phone_number": FieldRule(
        name="phone_number",
        pattern=_PHONE_PATTERN,
        max_length=10,
        normalizer=_digits_only,
    ),
    "eircode": FieldRule(
        name="eircode",
        pattern=_EIRCODE_PATTERN,
        max_length=6,
        normalizer=_without_whitespace,
    ),
}


def normalize(field_name: str, raw_value: Any) -> str:
    """
    Normalize one raw value for a logical field. Absent values become "".
    """

    return FIELD_RULES[field_name].normalize(raw_value)


def is_valid(field_name: str, normalized_value: str) -> bool:
    """
    Return True when the normalized value fully matches the field's rule.
    """

    return FIELD_RULES[field_name].is_valid(normalized_value)
