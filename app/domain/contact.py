"""
app/domain/contact.py

Domain models used by the contact intake flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

RawRecord = Mapping[str, Any]

# Check order; also the order of error tags in a rejected record.
FIELD_ORDER: tuple[str, ...] = ("first_name", "second_name", "email", "phone_number", "eircode")


@dataclass(frozen=True)
class CleanContact:
    """
    Contact that passed every field rule and is ready for persistence.
    """

    first_name: str
    second_name: str
    email: str
    phone_number: str
    eircode: str


@dataclass(frozen=True)
class ValidRecord:
    contact: CleanContact

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class InvalidRecord:
    """
    Rejected record with the tags of every failed field, in check order.
    """

    errors: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return False


ValidationResult = Union[ValidRecord, InvalidRecord]


class DiagnosticKind:
    VALIDATION = "validation"
    STORAGE = "storage"


@dataclass(frozen=True)
class RowDiagnostic:
    """
    One skipped record in a batch run.
    """

    row_number: int
    kind: str
    message: str
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run import summary.
    """

    total: int
    inserted: int
    invalid: int
    diagnostics: list[RowDiagnostic] = field(default_factory=list)
