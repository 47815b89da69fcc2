"""
app/validators/contact_validator.py

Record-level validation: alias resolution, normalization and the five
field rules composed into one pure operation.
"""

from __future__ import annotations

from app.domain.contact import FIELD_ORDER, CleanContact, InvalidRecord, RawRecord, ValidationResult, ValidRecord
from app.mappers.contact_mapper import ContactFieldMapper
from app.validators.field_rules import FIELD_RULES


class ContactRecordValidator:
    """
    Classifies raw contact records as valid (clean, typed) or invalid.
    """

    def __init__(self, *, mapper: ContactFieldMapper | None = None) -> None:
        self._mapper = mapper or ContactFieldMapper()

    def validate_record(self, raw: RawRecord) -> ValidationResult:
        """
        Validate every field and report all failures together.

        No short-circuit: a record failing on first_name is still checked
        for the remaining four fields.
        """

        mapped = self._mapper.map_row(raw)
        values: dict[str, str] = {}
        errors: list[str] = []

        for field_name in FIELD_ORDER:
            rule = FIELD_RULES[field_name]
            value = rule.normalize(mapped.get(field_name))
            if not rule.is_valid(value):
                errors.append(field_name)
            values[field_name] = value

        if errors:
            return InvalidRecord(errors=tuple(errors))
        return ValidRecord(contact=CleanContact(**values))


_default_validator = ContactRecordValidator()


def validate_record(raw: RawRecord) -> ValidationResult:
    """
    Validate one raw record with the default alias table.
    """

    return _default_validator.validate_record(raw)
