"""
app/validators package marker.
"""

from app.validators.contact_validator import ContactRecordValidator, validate_record
from app.validators.field_rules import FIELD_ORDER, FIELD_RULES, FieldRule, is_valid, normalize

__all__ = [
    "ContactRecordValidator",
    "FIELD_ORDER",
    "FIELD_RULES",
    "FieldRule",
    "is_valid",
    "normalize",
    "validate_record",
]
