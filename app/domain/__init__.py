"""
app/domain package marker.
"""

from app.domain.contact import (
    FIELD_ORDER,
    CleanContact,
    DiagnosticKind,
    ImportSummary,
    InvalidRecord,
    RawRecord,
    RowDiagnostic,
    ValidationResult,
    ValidRecord,
)

__all__ = [
    "FIELD_ORDER",
    "CleanContact",
    "DiagnosticKind",
    "ImportSummary",
    "InvalidRecord",
    "RawRecord",
    "RowDiagnostic",
    "ValidationResult",
    "ValidRecord",
]
