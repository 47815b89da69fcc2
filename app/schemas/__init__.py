"""
app/schemas package marker.
"""

from app.schemas.contact import (
    ContactSubmissionRequest,
    ContactSubmissionResponse,
    ContactValidationErrorResponse,
    HealthResponse,
    ImportDiagnosticResponse,
    ImportSummaryResponse,
    ServerErrorResponse,
)

__all__ = [
    "ContactSubmissionRequest",
    "ContactSubmissionResponse",
    "ContactValidationErrorResponse",
    "HealthResponse",
    "ImportDiagnosticResponse",
    "ImportSummaryResponse",
    "ServerErrorResponse",
]
