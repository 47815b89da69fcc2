"""
app/services package marker.
"""

from app.services.contact_ingestion_service import (
    ContactIngestionService,
    ContactSourceError,
    ContactValidationError,
    InsertOutcome,
    SubmissionResult,
    attempt_insert,
    get_contact_ingestion_service,
)

__all__ = [
    "ContactIngestionService",
    "ContactSourceError",
    "ContactValidationError",
    "InsertOutcome",
    "SubmissionResult",
    "attempt_insert",
    "get_contact_ingestion_service",
]
