"""
app/schemas/contact.py

Request and response schemas for contact intake endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContactSubmissionRequest(BaseModel):
    """
    Web form payload. Every key is optional; absent keys read as empty.

    Values are kept as sent so the field rules (not the schema) decide
    what is acceptable. Alias keys such as ``phone`` pass through as extras.
    """

    model_config = ConfigDict(extra="allow")

    first_name: Any = None
    second_name: Any = None
    email: Any = None
    phone_number: Any = None
    eircode: Any = None


class ContactSubmissionResponse(BaseModel):
    message: str = "Inserted"
    insertId: int


class ContactValidationErrorResponse(BaseModel):
    """
    400 body: the tags of every failed field.
    """

    error: str = "Validation failed"
    details: list[str] = Field(default_factory=list)


class ServerErrorResponse(BaseModel):
    error: str = "Server error"
    details: str | None = None


class HealthResponse(BaseModel):
    server: str = "ok"
    db: str
    error: str | None = None


class ImportDiagnosticResponse(BaseModel):
    """
    API response model for one skipped row.
    """

    row_number: int = Field(..., ge=1)
    kind: str
    message: str
    fields: list[str] = Field(default_factory=list)


class ImportSummaryResponse(BaseModel):
    """
    API response model for a bulk import run.
    """

    total: int = Field(..., ge=0)
    inserted: int = Field(..., ge=0)
    invalid: int = Field(..., ge=0)
    diagnostics: list[ImportDiagnosticResponse] = Field(default_factory=list)
