"""
app/api/routers/contact_intake.py

Contact submission and CSV import HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_contact_repository, get_csv_upload, get_submission_body
from app.repositories.contact_repository import ContactPersistenceError, ContactRepository
from app.schemas.contact import (
    ContactSubmissionRequest,
    ContactSubmissionResponse,
    ContactValidationErrorResponse,
    ImportDiagnosticResponse,
    ImportSummaryResponse,
    ServerErrorResponse,
)
from app.services.contact_ingestion_service import (
    ContactIngestionService,
    ContactSourceError,
    ContactValidationError,
    get_contact_ingestion_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contacts"])


@router.post(
    "/submit",
    response_model=ContactSubmissionResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ContactValidationErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ServerErrorResponse},
    },
)
def submit_contact(
    body: ContactSubmissionRequest = Depends(get_submission_body),
    repository: ContactRepository = Depends(get_contact_repository),
    ingestion_service: ContactIngestionService = Depends(get_contact_ingestion_service),
) -> ContactSubmissionResponse | JSONResponse:
    """
    Validate and store one web form submission.
    """

    try:
        result = ingestion_service.submit(body.model_dump(), repository)
    except ContactValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ContactValidationErrorResponse(details=list(exc.errors)).model_dump(),
        )
    except ContactPersistenceError as exc:
        logger.error("Contact submission could not be stored: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ServerErrorResponse(details=str(exc)).model_dump(),
        )

    return ContactSubmissionResponse(insertId=result.contact_id)


@router.post("/import-csv", response_model=ImportSummaryResponse)
def import_csv(
    file: UploadFile = Depends(get_csv_upload),
    repository: ContactRepository = Depends(get_contact_repository),
    ingestion_service: ContactIngestionService = Depends(get_contact_ingestion_service),
) -> ImportSummaryResponse:
    """
    Import one CSV file of contacts, skipping rows that fail validation.
    """

    try:
        summary = ingestion_service.ingest_csv_upload(raw_file=file.file, repository=repository)
    except ContactSourceError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except ContactPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Contact storage is unavailable.",
        ) from exc
    finally:
        file.file.close()

    return ImportSummaryResponse(
        total=summary.total,
        inserted=summary.inserted,
        invalid=summary.invalid,
        diagnostics=[
            ImportDiagnosticResponse(
                row_number=diagnostic.row_number,
                kind=diagnostic.kind,
                message=diagnostic.message,
                fields=list(diagnostic.fields),
            )
            for diagnostic in summary.diagnostics
        ],
    )
