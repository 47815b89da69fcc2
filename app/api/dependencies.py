"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and storage access.
"""

from __future__ import annotations

from fastapi import File, HTTPException, Request, UploadFile, status
from pydantic import ValidationError

from app.repositories.contact_repository import ContactRepository
from app.schemas.contact import ContactSubmissionRequest

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


FORM_CONTENT_TYPES = {
    "application/x-www-form-urlencoded",
    "multipart/form-data",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def get_contact_repository(request: Request) -> ContactRepository:
    """
    Return the repository opened by the application lifespan.
    """

    repository = getattr(request.app.state, "contact_repository", None)
    if repository is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Contact storage is not initialised.",
        )
    return repository


async def get_submission_body(request: Request) -> ContactSubmissionRequest:
    """
    Read a contact submission from a JSON or form-encoded body.

    An absent body reads as an empty submission, so every field is then
    reported by validation rather than rejected here.
    """

    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        payload = {key: value for key, value in form.items() if isinstance(value, str)}
    else:
        raw_body = await request.body()
        if not raw_body.strip():
            payload = {}
        else:
            try:
                payload = await request.json()
            except ValueError as exc:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Request body must be valid JSON.",
                ) from exc

    try:
        return ContactSubmissionRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be a JSON object.",
        ) from exc
