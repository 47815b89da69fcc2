"""
app/api/routers/health.py

Liveness and storage connectivity probe.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.dependencies import get_contact_repository
from app.repositories.contact_repository import ContactRepository
from app.schemas.contact import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
def healthcheck(
    repository: ContactRepository = Depends(get_contact_repository),
) -> HealthResponse | JSONResponse:
    """
    Report server liveness and whether a SELECT 1 against storage succeeds.
    """

    try:
        ok = repository.ping()
    except SQLAlchemyError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=HealthResponse(db="fail", error=str(exc)).model_dump(),
        )
    return HealthResponse(db="ok" if ok else "fail")
