"""
Shared fixtures: an in-memory SQLite engine stands in for PostgreSQL.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.main import create_app
from app.repositories.contact_repository import ContactRepository
from app.services.contact_ingestion_service import ContactIngestionService


def make_sqlite_engine() -> Engine:
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
def sqlite_engine() -> Iterator[Engine]:
    engine = make_sqlite_engine()
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def repository(sqlite_engine: Engine) -> ContactRepository:
    repo = ContactRepository(sqlite_engine)
    repo.ensure_schema()
    return repo


@pytest.fixture()
def service() -> ContactIngestionService:
    return ContactIngestionService(max_diagnostics=500, log_diagnostics=True)


@pytest.fixture()
def client(repository: ContactRepository) -> Iterator[TestClient]:
    application = create_app(repository_factory=lambda: repository)
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture()
def valid_raw() -> dict[str, str]:
    return {
        "first_name": "Anna",
        "second_name": "Murphy",
        "email": "anna@example.com",
        "phone_number": "0871234567",
        "eircode": "6W3Y7K",
    }
