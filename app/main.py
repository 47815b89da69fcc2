from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.repositories.contact_repository import ContactRepository

RepositoryFactory = Callable[[], ContactRepository]


def _validate_env() -> None:
    """
    Validate required environment variables before storage is opened.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.
    """

    from db.config import build_url_from_parts, load_env_files

    load_env_files()

    errors: list[str] = []

    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url and build_url_from_parts() is None:
        errors.append(
            "No database configured. Set DATABASE_URL, or DB_HOST, DB_USER and DB_NAME."
        )

    port_raw = os.getenv("PORT", "").strip()
    if port_raw and not port_raw.isdigit():
        errors.append(f"PORT='{port_raw}' is not a valid port number.")

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _default_repository_factory() -> ContactRepository:
    _validate_env()
    return ContactRepository.from_env()


def _check_db(repository: ContactRepository) -> None:
    """Run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    try:
        reachable = repository.ping()
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc
    if not reachable:
        raise RuntimeError("Database unavailable.")


def open_repository(factory: RepositoryFactory) -> ContactRepository:
    """
    Build the repository, confirm connectivity and ensure the contacts table.

    The pool is disposed again when any step fails, so a failed startup
    leaves nothing open behind it.
    """

    log = logging.getLogger(__name__)
    repository = factory()
    try:
        _check_db(repository)
        log.info("Database connectivity confirmed")
        repository.ensure_schema()
        log.info("Contacts schema ensured")
    except Exception:
        repository.close()
        raise
    return repository


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Open contact storage on boot; dispose of the pool on exit."""
    repository = open_repository(application.state.repository_factory)
    application.state.contact_repository = repository
    try:
        yield
    finally:
        application.state.contact_repository = None
        repository.close()


def create_app(repository_factory: RepositoryFactory | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Contact Intake API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    application.state.repository_factory = repository_factory or _default_repository_factory
    application.state.contact_repository = None

    from app.api.routers import contact_intake_router, health_router

    application.include_router(health_router)
    application.include_router(contact_intake_router)

    return application


app = create_app()
