"""
app/repositories/contact_repository.py

Storage gateway for validated contacts.

The repository owns its engine and session factory. It is built once per
process (or per CLI run), injected where needed and closed explicitly.
"""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.domain.contact import CleanContact
from db.base import Base
from db.models.contact import Contact
from db.session import create_db_engine, create_session_factory

logger = logging.getLogger(__name__)


class ContactPersistenceError(RuntimeError):
    """
    Raised when a contact cannot be written (connectivity, constraints).
    """


class ContactRepository:
    """
    Schema creation, parameterized insert and connectivity probe.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_env(cls) -> "ContactRepository":
        """
        Build a repository on a new pooled engine resolved from the environment.
        """

        return cls(create_db_engine())

    @property
    def engine(self) -> Engine:
        return self._engine

    def ensure_schema(self) -> None:
        """
        Create the contacts table when it does not exist. Safe to call repeatedly.
        """

        try:
            Base.metadata.create_all(
                self._engine,
                tables=[Contact.__table__],
                checkfirst=True,
            )
        except SQLAlchemyError as exc:
            raise ContactPersistenceError("Failed to ensure contacts schema.") from exc

    def insert(self, contact: CleanContact) -> int:
        """
        Insert one clean contact and return its generated id.
        """

        record = Contact(
            first_name=contact.first_name,
            second_name=contact.second_name,
            email=contact.email,
            phone_number=contact.phone_number,
            eircode=contact.eircode,
        )
        with self._session_factory() as session:
            try:
                session.add(record)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise ContactPersistenceError(f"Failed to insert contact: {exc}") from exc
        return record.id

    def ping(self) -> bool:
        """Run SELECT 1. Returns True when the probe answers 1."""
        with self._engine.connect() as connection:
            value = connection.execute(text("SELECT 1 AS ok")).scalar()
        return value == 1

    def close(self) -> None:
        self._engine.dispose()
        logger.info("Contact storage connection pool disposed")
