"""
tests/test_contact_repository.py

Storage gateway behaviour against an in-memory SQLite engine.
"""

from __future__ import annotations

import pytest
from sqlalchemy import inspect, select, text

from app.domain.contact import CleanContact
from app.repositories.contact_repository import ContactPersistenceError, ContactRepository
from db.models.contact import Contact


def _contact(email: str = "anna@example.com") -> CleanContact:
    return CleanContact(
        first_name="Anna",
        second_name="Murphy",
        email=email,
        phone_number="0871234567",
        eircode="6W3Y7K",
    )


def test_ensure_schema_is_idempotent(repository: ContactRepository) -> None:
    repository.ensure_schema()
    repository.ensure_schema()

    columns = {column["name"] for column in inspect(repository.engine).get_columns("contacts")}
    assert columns == {
        "id",
        "first_name",
        "second_name",
        "email",
        "phone_number",
        "eircode",
        "created_at",
    }


def test_insert_returns_generated_ids(repository: ContactRepository) -> None:
    first_id = repository.insert(_contact("one@example.com"))
    second_id = repository.insert(_contact("two@example.com"))

    assert second_id > first_id


def test_insert_persists_fields_and_timestamp(repository: ContactRepository) -> None:
    contact_id = repository.insert(_contact())

    with repository.engine.connect() as connection:
        row = connection.execute(select(Contact.__table__).where(Contact.id == contact_id)).one()

    assert row.email == "anna@example.com"
    assert row.phone_number == "0871234567"
    assert row.eircode == "6W3Y7K"
    assert row.created_at is not None


def test_insert_values_are_bound_not_interpolated(repository: ContactRepository) -> None:
    hostile = CleanContact(
        first_name="Anna",
        second_name="Murphy",
        email="x');DROP TABLE contacts;--@b.com",
        phone_number="0871234567",
        eircode="6W3Y7K",
    )

    repository.insert(hostile)

    assert inspect(repository.engine).has_table("contacts")


def test_insert_failure_raises_persistence_error(repository: ContactRepository) -> None:
    with repository.engine.begin() as connection:
        connection.execute(text("DROP TABLE contacts"))

    with pytest.raises(ContactPersistenceError):
        repository.insert(_contact())


def test_ping(repository: ContactRepository) -> None:
    assert repository.ping() is True
