"""
tests/test_api_contacts.py

HTTP boundary: submission, CSV upload, health and startup lifecycle.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import create_app
from app.repositories.contact_repository import ContactPersistenceError, ContactRepository


def test_submit_valid_contact(client: TestClient, valid_raw: dict[str, str]) -> None:
    response = client.post("/api/submit", json=valid_raw)

    assert response.status_code == 200
    assert response.json() == {"message": "Inserted", "insertId": 1}


def test_submit_normalizes_before_storing(client: TestClient, valid_raw: dict[str, str]) -> None:
    payload = {**valid_raw, "phone_number": "087-123-4567", "eircode": " 6w3 y7k "}

    response = client.post("/api/submit", json=payload)

    assert response.status_code == 200


def test_submit_reports_every_failed_field(client: TestClient) -> None:
    payload = {
        "first_name": "Anna",
        "second_name": "O'Neill1",
        "email": "a@b.com",
        "phone_number": "087-123-4567",
        "eircode": "d02 ab12",
    }

    response = client.post("/api/submit", json=payload)

    assert response.status_code == 400
    assert response.json() == {
        "error": "Validation failed",
        "details": ["second_name", "eircode"],
    }


def test_submit_with_absent_fields(client: TestClient) -> None:
    response = client.post("/api/submit", json={"first_name": "Anna"})

    assert response.status_code == 400
    assert response.json()["details"] == ["second_name", "email", "phone_number", "eircode"]


def test_submit_without_body_reports_every_field(client: TestClient) -> None:
    response = client.post("/api/submit")

    assert response.status_code == 400
    assert response.json() == {
        "error": "Validation failed",
        "details": ["first_name", "second_name", "email", "phone_number", "eircode"],
    }


def test_submit_accepts_form_encoded_body(client: TestClient, valid_raw: dict[str, str]) -> None:
    response = client.post("/api/submit", data=valid_raw)

    assert response.status_code == 200
    assert response.json() == {"message": "Inserted", "insertId": 1}


def test_submit_form_encoded_with_failed_fields(client: TestClient) -> None:
    response = client.post("/api/submit", data={"first_name": "Anna", "phone": "12345"})

    assert response.status_code == 400
    assert response.json()["details"] == ["second_name", "email", "phone_number", "eircode"]


def test_submit_rejects_malformed_json(client: TestClient) -> None:
    response = client.post(
        "/api/submit",
        content=b"{\"first_name\": ",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "JSON" in response.json()["detail"]


def test_submit_integral_float_phone_is_not_padded(client: TestClient, valid_raw: dict[str, str]) -> None:
    response = client.post("/api/submit", json={**valid_raw, "phone_number": 871234567.0})

    assert response.status_code == 400
    assert response.json()["details"] == ["phone_number"]


def test_submit_accepts_alias_keys(client: TestClient, valid_raw: dict[str, str]) -> None:
    payload = {**valid_raw}
    payload["phone"] = payload.pop("phone_number")

    response = client.post("/api/submit", json=payload)

    assert response.status_code == 200


def test_submit_storage_failure_returns_500(
    client: TestClient,
    repository: ContactRepository,
    valid_raw: dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def failing_insert(contact):
        raise ContactPersistenceError("Failed to insert contact: connection lost")

    monkeypatch.setattr(repository, "insert", failing_insert)

    response = client.post("/api/submit", json=valid_raw)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Server error"
    assert "connection lost" in body["details"]


def test_import_csv_upload_skips_invalid_row(client: TestClient) -> None:
    content = (
        "first_name,last_name,email,phone,eir_code\n"
        "Anna,Murphy,anna@example.com,0871234567,6W3Y7K\n"
        "Anna,Murphy,anna@example.com,0871234567,D02AB12\n"
        "Anna,Murphy,anna.m@example.com,0871234567,6W3Y7K\n"
    ).encode("utf-8")

    response = client.post(
        "/api/import-csv",
        files={"file": ("contacts.csv", content, "text/csv")},
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["total"], body["inserted"], body["invalid"]) == (3, 2, 1)
    assert body["diagnostics"] == [
        {"row_number": 3, "kind": "validation", "message": "eircode", "fields": ["eircode"]}
    ]


def test_import_rejects_non_csv_upload(client: TestClient) -> None:
    response = client.post(
        "/api/import-csv",
        files={"file": ("contacts.json", b"{}", "application/json")},
    )

    assert response.status_code == 400


def test_import_rejects_headerless_csv(client: TestClient) -> None:
    response = client.post(
        "/api/import-csv",
        files={"file": ("contacts.csv", b"", "text/csv")},
    )

    assert response.status_code == 400
    assert "header" in response.json()["detail"]


def test_health_ok(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"server": "ok", "db": "ok"}


def test_health_reports_storage_failure(
    client: TestClient,
    repository: ContactRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def failing_ping() -> bool:
        raise OperationalError("SELECT 1 AS ok", {}, Exception("server closed the connection"))

    monkeypatch.setattr(repository, "ping", failing_ping)

    response = client.get("/health")

    assert response.status_code == 500
    body = response.json()
    assert body["server"] == "ok"
    assert body["db"] == "fail"
    assert "server closed the connection" in body["error"]


class UnreachableRepository:
    def __init__(self) -> None:
        self.closed = False

    def ping(self) -> bool:
        raise OperationalError("SELECT 1 AS ok", {}, Exception("connection refused"))

    def ensure_schema(self) -> None:
        raise AssertionError("schema must not be touched when storage is down")

    def close(self) -> None:
        self.closed = True


def test_startup_fails_when_storage_unreachable() -> None:
    repository = UnreachableRepository()
    application = create_app(repository_factory=lambda: repository)

    with pytest.raises(RuntimeError, match="Database unavailable"):
        with TestClient(application):
            pass

    assert repository.closed is True


def test_repository_closed_on_shutdown(repository: ContactRepository, monkeypatch: pytest.MonkeyPatch) -> None:
    closed: list[bool] = []
    monkeypatch.setattr(repository, "close", lambda: closed.append(True))
    application = create_app(repository_factory=lambda: repository)

    with TestClient(application) as test_client:
        assert test_client.get("/health").status_code == 200
        assert closed == []

    assert closed == [True]
    assert application.state.contact_repository is None
