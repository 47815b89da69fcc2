"""
app/services/contact_ingestion_service.py

Service layer for contact intake.

Two paths share one validator:

    * ``submit``: one record from the web form; errors are raised to
      the caller (HTTP 400 / 500).
    * ``import_batch``: many records, one at a time in source order; a
      rejected or failed record is tallied and skipped,
      never raised.

Only a source that cannot be read (missing file, bad encoding, no header)
aborts a batch run.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import IO, TextIO

from app.config import get_contact_import_settings
from app.domain.contact import (
    FIELD_ORDER,
    CleanContact,
    DiagnosticKind,
    ImportSummary,
    InvalidRecord,
    RawRecord,
    RowDiagnostic,
)
from app.mappers.contact_mapper import ContactFieldMapper
from app.repositories.contact_repository import ContactPersistenceError, ContactRepository
from app.validators.contact_validator import ContactRecordValidator

logger = logging.getLogger(__name__)

InsertFn = Callable[[CleanContact], int]

# The header occupies row 1, so the first data row is row 2.
CSV_FIRST_DATA_ROW = 2


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ContactValidationError(ValueError):
    """
    Raised when a single submission fails one or more field rules.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class ContactSourceError(ValueError):
    """
    Raised when a batch source cannot be read at all.
    """


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InsertOutcome:
    """
    Result of the single insert attempt made for one clean record.
    """

    contact_id: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SubmissionResult:
    contact_id: int


def attempt_insert(insert: InsertFn, contact: CleanContact) -> InsertOutcome:
    """
    Make exactly one insert attempt and report the outcome as a value.
    """

    try:
        return InsertOutcome(contact_id=insert(contact))
    except ContactPersistenceError as exc:
        return InsertOutcome(error=str(exc))


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ContactIngestionService:
    """
    Coordinates validation, batch accounting and persistence of contacts.
    """

    def __init__(
        self,
        *,
        max_diagnostics: int,
        log_diagnostics: bool,
        mapper: ContactFieldMapper | None = None,
        validator: ContactRecordValidator | None = None,
    ) -> None:
        self._max_diagnostics = max(1, max_diagnostics)
        self._log_diagnostics = log_diagnostics
        self._mapper = mapper or ContactFieldMapper()
        self._validator = validator or ContactRecordValidator(mapper=self._mapper)

    # ------------------------------------------------------------------
    # Single submission
    # ------------------------------------------------------------------

    def submit(self, raw: RawRecord, repository: ContactRepository) -> SubmissionResult:
        """
        Validate one record and insert it.

        Raises:
            ContactValidationError:  one or more fields failed their rule.
            ContactPersistenceError: the schema check or insert failed.
        """

        result = self._validator.validate_record(raw)
        if isinstance(result, InvalidRecord):
            raise ContactValidationError(result.errors)

        repository.ensure_schema()
        contact_id = repository.insert(result.contact)
        logger.info("Contact submission stored id=%s", contact_id)
        return SubmissionResult(contact_id=contact_id)

    # ------------------------------------------------------------------
    # Batch import
    # ------------------------------------------------------------------

    def import_batch(
        self,
        source: Iterable[RawRecord],
        insert: InsertFn,
        *,
        first_row_number: int = 1,
    ) -> ImportSummary:
        """
        Validate and insert records one at a time, in source order.

        ``source`` is consumed lazily. Each valid record gets exactly one
        insert attempt; rejected records and failed inserts are counted as
        invalid and the run moves on to the next record.

        Args:
            source:            Iterable of raw records; may be a stream.
            insert:            Callable storing one clean contact and
                               returning its id. Signals storage failure by
                               raising ContactPersistenceError.
            first_row_number:  Ordinal reported for the first record.
        """

        total = 0
        inserted = 0
        invalid = 0
        diagnostics: list[RowDiagnostic] = []

        for row_number, raw in enumerate(source, start=first_row_number):
            total += 1

            result = self._validator.validate_record(raw)
            if isinstance(result, InvalidRecord):
                invalid += 1
                self._record_diagnostic(
                    diagnostics,
                    RowDiagnostic(
                        row_number=row_number,
                        kind=DiagnosticKind.VALIDATION,
                        message=", ".join(result.errors),
                        fields=result.errors,
                    ),
                )
                continue

            outcome = attempt_insert(insert, result.contact)
            if not outcome.ok:
                invalid += 1
                self._record_diagnostic(
                    diagnostics,
                    RowDiagnostic(
                        row_number=row_number,
                        kind=DiagnosticKind.STORAGE,
                        message=outcome.error or "Insert failed.",
                    ),
                )
                continue

            inserted += 1

        logger.info(
            "Contact import finished total=%s inserted=%s invalid=%s",
            total,
            inserted,
            invalid,
        )
        return ImportSummary(
            total=total,
            inserted=inserted,
            invalid=invalid,
            diagnostics=diagnostics,
        )

    # ------------------------------------------------------------------
    # CSV sources
    # ------------------------------------------------------------------

    def ingest_csv_path(self, *, path: str | Path, repository: ContactRepository) -> ImportSummary:
        """
        Import a CSV file from disk into the contacts table.
        """

        repository.ensure_schema()

        csv_path = Path(path)
        if not csv_path.is_file():
            raise ContactSourceError(f"CSV file not found: {csv_path}")

        try:
            handle = csv_path.open("r", encoding="utf-8-sig", newline="")
        except OSError as exc:
            raise ContactSourceError(f"CSV file could not be opened: {csv_path}") from exc

        with handle:
            return self.import_batch(
                self.iter_csv_records(handle),
                repository.insert,
                first_row_number=CSV_FIRST_DATA_ROW,
            )

    def ingest_csv_upload(self, *, raw_file: IO[bytes], repository: ContactRepository) -> ImportSummary:
        """
        Import an uploaded binary CSV stream into the contacts table.
        """

        repository.ensure_schema()

        raw_file.seek(0)
        text_stream = io.TextIOWrapper(raw_file, encoding="utf-8-sig", newline="")
        try:
            return self.import_batch(
                self.iter_csv_records(text_stream),
                repository.insert,
                first_row_number=CSV_FIRST_DATA_ROW,
            )
        finally:
            try:
                text_stream.detach()
            except ValueError:
                pass

    def iter_csv_records(self, text_stream: TextIO) -> Iterator[RawRecord]:
        """
        Read the header row eagerly, then yield one raw record per data row.

        Header problems raise ContactSourceError here, before any record is
        handed to the importer.
        """

        try:
            reader = csv.DictReader(text_stream)
            headers = reader.fieldnames or []
        except UnicodeDecodeError as exc:
            raise ContactSourceError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise ContactSourceError(f"Invalid CSV format: {exc}") from exc

        if not any(header and header.strip() for header in headers):
            raise ContactSourceError("CSV header row is missing.")

        resolved = self._mapper.resolve_headers(headers)
        missing = [field_name for field_name in FIELD_ORDER if field_name not in resolved]
        if missing:
            logger.warning(
                "CSV header has no column for %s; those fields will read as empty",
                ", ".join(missing),
            )

        return self._iter_rows(reader)

    @staticmethod
    def _iter_rows(reader: csv.DictReader) -> Iterator[RawRecord]:
        try:
            yield from reader
        except UnicodeDecodeError as exc:
            raise ContactSourceError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise ContactSourceError(f"Invalid CSV format: {exc}") from exc

    def _record_diagnostic(
        self,
        diagnostics: list[RowDiagnostic],
        diagnostic: RowDiagnostic,
    ) -> None:
        if self._log_diagnostics:
            if diagnostic.kind == DiagnosticKind.VALIDATION:
                logger.warning("Row %s invalid -> %s", diagnostic.row_number, diagnostic.message)
            else:
                logger.warning("Row %s database error -> %s", diagnostic.row_number, diagnostic.message)

        if len(diagnostics) < self._max_diagnostics:
            diagnostics.append(diagnostic)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_contact_ingestion_service() -> ContactIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """
    settings = get_contact_import_settings()
    return ContactIngestionService(
        max_diagnostics=settings.max_diagnostics,
        log_diagnostics=settings.log_diagnostics,
    )
