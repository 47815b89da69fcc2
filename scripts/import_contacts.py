"""
Run a bulk contact import from a CSV file.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from collections.abc import Callable, Sequence

from app.config import get_contact_import_settings
from app.repositories.contact_repository import ContactPersistenceError, ContactRepository
from app.services.contact_ingestion_service import ContactSourceError, get_contact_ingestion_service

logger = logging.getLogger("scripts.import_contacts")


def main(
    argv: Sequence[str] | None = None,
    *,
    repository_factory: Callable[[], ContactRepository] = ContactRepository.from_env,
) -> int:
    parser = argparse.ArgumentParser(description="Import contacts from a CSV file.")
    parser.add_argument(
        "--csv",
        dest="csv_path",
        default=None,
        help="Path to the CSV file. Defaults to CONTACT_IMPORT_CSV_PATH.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    csv_path = args.csv_path or get_contact_import_settings().csv_path

    try:
        repository = repository_factory()
    except RuntimeError as exc:
        logger.critical("Import failed: %s", exc)
        return 1

    service = get_contact_ingestion_service()
    try:
        summary = service.ingest_csv_path(path=csv_path, repository=repository)
    except ContactSourceError as exc:
        logger.error("Import failed: %s", exc)
        return 1
    except ContactPersistenceError as exc:
        logger.error("Import failed: %s", exc)
        return 1
    finally:
        repository.close()

    payload = {
        "total": summary.total,
        "inserted": summary.inserted,
        "invalid": summary.invalid,
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
