"""
tests/test_imports.py

Entry-point modules must import cleanly in a fresh interpreter.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.mark.parametrize(
    "module_name",
    [
        "app.main",
        "app.services.contact_ingestion_service",
        "app.mappers.contact_mapper",
        "app.validators.field_rules",
        "db.models.contact",
        "scripts.import_contacts",
        "scripts.serve",
    ],
)
def test_module_imports_in_fresh_interpreter(module_name: str) -> None:
    completed = subprocess.run(
        [sys.executable, "-c", f"import {module_name}"],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert completed.returncode == 0, completed.stderr
