"""
Shared environment-driven database configuration helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote_plus


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def normalize_postgres_url(url: str) -> str:
    """
    Normalize postgres URLs to SQLAlchemy's recommended psycopg driver form.
    """

    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def build_url_from_parts() -> str | None:
    """
    Build a PostgreSQL URL from discrete DB_HOST / DB_USER / DB_NAME settings.

    Returns None when any of host, user or database name is missing.
    """

    host = os.getenv("DB_HOST", "").strip()
    user = os.getenv("DB_USER", "").strip()
    name = os.getenv("DB_NAME", "").strip()
    if not host or not user or not name:
        return None

    password = os.getenv("DB_PASSWORD", "")
    port = os.getenv("DB_PORT", "5432").strip() or "5432"
    credentials = quote_plus(user)
    if password:
        credentials = f"{credentials}:{quote_plus(password)}"
    return f"postgresql+psycopg://{credentials}@{host}:{port}/{name}"


def resolve_database_url() -> str:
    """
    Resolve database URL using environment variables and optional .env files.

    Priority:
    1) DATABASE_URL
    2) DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME
    """

    load_env_files()

    direct_url = os.getenv("DATABASE_URL", "").strip()
    if direct_url:
        return normalize_postgres_url(direct_url)

    parts_url = build_url_from_parts()
    if parts_url:
        return parts_url

    raise RuntimeError(
        "No database URL configured. Set DATABASE_URL, or configure "
        "DB_HOST / DB_USER / DB_NAME (with optional DB_PORT / DB_PASSWORD)."
    )
