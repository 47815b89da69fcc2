"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class ContactImportSettings:
    """
    Runtime settings for bulk contact import.
    """

    csv_path: str = "./data/Personal_Information.csv"
    max_diagnostics: int = 500
    log_diagnostics: bool = True


@dataclass(frozen=True)
class ServerSettings:
    """
    Listening address for the HTTP service.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_contact_import_settings() -> ContactImportSettings:
    """
    Return cached contact import settings from environment variables.
    """

    return ContactImportSettings(
        csv_path=_get_str_env("CONTACT_IMPORT_CSV_PATH", "./data/Personal_Information.csv"),
        max_diagnostics=max(1, _get_int_env("CONTACT_IMPORT_MAX_DIAGNOSTICS", 500)),
        log_diagnostics=_get_bool_env("CONTACT_IMPORT_LOG_DIAGNOSTICS", True),
    )


@lru_cache(maxsize=1)
def get_server_settings() -> ServerSettings:
    """
    Return cached HTTP server settings from environment variables.
    """

    return ServerSettings(
        host=_get_str_env("HOST", "0.0.0.0"),
        port=_get_int_env("PORT", 3000),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )
