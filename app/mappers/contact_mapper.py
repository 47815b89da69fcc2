"""
app/mappers/contact_mapper.py

Alias resolution from source keys (CSV headers, JSON body keys) to the
logical contact fields.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from app.domain.contact import FIELD_ORDER

_BYTE_ORDER_MARK = "\ufeff"

DEFAULT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "first_name": (),
    "second_name": ("last_name",),
    "email": (),
    "phone_number": ("phone",),
    "eircode": ("eir_code",),
}


def normalize_key(key: str) -> str:
    """
    Normalize a source key for matching: drop a BOM, trim, lower-case.
    """

    return key.replace(_BYTE_ORDER_MARK, "").strip().lower()


class ContactFieldMapper:
    """
    Maps raw records keyed by source names onto the logical field names.

    The logical name itself is always accepted; aliases are tried in order
    when the logical key is absent.
    """

    def __init__(self, *, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        source_aliases = aliases or DEFAULT_FIELD_ALIASES
        self._candidates: dict[str, tuple[str, ...]] = {
            field_name: (field_name, *(normalize_key(alias) for alias in source_aliases.get(field_name, ())))
            for field_name in FIELD_ORDER
        }

    def resolve_headers(self, headers: Sequence[str]) -> dict[str, str]:
        """
        Resolve logical field -> source header for one CSV header row.

        Fields with no matching header are left out; they read as absent.
        """

        lookup: dict[str, str] = {}
        for header in headers:
            if header is None:
                continue
            normalized = normalize_key(header)
            if normalized and normalized not in lookup:
                lookup[normalized] = header

        resolved: dict[str, str] = {}
        for field_name in FIELD_ORDER:
            for candidate in self._candidates[field_name]:
                if candidate in lookup:
                    resolved[field_name] = lookup[candidate]
                    break
        return resolved

    def map_row(self, raw_row: Mapping[str, Any]) -> dict[str, Any]:
        """
        Return a record keyed by logical field names only.
        """

        normalized_row = {
            normalize_key(key): value
            for key, value in raw_row.items()
            if isinstance(key, str)
        }
        mapped: dict[str, Any] = {}
        for field_name in FIELD_ORDER:
            value: Any = None
            for candidate in self._candidates[field_name]:
                if normalized_row.get(candidate) is not None:
                    value = normalized_row[candidate]
                    break
            mapped[field_name] = value
        return mapped
