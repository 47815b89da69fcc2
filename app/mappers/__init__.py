"""
app/mappers package marker.
"""

from app.mappers.contact_mapper import DEFAULT_FIELD_ALIASES, ContactFieldMapper, normalize_key

__all__ = [
    "ContactFieldMapper",
    "DEFAULT_FIELD_ALIASES",
    "normalize_key",
]
