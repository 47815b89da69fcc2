"""
Model package exports.

Import all SQLAlchemy models here so metadata registration works without
extra imports.
"""

from db.models.contact import Contact

__all__ = [
    "Contact",
]
