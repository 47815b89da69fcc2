"""
app/repositories package marker.
"""

from app.repositories.contact_repository import ContactPersistenceError, ContactRepository

__all__ = [
    "ContactPersistenceError",
    "ContactRepository",
]
