"""
db/models/contact.py

Contact model: one validated personal-contact submission.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.validators.field_rules import FIELD_RULES
from db.base import Base, CreatedAtMixin


def _width(field_name: str) -> String:
    return String(FIELD_RULES[field_name].max_length)


class Contact(Base, CreatedAtMixin):
    """
    Persisted clean contact record.

    Column widths come from the field rule table, so only records that
    passed every field rule are ever written here.
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    first_name: Mapped[str] = mapped_column(_width("first_name"), nullable=False)

    second_name: Mapped[str] = mapped_column(_width("second_name"), nullable=False)

    email: Mapped[str] = mapped_column(_width("email"), nullable=False)

    phone_number: Mapped[str] = mapped_column(
        _width("phone_number"),
        nullable=False,
        comment="Digits only",
    )

    eircode: Mapped[str] = mapped_column(
        _width("eircode"),
        nullable=False,
        comment="Whitespace removed before storage",
    )

    def __repr__(self) -> str:
        return f"<Contact id={self.id} email={self.email!r}>"
