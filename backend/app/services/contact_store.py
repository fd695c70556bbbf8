"""Contact record store: document-shaped access to the ``contacts`` table.

Documents are plain dicts keyed by their API field names (``id``, ``owner``,
``firstName``, ``lastName``, ``email``, ``phoneNumbers``). Expected outcomes
(missing id, duplicate id) are returned as values; anything else the database
raises propagates to the caller untouched.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.contact import ContactRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Found:
    """The operation matched a record; ``document`` is its stored form."""

    document: dict


@dataclass(frozen=True)
class NotFound:
    contact_id: str


@dataclass(frozen=True)
class Duplicate:
    contact_id: str


StoreOutcome = Found | NotFound | Duplicate


# ---------------------------------------------------------------------------
# Row <-> document mapping
# ---------------------------------------------------------------------------


def _to_document(record: ContactRecord) -> dict:
    return {
        "id": record.id,
        "owner": record.owner,
        "firstName": record.first_name,
        "lastName": record.last_name,
        "email": record.email,
        "phoneNumbers": dict(record.phone_numbers) if record.phone_numbers is not None else None,
    }


def _apply_document(record: ContactRecord, document: dict) -> None:
    """Overwrite every stored field of ``record`` from ``document``."""
    record.owner = document["owner"]
    record.first_name = document["firstName"]
    record.last_name = document.get("lastName")
    record.email = document.get("email")
    # JSON columns don't track in-place mutation, so always assign a fresh dict.
    phone_numbers = document.get("phoneNumbers")
    record.phone_numbers = dict(phone_numbers) if phone_numbers is not None else None


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ContactStore:
    """Single-record operations on the ``contacts`` table, one commit each."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find(self, owner: str, query: str | None = None) -> list[dict]:
        """Return ``owner``'s documents ordered by first name.

        When ``query`` is given, only documents whose first name, last name or
        email equals it exactly are returned.
        """
        stmt = select(ContactRecord).where(ContactRecord.owner == owner)
        if query is not None:
            stmt = stmt.where(
                or_(
                    ContactRecord.first_name == query,
                    ContactRecord.last_name == query,
                    ContactRecord.email == query,
                )
            )
        records = self._db.execute(stmt.order_by(ContactRecord.first_name.asc())).scalars().all()
        return [_to_document(record) for record in records]

    def find_one(self, contact_id: str) -> Found | NotFound:
        record = self._db.get(ContactRecord, contact_id)
        if record is None:
            return NotFound(contact_id=contact_id)
        return Found(document=_to_document(record))

    def insert(self, document: dict) -> Found | Duplicate:
        """Insert a new record. Never overwrites an existing id."""
        contact_id = document["id"]
        if self._db.get(ContactRecord, contact_id) is not None:
            return Duplicate(contact_id=contact_id)

        record = ContactRecord(id=contact_id)
        _apply_document(record, document)
        self._db.add(record)
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            logger.warning("Contact %s was inserted concurrently; reporting duplicate", contact_id)
            return Duplicate(contact_id=contact_id)

        self._db.refresh(record)
        return Found(document=_to_document(record))

    def update(self, contact_id: str, document: dict) -> Found | NotFound:
        """Replace an existing record in full. Never inserts."""
        record = self._db.get(ContactRecord, contact_id)
        if record is None:
            return NotFound(contact_id=contact_id)

        _apply_document(record, document)
        self._db.commit()
        self._db.refresh(record)
        return Found(document=_to_document(record))

    def remove(self, contact_id: str) -> Found | NotFound:
        """Delete a record, returning the document that was removed."""
        record = self._db.get(ContactRecord, contact_id)
        if record is None:
            return NotFound(contact_id=contact_id)

        document = _to_document(record)
        self._db.delete(record)
        self._db.commit()
        return Found(document=document)
