"""Contact collection: owner-scoped CRUD over the contact store.

Every operation is checked against ``ENABLED_OPERATIONS`` before it runs.
Listing always filters by owner, and create/replace always stamp the caller as
owner. Object-level reads and removes look records up by id only: callers must
guarantee the id belongs to the authenticated user (the ``/users/{user_id}``
path check in ``app.core.auth.get_path_user``).
"""

import logging
import uuid
from collections.abc import Callable
from enum import Enum

from app.services.contact_store import ContactStore, Duplicate, Found, NotFound

logger = logging.getLogger(__name__)


class ContactOperation(str, Enum):
    INSERT = "insert"
    FIND = "find"
    SAVE = "save"
    UPDATE = "update"
    REMOVE = "remove"
    INSERT_OBJECT = "insert_object"
    FIND_OBJECT = "find_object"
    SAVE_OBJECT = "save_object"
    UPDATE_OBJECT = "update_object"
    REMOVE_OBJECT = "remove_object"


# No bulk writes, and no partial updates: objects are only ever saved whole.
ENABLED_OPERATIONS: dict[ContactOperation, bool] = {
    ContactOperation.INSERT: False,
    ContactOperation.FIND: True,
    ContactOperation.SAVE: False,
    ContactOperation.UPDATE: False,
    ContactOperation.REMOVE: False,
    ContactOperation.INSERT_OBJECT: True,
    ContactOperation.FIND_OBJECT: True,
    ContactOperation.SAVE_OBJECT: True,
    ContactOperation.UPDATE_OBJECT: False,
    ContactOperation.REMOVE_OBJECT: True,
}

PUBLIC_OPTIONAL_FIELDS = ("firstName", "lastName", "email")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ContactsError(Exception):
    """Base exception for contact collection operations."""


class OperationNotEnabledError(ContactsError):
    """Raised when an operation is switched off for the collection."""

    def __init__(self, operation: ContactOperation) -> None:
        self.operation = operation
        super().__init__(f"Operation '{operation.value}' is not enabled for contacts")


class ContactNotFoundError(ContactsError):
    def __init__(self, contact_id: str) -> None:
        self.contact_id = contact_id
        super().__init__(f"Contact '{contact_id}' not found")


class DuplicateContactError(ContactsError):
    def __init__(self, contact_id: str) -> None:
        self.contact_id = contact_id
        super().__init__(f"Contact '{contact_id}' already exists")


# ---------------------------------------------------------------------------
# Pure transforms
# ---------------------------------------------------------------------------


def new_contact_id() -> str:
    return uuid.uuid4().hex


def with_owner(document: dict, owner: str) -> dict:
    """Return a copy of ``document`` owned by ``owner``.

    Any ``owner`` already present in the document is discarded.
    """
    return {**document, "owner": owner}


def public_view(document: dict) -> dict:
    """Project a stored contact onto its API representation.

    ``owner`` is dropped, falsy optional fields are omitted rather than
    returned empty, and ``phoneNumbers`` is always present.
    """
    view = {
        "id": document.get("id"),
        "phoneNumbers": document.get("phoneNumbers") or {},
    }
    for field in PUBLIC_OPTIONAL_FIELDS:
        if document.get(field):
            view[field] = document[field]
    return view


def check_enabled(operation: ContactOperation) -> None:
    if not ENABLED_OPERATIONS.get(operation, False):
        logger.warning("Rejected disabled contacts operation '%s'", operation.value)
        raise OperationNotEnabledError(operation)


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


class ContactCollection:
    """The ``/users/{user_id}/contacts`` collection."""

    def __init__(
        self,
        store: ContactStore,
        *,
        id_generator: Callable[[], str] = new_contact_id,
    ) -> None:
        self._store = store
        self._id_generator = id_generator

    # -- collection level ---------------------------------------------------

    def find(self, owner: str, query: str | None = None) -> list[dict]:
        """List the caller's contacts, optionally matching ``query`` exactly.

        ``query`` is compared for equality against first name, last name and
        email. No pagination: the contact list of a single user is small.
        """
        check_enabled(ContactOperation.FIND)
        documents = self._store.find(owner, query or None)
        return [public_view(document) for document in documents]

    # Bulk operations and partial updates are switched off in
    # ENABLED_OPERATIONS and have no implementation behind the check.

    def insert(self, documents: list[dict], owner: str) -> None:
        check_enabled(ContactOperation.INSERT)

    def save(self, documents: list[dict], owner: str) -> None:
        check_enabled(ContactOperation.SAVE)

    def update(self, update: dict, owner: str) -> None:
        check_enabled(ContactOperation.UPDATE)

    def remove(self, owner: str) -> None:
        check_enabled(ContactOperation.REMOVE)

    # -- object level -------------------------------------------------------

    def insert_object(self, document: dict, owner: str) -> dict:
        """Create a contact owned by ``owner`` and return its public view."""
        check_enabled(ContactOperation.INSERT_OBJECT)
        document = with_owner(document, owner)
        if not document.get("id"):
            document["id"] = self._id_generator()

        match self._store.insert(document):
            case Found(document=stored):
                logger.info("Created contact %s for user %s", stored["id"], owner)
                return public_view(stored)
            case Duplicate(contact_id=contact_id):
                raise DuplicateContactError(contact_id)

    def find_object(self, contact_id: str) -> dict:
        # Not owner-filtered; see module docstring.
        check_enabled(ContactOperation.FIND_OBJECT)
        match self._store.find_one(contact_id):
            case Found(document=stored):
                return public_view(stored)
            case NotFound():
                raise ContactNotFoundError(contact_id)

    def save_object(self, document: dict, owner: str) -> dict:
        """Replace an existing contact in full.

        Saving never creates: clients do not get to pick ids through this path.
        Returns the public view of the submitted document.
        """
        check_enabled(ContactOperation.SAVE_OBJECT)
        document = with_owner(document, owner)
        contact_id = document["id"]

        match self._store.update(contact_id, document):
            case Found():
                logger.info("Saved contact %s for user %s", contact_id, owner)
                return public_view(document)
            case NotFound():
                raise ContactNotFoundError(contact_id)

    def update_object(self, contact_id: str, update: dict, owner: str) -> None:
        check_enabled(ContactOperation.UPDATE_OBJECT)

    def remove_object(self, contact_id: str) -> int:
        # Not owner-filtered; see module docstring.
        check_enabled(ContactOperation.REMOVE_OBJECT)
        match self._store.remove(contact_id):
            case Found():
                logger.info("Removed contact %s", contact_id)
                return 1
            case NotFound():
                raise ContactNotFoundError(contact_id)
