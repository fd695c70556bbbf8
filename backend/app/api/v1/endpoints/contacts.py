"""Per-user contacts collection: ``/users/{user_id}/contacts``.

Every route requires the path user to be the authenticated user. Bulk writes
and partial updates are routed to the collection so that they are rejected by
its capability table rather than by a missing route.
"""

from typing import Any, NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_path_user
from app.core.database import get_db
from app.schemas.contacts import ContactIn, ContactView, RemoveResponse
from app.services.contact_store import ContactStore
from app.services.contacts import (
    ContactCollection,
    ContactNotFoundError,
    ContactsError,
    DuplicateContactError,
    OperationNotEnabledError,
)

router = APIRouter(dependencies=[Depends(get_path_user)])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_STATUS_BY_ERROR: dict[type[ContactsError], int] = {
    OperationNotEnabledError: status.HTTP_405_METHOD_NOT_ALLOWED,
    ContactNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateContactError: status.HTTP_409_CONFLICT,
}


def get_contact_collection(db: Session = Depends(get_db)) -> ContactCollection:
    return ContactCollection(ContactStore(db))


def _raise_http(exc: ContactsError) -> NoReturn:
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=status_code, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


@router.get("", response_model=list[ContactView], response_model_exclude_none=True)
def list_contacts(
    query: str | None = Query(
        None,
        description="Exact match against firstName, lastName or email",
    ),
    owner: str = Depends(get_path_user),
    collection: ContactCollection = Depends(get_contact_collection),
):
    """List the user's contacts ordered by first name. Not paginated."""
    try:
        return collection.find(owner, query)
    except ContactsError as exc:
        _raise_http(exc)


@router.post(
    "",
    response_model=ContactView,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_contact(
    payload: ContactIn | list[Any] = Body(...),
    owner: str = Depends(get_path_user),
    collection: ContactCollection = Depends(get_contact_collection),
):
    """Create a single contact. Posting an array (bulk insert) is not enabled."""
    try:
        if isinstance(payload, list):
            return collection.insert(payload, owner)
        return collection.insert_object(payload.to_document(), owner)
    except ContactsError as exc:
        _raise_http(exc)


@router.put("")
def save_contacts(
    owner: str = Depends(get_path_user),
    collection: ContactCollection = Depends(get_contact_collection),
):
    try:
        return collection.save([], owner)
    except ContactsError as exc:
        _raise_http(exc)


@router.patch("")
def update_contacts(
    owner: str = Depends(get_path_user),
    collection: ContactCollection = Depends(get_contact_collection),
):
    try:
        return collection.update({}, owner)
    except ContactsError as exc:
        _raise_http(exc)


@router.delete("")
def remove_contacts(
    owner: str = Depends(get_path_user),
    collection: ContactCollection = Depends(get_contact_collection),
):
    try:
        return collection.remove(owner)
    except ContactsError as exc:
        _raise_http(exc)


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


@router.get("/{contact_id}", response_model=ContactView, response_model_exclude_none=True)
def get_contact(
    contact_id: str,
    collection: ContactCollection = Depends(get_contact_collection),
):
    try:
        return collection.find_object(contact_id)
    except ContactsError as exc:
        _raise_http(exc)


@router.put("/{contact_id}", response_model=ContactView, response_model_exclude_none=True)
def save_contact(
    contact_id: str,
    payload: ContactIn,
    owner: str = Depends(get_path_user),
    collection: ContactCollection = Depends(get_contact_collection),
):
    """Replace an existing contact with the full object in the body.

    Saving never creates a contact; use POST on the collection for that.
    """
    document = payload.to_document()
    if document.get("id", contact_id) != contact_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Body id does not match the contact id in the path",
        )
    document["id"] = contact_id

    try:
        return collection.save_object(document, owner)
    except ContactsError as exc:
        _raise_http(exc)


@router.patch("/{contact_id}")
def update_contact(
    contact_id: str,
    owner: str = Depends(get_path_user),
    collection: ContactCollection = Depends(get_contact_collection),
):
    try:
        return collection.update_object(contact_id, {}, owner)
    except ContactsError as exc:
        _raise_http(exc)


@router.delete("/{contact_id}", response_model=RemoveResponse)
def remove_contact(
    contact_id: str,
    collection: ContactCollection = Depends(get_contact_collection),
):
    try:
        return RemoveResponse(n=collection.remove_object(contact_id))
    except ContactsError as exc:
        _raise_http(exc)
