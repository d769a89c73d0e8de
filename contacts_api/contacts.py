"""Contact management routes for the Contacts API."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from . import crud, errors, schemas
from .auth import get_current_user
from .database import get_db
from .models import User

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


def get_owned_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Dependency resolving ``contact_id`` among the current user's contacts.

    Raises:
        ApiError: 404 if the contact is missing or owned by someone else.
    """
    contact = crud.get_contact(db, contact_id, current_user)
    if not contact:
        raise errors.not_found()
    return contact


@router.post("", response_model=schemas.ContactResponse, status_code=201)
def create_contact(
    contact_in: schemas.ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a new contact owned by the current user.

    Args:
        contact_in (ContactCreate): Contact input data.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        ContactResponse: Created contact.
    """
    return {"data": crud.create_contact(db, contact_in, current_user)}


@router.get("", response_model=schemas.ContactListResponse)
def search_contacts(
    name: str | None = Query(None),
    email: str | None = Query(None),
    phone: str | None = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Search the current user's contacts.

    Args:
        name (str | None): Matches first or last name.
        email (str | None): Matches email.
        phone (str | None): Matches phone.
        page (int): 1-based page number.
        size (int): Page size.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        ContactListResponse: Page of contacts with pagination metadata.
    """
    items, meta = crud.search_contacts(
        db, current_user, name=name, email=email, phone=phone, page=page, size=size
    )
    return {"data": items, "meta": meta}


@router.get("/{contact_id}", response_model=schemas.ContactResponse)
def get_contact(contact=Depends(get_owned_contact)):
    """Retrieve a single contact by ID for the current user."""
    return {"data": contact}


@router.put("/{contact_id}", response_model=schemas.ContactResponse)
def update_contact(
    changes: schemas.ContactUpdate,
    contact=Depends(get_owned_contact),
    db: Session = Depends(get_db),
):
    """
    Replace the fields of an existing contact.

    Optional fields missing from the request are cleared.
    """
    return {"data": crud.update_contact(db, contact, changes.model_dump())}


@router.delete("/{contact_id}", response_model=schemas.TrueResponse)
def remove_contact(
    contact=Depends(get_owned_contact),
    db: Session = Depends(get_db),
):
    """Delete a contact owned by the current user, with its addresses."""
    crud.delete_contact(db, contact)
    return schemas.TrueResponse()
