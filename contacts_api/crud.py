"""CRUD operations for users, contacts and addresses.

This module contains database interaction logic, isolated from FastAPI
route handlers. Contact and address lookups are always scoped by their
owner so records of other users are indistinguishable from missing ones.
"""

import math

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import errors, models, schemas


def create_user(
    db: Session, user_in: schemas.UserCreate, hashed_password: str
) -> models.User:
    """
    Create and persist a new user.

    Args:
        db (Session): SQLAlchemy database session.
        user_in (UserCreate): Incoming user data.
        hashed_password (str): Securely hashed password.

    Raises:
        ApiError: If the username is already registered.

    Returns:
        User: Newly created user instance.
    """
    if get_user_by_username(db, user_in.username):
        raise errors.validation_error("username", errors.USERNAME_TAKEN_MESSAGE)

    user = models.User(
        username=user_in.username,
        password=hashed_password,
        name=user_in.name,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise errors.validation_error("username", errors.USERNAME_TAKEN_MESSAGE)
    db.refresh(user)
    return user


def get_user_by_username(db: Session, username: str) -> models.User | None:
    """
    Retrieve a user by username.

    Args:
        db (Session): Database session.
        username (str): Login name.

    Returns:
        User | None: User if found, otherwise ``None``.
    """
    return db.execute(
        select(models.User).where(models.User.username == username)
    ).scalar_one_or_none()


def get_user_by_token(db: Session, token: str) -> models.User | None:
    """Retrieve the user holding the given session token."""
    return db.execute(
        select(models.User).where(models.User.token == token)
    ).scalar_one_or_none()


def update_user_token(
    db: Session, user: models.User, token: str | None
) -> models.User:
    """
    Store a new session token, or clear it with ``None``.

    Args:
        db (Session): Database session.
        user (User): Target user.
        token (str | None): Token to store.

    Returns:
        User: Updated user instance.
    """
    user.token = token
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: models.User, changes: dict) -> models.User:
    """
    Apply profile changes to a user.

    Args:
        db (Session): Database session.
        user (User): Target user.
        changes (dict): Column values to set. ``password`` must already be
            hashed.

    Returns:
        User: Updated user instance.
    """
    for key, value in changes.items():
        setattr(user, key, value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_contact(
    db: Session, contact_in: schemas.ContactCreate, user: models.User
) -> models.Contact:
    """
    Create a new contact owned by the given user.

    Args:
        db (Session): Database session.
        contact_in (ContactCreate): Contact data.
        user (User): Owner of the contact.

    Returns:
        Contact: Newly created contact.
    """
    contact = models.Contact(**contact_in.model_dump(), user_id=user.id)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def get_contact(db: Session, contact_id: int, user: models.User):
    """
    Retrieve a single contact owned by the given user.

    Args:
        db (Session): Database session.
        contact_id (int): Contact identifier.
        user (User): Contact owner.

    Returns:
        Contact | None: Contact if found, otherwise ``None``.
    """
    return db.execute(
        select(models.Contact).where(
            models.Contact.id == contact_id,
            models.Contact.user_id == user.id,
        )
    ).scalar_one_or_none()


def search_contacts(
    db: Session,
    user: models.User,
    name: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    page: int = 1,
    size: int = 10,
):
    """
    Search the contacts of a user, one page at a time.

    ``name`` matches first or last name; every filter is a
    case-insensitive substring match and filters are combined with AND.

    Args:
        db (Session): Database session.
        user (User): Contact owner.
        name (str | None): Name fragment.
        email (str | None): Email fragment.
        phone (str | None): Phone fragment.
        page (int): 1-based page number.
        size (int): Page size.

    Returns:
        tuple[list[Contact], PageMeta]: Page items and pagination metadata.
    """
    conditions = [models.Contact.user_id == user.id]
    if name:
        like_name = f"%{name}%"
        conditions.append(
            or_(
                models.Contact.first_name.ilike(like_name),
                models.Contact.last_name.ilike(like_name),
            )
        )
    if email:
        conditions.append(models.Contact.email.ilike(f"%{email}%"))
    if phone:
        conditions.append(models.Contact.phone.ilike(f"%{phone}%"))

    total = db.scalar(
        select(func.count()).select_from(models.Contact).where(*conditions)
    )
    items = db.scalars(
        select(models.Contact)
        .where(*conditions)
        .order_by(models.Contact.id)
        .offset((page - 1) * size)
        .limit(size)
    ).all()

    meta = schemas.PageMeta(
        current_page=page,
        per_page=size,
        last_page=max(1, math.ceil(total / size)),
        total=total,
    )
    return items, meta


def update_contact(db: Session, contact: models.Contact, changes: dict):
    """
    Update mutable fields of a contact.

    Args:
        db (Session): Database session.
        contact (Contact): Contact instance.
        changes (dict): Fields to update.

    Returns:
        Contact: Updated contact.
    """
    for key, value in changes.items():
        setattr(contact, key, value)

    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def delete_contact(db: Session, contact: models.Contact):
    """
    Delete a contact together with its addresses.

    Args:
        db (Session): Database session.
        contact (Contact): Contact to delete.
    """
    db.execute(delete(models.Address).where(models.Address.contact_id == contact.id))
    db.delete(contact)
    db.commit()
    return None


def create_address(
    db: Session, address_in: schemas.AddressCreate, contact: models.Contact
) -> models.Address:
    """Create an address for an already owner-checked contact."""
    address = models.Address(**address_in.model_dump(), contact_id=contact.id)
    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def get_address(db: Session, address_id: int, contact: models.Contact):
    """
    Retrieve an address belonging to the given contact.

    Returns:
        Address | None: Address if found, otherwise ``None``.
    """
    return db.execute(
        select(models.Address).where(
            models.Address.id == address_id,
            models.Address.contact_id == contact.id,
        )
    ).scalar_one_or_none()


def get_addresses(db: Session, contact: models.Contact):
    return db.scalars(
        select(models.Address)
        .where(models.Address.contact_id == contact.id)
        .order_by(models.Address.id)
    ).all()


def update_address(db: Session, address: models.Address, changes: dict):
    for key, value in changes.items():
        setattr(address, key, value)

    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def delete_address(db: Session, address: models.Address):
    db.delete(address)
    db.commit()
    return None
