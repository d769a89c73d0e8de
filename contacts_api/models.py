"""Database models for the Contacts API.

Ownership is expressed through plain foreign key columns. Records are
looked up through owner-scoped queries in :mod:`contacts_api.crud`
rather than through relationship attributes.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from .database import Base


class TimestampMixin:
    """Creation and modification timestamps maintained by the database."""

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )


class User(TimestampMixin, Base):
    """
    SQLAlchemy model representing an application user.

    ``token`` holds the opaque session token issued on login and is
    cleared on logout.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    token = Column(String(100), unique=True, index=True, nullable=True)


class Contact(TimestampMixin, Base):
    """A contact entry owned by exactly one user."""

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(20), nullable=True)

    #: Identifier of the owning user
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class Address(TimestampMixin, Base):
    """A postal address attached to a contact."""

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    street = Column(String(200), nullable=True)
    city = Column(String(100), nullable=True)
    province = Column(String(100), nullable=True)
    country = Column(String(100), nullable=False)
    postal_code = Column(String(10), nullable=True)

    #: Identifier of the contact this address belongs to
    contact_id = Column(
        Integer,
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
