"""Authentication helpers: password hashing, opaque tokens and the
current-user dependency."""

import logging
import uuid

from fastapi import Depends
from fastapi.security import APIKeyHeader
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from . import crud, errors
from .database import get_db
from .models import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
token_header = APIKeyHeader(name="Authorization", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Compare a plain password with its hashed value."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate a password hash using the configured context."""
    return pwd_context.hash(password)


def generate_token() -> str:
    """Create a new opaque session token."""
    return str(uuid.uuid4())


def parse_token(header_value: str | None) -> str | None:
    """
    Extract the token from an ``Authorization`` header value.

    The raw token is accepted as is; a ``Bearer`` prefix is stripped.

    Args:
        header_value (str | None): Header value, if present.

    Returns:
        str | None: Token, or ``None`` when the header is missing or blank.
    """
    if not header_value:
        return None
    value = header_value.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


def authenticate_user(db: Session, username: str, password: str) -> User:
    """
    Check credentials and return the matching user.

    Unknown usernames and wrong passwords raise the same error so
    callers cannot tell which one failed.

    Raises:
        ApiError: 401 with the generic wrong-credentials message.
    """
    user = crud.get_user_by_username(db, username)
    if not user or not verify_password(password, user.password):
        logger.info("Failed login for username %r", username)
        raise errors.wrong_credentials()
    return user


def get_current_user(
    authorization: str | None = Depends(token_header),
    db: Session = Depends(get_db),
) -> User:
    """Dependency that resolves the authenticated user from the token header."""

    token = parse_token(authorization)
    if token is None:
        raise errors.unauthorized()
    user = crud.get_user_by_token(db, token)
    if user is None:
        raise errors.unauthorized()
    return user
