"""User registration, login, profile and logout routes."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from . import crud, schemas
from .auth import (
    authenticate_user,
    generate_token,
    get_current_user,
    get_password_hash,
)
from .core import get_settings
from .database import get_db
from .limiter import rate_limit
from .models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])
settings = get_settings()

login_limit = rate_limit(
    times=settings.LOGIN_RATE_LIMIT_TIMES, seconds=settings.LOGIN_RATE_LIMIT_SECONDS
)
current_limit = rate_limit(
    times=settings.CURRENT_RATE_LIMIT_TIMES,
    seconds=settings.CURRENT_RATE_LIMIT_SECONDS,
)


@router.post(
    "", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED
)
def register(user_in: schemas.UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user.

    Args:
        user_in (UserCreate): Username, password and display name.
        db (Session): Database session.

    Raises:
        ApiError: If the username is already registered.

    Returns:
        UserResponse: The created user.
    """
    user = crud.create_user(db, user_in, get_password_hash(user_in.password))
    logger.info("Registered user %s", user.username)
    return {"data": user}


@router.post(
    "/login",
    response_model=schemas.UserTokenResponse,
    dependencies=[Depends(login_limit)],
)
def login(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    """
    Verify credentials and issue a fresh session token.

    Raises:
        ApiError: 401 when the username is unknown or the password is wrong.

    Returns:
        UserTokenResponse: The user together with the new token.
    """
    user = authenticate_user(db, credentials.username, credentials.password)
    user = crud.update_user_token(db, user, generate_token())
    logger.info("User %s logged in", user.username)
    return {"data": user}


@router.get(
    "/current",
    response_model=schemas.UserResponse,
    dependencies=[Depends(current_limit)],
)
def read_current(current_user: User = Depends(get_current_user)):
    """
    Retrieve the currently authenticated user.

    Returns:
        UserResponse: User profile information.
    """
    return {"data": current_user}


@router.patch("/current", response_model=schemas.UserResponse)
def update_current(
    changes: schemas.UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update the name and/or password of the authenticated user.

    Only fields present in the request are changed.
    """
    updates = changes.model_dump(exclude_unset=True, exclude_none=True)
    if "password" in updates:
        updates["password"] = get_password_hash(updates["password"])
    user = crud.update_user(db, current_user, updates)
    return {"data": user}


@router.delete("/logout", response_model=schemas.TrueResponse)
def logout(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Revoke the session token of the authenticated user."""
    crud.update_user_token(db, current_user, None)
    logger.info("User %s logged out", current_user.username)
    return schemas.TrueResponse()
