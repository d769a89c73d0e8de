# tests/conftest.py
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contacts_api import crud, models
from contacts_api.auth import get_password_hash
from contacts_api.database import Base, get_db
from contacts_api.schemas import ContactCreate
from main import app


# DB (SQLite in-memory for tests)
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# Client fixture: override DB dependency per test
@pytest.fixture()
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def seed_user(db_session, username, password, name, token=None):
    user = models.User(
        username=username,
        password=get_password_hash(password),
        name=name,
        token=token,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session):
    """User ``test`` with password ``test`` and session token ``test``."""
    return seed_user(db_session, "test", "test", "test", token="test")


@pytest.fixture()
def other_user(db_session):
    return seed_user(db_session, "test2", "test2", "test2", token="test2")


@pytest.fixture()
def auth_headers():
    return {"Authorization": "test"}


@pytest.fixture()
def test_contact(db_session, test_user):
    return crud.create_contact(
        db_session,
        ContactCreate(
            first_name="test",
            last_name="test",
            email="test@example.com",
            phone="111111",
        ),
        test_user,
    )
