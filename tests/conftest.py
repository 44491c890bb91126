"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the test environment goes in first.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from bookshelf.database import Base, get_db  # noqa: E402
from bookshelf.main import app  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "Strong1!pass"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from bookshelf import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Factory registering a user through the API; returns the new user id."""

    def _register(email="ada@example.com", username=None, name="Ada Lovelace", password=PASSWORD):
        payload = {"name": name, "email": email, "password": password}
        if username:
            payload["username"] = username
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["userId"]

    return _register


@pytest.fixture
def login_user(client):
    """Factory logging a user in; the client keeps the session cookie."""

    def _login(email="ada@example.com", password=PASSWORD):
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response

    return _login


@pytest.fixture
def registered_user(register_user):
    """A registered user; the client holds no session yet."""
    user_id = register_user(username="ada")
    return {"id": user_id, "email": "ada@example.com", "password": PASSWORD}


@pytest.fixture
def auth_client(client, registered_user, login_user):
    """The test client with a live session cookie for ``registered_user``."""
    login_user()
    return client
