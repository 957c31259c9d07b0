"""
Test configuration and fixtures for the shortlinks service.
Every test gets its own in-memory database, so tests are isolated.
"""

import os

# Cheap hashing for tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from src.shortlinks.api.deps import get_access_control
from src.shortlinks.db.session import Database
from src.shortlinks.main import app
from src.shortlinks.services.access_control import AccessControl


@pytest.fixture
def database():
    db = Database("sqlite://")
    yield db
    db.dispose()


@pytest.fixture
def access(database):
    return AccessControl.from_database(database)


@pytest.fixture
def client(access):
    """
    Create a test client with the access control dependency overridden.
    """
    app.dependency_overrides[get_access_control] = lambda: access

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def owner(access):
    """A registered account with its session token."""
    account, token = access.handle_register("a@test.com", "pw1")
    return account, token


@pytest.fixture
def other(access):
    account, token = access.handle_register("b@test.com", "pw2")
    return account, token
