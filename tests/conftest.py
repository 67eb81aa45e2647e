"""
Test configuration and fixtures for the Neropage API.

Every test gets a fresh in-memory store injected through
app.dependency_overrides, so tests never share state.
"""

import os
import tempfile
from typing import Generator

from dotenv import load_dotenv

load_dotenv()

# Settings are read at import time, so configure before importing the app
os.environ["DATABASE_URL"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ["SINGLE_TENANT_MODE"] = "false"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="neropage-uploads-"))
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "neropage-test-logs"))

import pytest
from fastapi.testclient import TestClient

from neropage.platform.storage.dependencies import get_storage
from neropage.platform.storage.memory import MemoryStorage

DEFAULT_PASSWORD = "supersecret123"


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from neropage.main import app

    return app


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture(scope="function")
def client(test_app, storage) -> Generator[TestClient, None, None]:
    """
    A clean TestClient per test, wired to that test's own MemoryStorage.
    The client keeps cookies, so the CSRF session survives between calls.
    """
    test_app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.pop(get_storage, None)


def signup(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    response = client.post("/api/auth/signup", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def csrf_token(client: TestClient) -> str:
    response = client.get("/api/csrf-token")
    assert response.status_code == 200
    return response.json()["csrfToken"]


def auth_headers(token: str, csrf: str = None) -> dict:
    headers = {"Authorization": f"Bearer {token}"}
    if csrf is not None:
        headers["csrf-token"] = csrf
    return headers


@pytest.fixture
def alice(client) -> dict:
    """Signed-up user with ready-made headers for reads and for mutations."""
    data = signup(client, "alice")
    token = data["accessToken"]
    data["headers"] = auth_headers(token)
    data["mutate"] = auth_headers(token, csrf_token(client))
    return data


@pytest.fixture
def bob(client, alice) -> dict:
    data = signup(client, "bob")
    token = data["accessToken"]
    data["headers"] = auth_headers(token)
    # one session cookie per TestClient, so reuse the token alice's fixture issued
    data["mutate"] = auth_headers(token, alice["mutate"]["csrf-token"])
    return data
