"""
Pytest configuration and shared fixtures.

Tests run against a throwaway SQLite file; the environment is set before
any app module is imported so the engine binds to it.
"""

import asyncio
import os
import tempfile
from pathlib import Path

_TEST_DB = Path(tempfile.gettempdir()) / f"todo_api_test_{os.getpid()}.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB}"
os.environ["AUTH_ENABLED"] = "true"
os.environ["CREATE_TABLES_ON_STARTUP"] = "true"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.db.session import AsyncSessionLocal, create_tables, drop_tables
from app.main import app

# Test credentials
TEST_PASSWORD = "secret123"
ALICE_EMAIL = "alice@example.com"
BOB_EMAIL = "bob@example.com"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no database")
    config.addinivalue_line("markers", "db: uses the SQLite test database")


def pytest_sessionfinish(session, exitstatus):
    if _TEST_DB.exists():
        _TEST_DB.unlink()


async def _reset_database():
    await drop_tables()
    await create_tables()


@pytest.fixture
def client():
    """TestClient over a freshly created schema."""
    asyncio.run(_reset_database())
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def db_session():
    """AsyncSession over a freshly created schema."""
    await _reset_database()
    async with AsyncSessionLocal() as session:
        yield session


def register(client: TestClient, name: str, email: str, password: str = TEST_PASSWORD) -> dict:
    """Register a user and return the auth payload (token, expires, user)."""
    response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    """Auth headers for a registered user."""
    return bearer(register(client, "Alice", ALICE_EMAIL)["token"])


@pytest.fixture
def bob(client):
    """Auth headers for a second, unrelated user."""
    return bearer(register(client, "Bob", BOB_EMAIL)["token"])


def create_task(client: TestClient, headers: dict, **fields) -> dict:
    """Create a task and return its data payload."""
    body = {"title": "Task", "priority": 1}
    body.update(fields)
    response = client.post("/tasks", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]
