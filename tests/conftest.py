# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make _helpers importable from test files
sys.path.insert(0, str(Path(__file__).parent))

from _helpers import PASSWORD, FakeSupabase, seed_church  # noqa: E402
from core.local_storage import LocalStorage  # noqa: E402
from core.roles import RoleResolver  # noqa: E402
from core.scheduler import ReceiptScheduler  # noqa: E402
from core.session import SessionManager  # noqa: E402
from core.state import ChurchState, EntityServices  # noqa: E402
from main import create_app, wire_app_state  # noqa: E402


# ============================================================
# Fixtures
# ============================================================
@pytest.fixture
def fake_db() -> FakeSupabase:
    db = FakeSupabase()
    seed_church(db)
    return db


@pytest.fixture
def storage() -> LocalStorage:
    return LocalStorage()


@pytest.fixture
async def receipts() -> ReceiptScheduler:
    scheduler = ReceiptScheduler(delay_seconds=0.05)
    yield scheduler
    scheduler.shutdown()


@pytest.fixture
def church(fake_db, receipts) -> ChurchState:
    return ChurchState(fake_db, EntityServices.for_client(fake_db), receipts)


@pytest.fixture
def resolver(fake_db) -> RoleResolver:
    return RoleResolver(fake_db, timeout=0.5)


@pytest.fixture
def session(fake_db, resolver, storage) -> SessionManager:
    return SessionManager(fake_db, resolver, storage)


@pytest.fixture(scope="function")
def app(fake_db, storage, receipts):
    """FastAPI app wired to the in-memory Supabase fake (lifespan not run)."""
    app = create_app()
    wire_app_state(app, fake_db, admin_client=fake_db, storage=storage, receipts=receipts)
    return app


@pytest.fixture(scope="function")
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def login(client):
    """Sign in through the API as one of the seeded accounts."""

    def _login(email: str):
        response = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return response.json()

    return _login
