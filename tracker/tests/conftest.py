"""
Centralized Test Configuration.
"""

import itertools
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.pool import StaticPool

from tracker.app.main import app
from tracker.app.db.session import build_engine, build_session_factory, init_db, get_session_factory
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate, utc_timestamp
from tracker.app.services.parcel_store import ParcelStore
from tracker.app.services.parcel_service import ParcelService

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Client ids are drawn from a shared counter so tests never collide on a client
_client_ids = itertools.count(1000)


@pytest.fixture
async def test_engine():
    """Fresh in-memory database with the parcel table for each test."""
    engine = build_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
def store(session_factory):
    return ParcelStore(session_factory)


@pytest.fixture
def service(store):
    return ParcelService(store)


@pytest.fixture
def client_id():
    """A client id no other test uses."""
    return next(_client_ids)


@pytest.fixture
def make_parcel(client_id):
    """Factory for registered test parcels."""
    def _make(client=None, status=ParcelStatus.REGISTERED.value, address="test"):
        return ParcelCreate(
            client=client_id if client is None else client,
            status=status,
            address=address,
            created_at=utc_timestamp(),
        )
    return _make


@pytest.fixture
async def client(session_factory):
    """Async client for testing, bound to the test database."""
    async def override_get_session_factory():
        return session_factory

    app.dependency_overrides[get_session_factory] = override_get_session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
