"""
Test configuration and fixtures for the Subscription API.

Provides shared fixtures for unit and integration tests.
"""

import pytest
import pytest_asyncio
from datetime import date, datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from subscription_api.domain.services import SubscriptionService
from subscription_api.domain.subscription import Subscription
from subscription_api.infrastructure.db.repositories import SubscriptionRepository


SAMPLE_USER_ID = UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_repository():
    """
    Mock for SubscriptionRepository.

    create() behaves like the real store: it assigns a new id and a
    single timestamp to created_at and updated_at.
    """
    mock = AsyncMock(spec=SubscriptionRepository)

    async def _create(subscription: Subscription) -> Subscription:
        now = datetime.now(timezone.utc)
        return subscription.model_copy(
            update={"id": uuid4(), "created_at": now, "updated_at": now}
        )

    mock.create.side_effect = _create
    mock.list.return_value = []
    mock.get_summary.return_value = 0
    return mock


@pytest.fixture
def service(mock_repository):
    """SubscriptionService wired to the mock repository."""
    return SubscriptionService(mock_repository)


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app(service):
    """Get the FastAPI application with the service dependency overridden."""
    from subscription_api.main import app
    from subscription_api.infrastructure.db.dependencies import get_subscription_service

    app.dependency_overrides[get_subscription_service] = lambda: service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Get synchronous test client."""
    return TestClient(app)


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the subscriptions table created."""
    from subscription_api.infrastructure.db import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def store_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Async client for the app backed by the SQLite store.

    Only the session dependency is replaced, so requests run through the
    real service and repository.
    """
    from subscription_api.main import app
    from subscription_api.infrastructure.db.database import get_session

    async def _get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def make_subscription():
    """Factory for stored Subscription entities."""
    def _make(**overrides) -> Subscription:
        now = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)
        defaults = {
            "id": uuid4(),
            "service_name": "Yandex Plus",
            "price": 400,
            "user_id": SAMPLE_USER_ID,
            "start_date": date(2025, 7, 1),
            "end_date": None,
            "created_at": now,
            "updated_at": now,
        }
        defaults.update(overrides)
        return Subscription(**defaults)
    return _make


@pytest.fixture
def sample_create_payload():
    """Valid create request body."""
    return {
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": str(SAMPLE_USER_ID),
        "start_date": "07-2025",
    }
