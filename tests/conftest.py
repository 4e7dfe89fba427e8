"""
Pytest fixtures for auth service tests
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from auth_service.main import app
from auth_service.models.user import ProfileRecord, ProviderSession, ProviderUser
from auth_service.utils.cookies import CookiePolicy
from auth_service.utils.dependencies import (
    get_auth_provider, get_profile_repository, get_cookie_policy
)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


CREATED_AT = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
UPDATED_AT = datetime(2025, 1, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def provider_user() -> ProviderUser:
    """Identity as returned by the auth provider"""
    return ProviderUser(
        id="6c1f9a52-0000-4000-8000-000000000001",
        email="a@b.com",
        created_at=CREATED_AT,
        updated_at=UPDATED_AT,
        user_metadata={"isUserVerified": True}
    )


@pytest.fixture
def provider_session() -> ProviderSession:
    return ProviderSession(access_token="AT1", refresh_token="RT1", expires_at=1735732800)


@pytest.fixture
def profile_record() -> ProfileRecord:
    return ProfileRecord(
        id=1,
        user_id="6c1f9a52-0000-4000-8000-000000000001",
        email="a@b.com",
        fullname="A B",
        role="ADMIN",
        avatar=None
    )


@pytest.fixture
def mock_provider(provider_user, provider_session):
    """Auth provider adapter with every call succeeding"""
    provider = MagicMock()
    provider.sign_in = AsyncMock(return_value=(provider_user, provider_session))
    provider.sign_up = AsyncMock(return_value=provider_user)
    provider.get_user = AsyncMock(return_value=provider_user)
    provider.refresh_session = AsyncMock(
        return_value=ProviderSession(access_token="AT2", refresh_token="RT2")
    )
    provider.sign_out = AsyncMock(return_value=None)
    provider.delete_user = AsyncMock(return_value=None)
    provider.verify_email = AsyncMock(return_value={"user_id": provider_user.id, "email": provider_user.email})
    provider.update_password = AsyncMock(return_value={"user_id": provider_user.id, "email": provider_user.email})
    provider.send_password_reset = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def mock_repository(profile_record):
    """Profile repository holding a single row"""
    repository = MagicMock()
    repository.get_profile_by_email = AsyncMock(return_value=profile_record)

    async def create_profile(record):
        record.id = 42
        return record

    repository.create_profile = AsyncMock(side_effect=create_profile)
    return repository


@pytest.fixture
def cookie_policy() -> CookiePolicy:
    return CookiePolicy()


@pytest.fixture
def client(mock_provider, mock_repository, cookie_policy):
    """Test client with the provider, repository and cookie policy overridden"""
    app.dependency_overrides[get_auth_provider] = lambda: mock_provider
    app.dependency_overrides[get_profile_repository] = lambda: mock_repository
    app.dependency_overrides[get_cookie_policy] = lambda: cookie_policy
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db_pool():
    """Mock asyncpg database pool"""
    pool = MagicMock()
    conn = AsyncMock()

    # Configure connection context manager
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool, conn
