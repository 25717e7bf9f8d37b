"""Fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from studio.api.main import app

STAFF_HEADERS = {"X-User-Id": "staff-1", "X-User-Name": "Priya"}
ADMIN_HEADERS = {"X-User-Id": "admin-1", "X-User-Name": "Asha", "X-User-Role": "ADMIN"}


@pytest.fixture
async def client(migrated_db) -> AsyncGenerator[AsyncClient, None]:
    """Client for the app wired to a freshly migrated database."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def staff_headers() -> dict[str, str]:
    return dict(STAFF_HEADERS)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return dict(ADMIN_HEADERS)
