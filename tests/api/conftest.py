"""Fixtures for API tests: dependency overrides and an ASGI client."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from sims.api.main import app


@pytest.fixture
def overrides():
    """Register dependency overrides for one test; cleared afterwards."""
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
async def client(overrides) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
