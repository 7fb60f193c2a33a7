"""Service test fixtures — FastAPI test client with an injected resolver bundle.

Invariants:
    - get_resolvers dependency overridden: ASGITransport does not run the lifespan
    - overrides and app.state are restored after every test

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the real middleware and
      error handlers without a network socket
"""

import pytest
from httpx import ASGITransport, AsyncClient

from reachq.api.dependencies import get_resolvers
from reachq.main import app


@pytest.fixture
async def client(resolvers):
    """FastAPI test client with the production resolvers injected."""
    app.dependency_overrides[get_resolvers] = lambda: resolvers
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def bare_client():
    """Client with no resolver bundle loaded (pre-startup state)."""
    original = getattr(app.state, "resolvers", None)
    app.state.resolvers = None
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.resolvers = original
