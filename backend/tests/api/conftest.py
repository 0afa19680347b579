"""API test fixtures: FastAPI test client over an in-memory SQLite world state.

Invariants:
    - Every test gets a fresh world_state table
    - app.state.world_state patched directly (ASGITransport does not run lifespan)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from certledger.infrastructure.world_state import WorldStateManager
from certledger.main import app


@pytest.fixture
async def world_state():
    manager = WorldStateManager("sqlite+aiosqlite:///:memory:")
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest.fixture
async def client(world_state):
    original = getattr(app.state, "world_state", None)
    app.state.world_state = world_state
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.world_state = original
