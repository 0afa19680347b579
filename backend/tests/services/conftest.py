"""Service test fixtures: fake ledger, contract, and SQLite-backed world state.

Invariants:
    - Every test gets a fresh FakeLedger and a fresh in-memory SQLite world state
"""

import pytest

from certledger.infrastructure.world_state import WorldStateManager
from certledger.services.certificate_contract import create_contract
from tests.services.fake_ledger import FakeLedger


@pytest.fixture
def fake_ledger():
    return FakeLedger()


@pytest.fixture
def contract(fake_ledger):
    return create_contract(fake_ledger)


@pytest.fixture
async def world_state():
    manager = WorldStateManager("sqlite+aiosqlite:///:memory:")
    await manager.create_tables()
    yield manager
    await manager.dispose()
