"""Ledger Initialization: writes the fixed certificate schema."""

from fastapi import APIRouter, Depends

from certledger.api.dependencies import get_world_state
from certledger.core.records import to_document
from certledger.infrastructure.world_state import WorldStateManager
from certledger.services.certificate_contract import create_contract

router = APIRouter(prefix="/api/v1/ledger", tags=["ledger"])


@router.post("/init")
async def init_ledger(world_state: WorldStateManager = Depends(get_world_state)):
    """Create (or overwrite) the Bachelor/v1 schema record."""
    async with world_state.transaction() as ledger:
        schema = await create_contract(ledger).init_ledger()
    return to_document(schema)
