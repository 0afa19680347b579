"""Certificate Schema Routes: read a schema version."""

from fastapi import APIRouter, Depends

from certledger.api.dependencies import get_world_state
from certledger.core.records import to_document
from certledger.infrastructure.world_state import WorldStateManager
from certledger.services.certificate_contract import create_contract

router = APIRouter(prefix="/api/v1/schemas", tags=["schemas"])


@router.get("/{version}")
async def get_schema(
    version: str, world_state: WorldStateManager = Depends(get_world_state),
):
    async with world_state.transaction() as ledger:
        schema = await create_contract(ledger).query_certificate_schema(version)
    return to_document(schema)
