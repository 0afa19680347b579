"""University Routes: register and look up university profiles by name."""

from fastapi import APIRouter, Depends, status

from certledger.api.dependencies import get_world_state
from certledger.core.records import to_document
from certledger.infrastructure.world_state import WorldStateManager
from certledger.schemas.requests import UniversityRegister
from certledger.services.certificate_contract import create_contract

router = APIRouter(prefix="/api/v1/universities", tags=["universities"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_university(
    body: UniversityRegister,
    world_state: WorldStateManager = Depends(get_world_state),
):
    """Register a university; re-registering a name overwrites unless exclusive."""
    async with world_state.transaction() as ledger:
        university = await create_contract(ledger).register_university(
            body.name,
            body.public_key,
            body.location,
            body.description,
            exclusive=body.exclusive,
        )
    return to_document(university)


@router.get("/{name}")
async def get_university(
    name: str, world_state: WorldStateManager = Depends(get_world_state),
):
    async with world_state.transaction() as ledger:
        university = await create_contract(ledger).query_university_profile_by_name(name)
    return to_document(university)
