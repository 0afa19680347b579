"""Transaction Route: invoke any contract operation by its host-runtime name.

Invariants:
    - POST /transactions/{operation} with {"args": [...]} mirrors a chaincode invoke
    - Single records come back as one object, queries as a list
"""

from fastapi import APIRouter, Depends

from certledger.api.dependencies import get_world_state
from certledger.core.records import to_document
from certledger.infrastructure.world_state import WorldStateManager
from certledger.schemas.requests import TransactionInvoke
from certledger.services.certificate_contract import create_contract
from certledger.services.operation_dispatch import OperationDispatch

router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.post("/{operation}")
async def invoke_operation(
    operation: str,
    body: TransactionInvoke,
    world_state: WorldStateManager = Depends(get_world_state),
):
    async with world_state.transaction() as ledger:
        result = await OperationDispatch(create_contract(ledger)).execute(
            operation, body.args,
        )
    if isinstance(result, list):
        payload = [to_document(r) for r in result]
    else:
        payload = to_document(result)
    return {"operation": operation, "result": payload}
