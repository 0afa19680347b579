"""Certificate Routes: issue certificates and read them by UUID, holder or issuer.

Invariants:
    - One world-state transaction per request
    - List endpoints return every match (no pagination); empty list when none
    - Responses use the ledger's camelCase member names
"""

from fastapi import APIRouter, Depends, status

from certledger.api.dependencies import get_world_state
from certledger.core.records import to_document
from certledger.infrastructure.world_state import WorldStateManager
from certledger.schemas.requests import CertificateIssue
from certledger.services.certificate_contract import create_contract

router = APIRouter(prefix="/api/v1/certificates", tags=["certificates"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def issue_certificate(
    body: CertificateIssue,
    world_state: WorldStateManager = Depends(get_world_state),
):
    """Issue a certificate; overwrites an existing UUID unless exclusive."""
    async with world_state.transaction() as ledger:
        certificate = await create_contract(ledger).issue_certificate(
            body.cert_hash,
            body.university_signature,
            body.student_signature,
            body.date_of_issuing,
            body.cert_uuid,
            body.university_pk,
            body.student_pk,
            exclusive=body.exclusive,
        )
    return to_document(certificate)


@router.get("")
async def list_certificates(world_state: WorldStateManager = Depends(get_world_state)):
    async with world_state.transaction() as ledger:
        certificates = await create_contract(ledger).query_all()
    return [to_document(c) for c in certificates]


@router.get("/by-student/{student_pk}")
async def certificates_by_student(
    student_pk: str, world_state: WorldStateManager = Depends(get_world_state),
):
    async with world_state.transaction() as ledger:
        certificates = await create_contract(ledger).get_all_certificate_by_student(
            student_pk,
        )
    return [to_document(c) for c in certificates]


@router.get("/by-university/{university_pk}")
async def certificates_by_university(
    university_pk: str, world_state: WorldStateManager = Depends(get_world_state),
):
    async with world_state.transaction() as ledger:
        certificates = await create_contract(ledger).get_all_certificate_by_university(
            university_pk,
        )
    return [to_document(c) for c in certificates]


@router.get("/{cert_uuid}")
async def get_certificate(
    cert_uuid: str, world_state: WorldStateManager = Depends(get_world_state),
):
    async with world_state.transaction() as ledger:
        certificate = await create_contract(ledger).query_certificate_by_uuid(cert_uuid)
    return to_document(certificate)
