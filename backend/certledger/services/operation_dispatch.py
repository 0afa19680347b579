"""Operation Dispatch: routes host-runtime operation names to contract methods.

Invariants:
    - Operation names are exactly the ones the ledger host invokes
      (InitLedger, issueCertificate, ..., queryAll)
    - Every name -> (method, arity) mapping is visible in one dict
    - Arguments are positional strings; a wrong count raises OperationArgumentsError
    - Unknown names raise UnknownOperationError
"""

import logging
from typing import Awaitable, Callable

from certledger.core.errors import OperationArgumentsError, UnknownOperationError
from certledger.core.records import LedgerRecord
from certledger.services.certificate_contract import CertificateContract

logger = logging.getLogger(__name__)

OperationResult = LedgerRecord | list[LedgerRecord]


class OperationDispatch:
    """Routes operation name -> contract method. Explicit registration."""

    def __init__(self, contract: CertificateContract):
        self._handlers: dict[str, tuple[Callable[..., Awaitable[OperationResult]], int]] = {
            # Writes
            "InitLedger": (contract.init_ledger, 0),
            "issueCertificate": (contract.issue_certificate, 7),
            "registerUniversity": (contract.register_university, 4),

            # Point reads
            "queryUniversityProfileByName": (contract.query_university_profile_by_name, 1),
            "queryCertificateSchema": (contract.query_certificate_schema, 1),
            "queryCertificateByUUID": (contract.query_certificate_by_uuid, 1),

            # Selector queries
            "getAllCertificateByStudent": (contract.get_all_certificate_by_student, 1),
            "getAllCertificateByUniversity": (contract.get_all_certificate_by_university, 1),
            "queryAll": (contract.query_all, 0),
        }

    @property
    def operations(self) -> list[str]:
        return list(self._handlers)

    async def execute(self, operation: str, args: list[str]) -> OperationResult:
        """Invoke `operation` with positional string arguments."""
        entry = self._handlers.get(operation)
        if entry is None:
            logger.warning(
                f"Unknown operation requested: {operation}",
                extra={"operation": operation, "error_code": "UNKNOWN_OPERATION"},
            )
            raise UnknownOperationError(operation)
        handler, arity = entry
        if len(args) != arity:
            raise OperationArgumentsError(operation, arity, len(args))
        return await handler(*args)
