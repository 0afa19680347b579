"""Certificate Contract: the record operations composed over an injected ledger stub.

Invariants:
    - Each method runs inside the caller's single ledger transaction and issues
      at most one put
    - Reads return fully decoded records or raise; never a partial/default record
    - Absent keys raise RecordNotFoundError; malformed bytes raise RecordSerializationError
    - Writes overwrite an existing key unless exclusive=True, which raises RecordExistsError
    - Written identities (certUUID, university name) pass check_identity first
    - init_ledger builds a fresh Schema on every call; no record is shared between calls
    - Multi-record reads return every match (possibly empty), in ledger order

Design Decisions:
    - Ledger stub injected through the constructor; create_contract() is the factory
"""

import logging

from certledger.core.domain_types import (
    CertUUID, DataType, LedgerKey, PublicKey, SchemaVersion, UniversityName,
)
from certledger.core.errors import RecordExistsError, RecordNotFoundError
from certledger.core.key_scheme import (
    certificate_key, check_identity, key_for, schema_key, split_key, university_key,
)
from certledger.core.ledger_protocols import LedgerStub
from certledger.core.query_builder import build_selector
from certledger.core.records import (
    Certificate, LedgerRecord, RecordT, Schema, University,
    decode_record, encode_record,
)

logger = logging.getLogger(__name__)

BACHELOR_TYPE = "Bachelor"
BACHELOR_VERSION = SchemaVersion("v1")
BACHELOR_ORDERING = ("universityName", "major", "departmentName", "cgpa")


class CertificateContract:
    """Certificate, university and schema operations over one ledger stub."""

    def __init__(self, ledger: LedgerStub):
        self.ledger = ledger

    # --- Writes -------------------------------------------------------------

    async def init_ledger(self) -> Schema:
        """Write the fixed Bachelor/v1 schema. Re-running overwrites it."""
        logger.info("InitLedger called", extra={"operation": "InitLedger"})
        schema = Schema(
            certificate_type=BACHELOR_TYPE,
            id=BACHELOR_VERSION,
            ordering=list(BACHELOR_ORDERING),
        )
        await self._put(schema, exclusive=False)
        return schema

    async def issue_certificate(
        self,
        cert_hash: str,
        university_signature: str,
        student_signature: str,
        date_of_issuing: str,
        cert_uuid: CertUUID,
        university_pk: PublicKey,
        student_pk: PublicKey,
        exclusive: bool = False,
    ) -> Certificate:
        """Store a new certificate under cert_<cert_uuid>; certNumber stays empty."""
        logger.info("issueCertificate called", extra={"operation": "issueCertificate"})
        certificate = Certificate(
            cert_hash=cert_hash,
            university_signature=university_signature,
            student_signature=student_signature,
            date_of_issuing=date_of_issuing,
            cert_number="",
            cert_uuid=check_identity(cert_uuid, "certUUID"),
            university_pk=university_pk,
            student_pk=student_pk,
        )
        await self._put(certificate, exclusive)
        return certificate

    async def register_university(
        self,
        name: UniversityName,
        public_key: PublicKey,
        location: str,
        description: str,
        exclusive: bool = False,
    ) -> University:
        logger.info("registerUniversity called", extra={"operation": "registerUniversity"})
        university = University(
            name=check_identity(name, "name"),
            public_key=public_key,
            location=location,
            description=description,
        )
        await self._put(university, exclusive)
        return university

    # --- Point reads --------------------------------------------------------

    async def query_university_profile_by_name(self, name: UniversityName) -> University:
        logger.info(
            "queryUniversityProfileByName called",
            extra={"operation": "queryUniversityProfileByName"},
        )
        return await self._get(University, university_key(name))

    async def query_certificate_schema(self, schema_version: SchemaVersion) -> Schema:
        logger.info(
            "queryCertificateSchema called",
            extra={"operation": "queryCertificateSchema"},
        )
        return await self._get(Schema, schema_key(schema_version))

    async def query_certificate_by_uuid(self, uuid: CertUUID) -> Certificate:
        logger.info(
            "queryCertificateByUUID called",
            extra={"operation": "queryCertificateByUUID"},
        )
        return await self._get(Certificate, certificate_key(uuid))

    # --- Selector queries ---------------------------------------------------

    async def get_all_certificate_by_student(
        self, student_pk: PublicKey,
    ) -> list[Certificate]:
        logger.info(
            "getAllCertificateByStudent called",
            extra={"operation": "getAllCertificateByStudent"},
        )
        return await self._query_certificates(
            build_selector(DataType.CERTIFICATE, "studentPK", student_pk),
        )

    async def get_all_certificate_by_university(
        self, university_pk: PublicKey,
    ) -> list[Certificate]:
        logger.info(
            "getAllCertificateByUniversity called",
            extra={"operation": "getAllCertificateByUniversity"},
        )
        return await self._query_certificates(
            build_selector(DataType.CERTIFICATE, "universityPK", university_pk),
        )

    async def query_all(self) -> list[Certificate]:
        logger.info("queryAll called", extra={"operation": "queryAll"})
        return await self._query_certificates(build_selector(DataType.CERTIFICATE))

    # --- Helpers ------------------------------------------------------------

    async def _put(self, record: LedgerRecord, exclusive: bool) -> None:
        key = key_for(record)
        if exclusive and await self.ledger.get_state(key) is not None:
            raise RecordExistsError(key)
        await self.ledger.put_state(key, encode_record(record, key))

    async def _get(self, model: type[RecordT], key: LedgerKey) -> RecordT:
        raw = await self.ledger.get_state(key)
        if raw is None:
            kind, identity = split_key(key)
            raise RecordNotFoundError(kind.value, identity, key)
        return decode_record(model, raw, key)

    async def _query_certificates(self, selector: str) -> list[Certificate]:
        logger.info(f"queryString: {selector}", extra={"selector": selector})
        certificates = []
        async with self.ledger.query(selector) as results:
            async for key, value in results:
                certificates.append(decode_record(Certificate, value, key))
        logger.info(
            f"Selector matched {len(certificates)} certificate(s)",
            extra={"selector": selector, "result_count": len(certificates)},
        )
        return certificates


def create_contract(ledger: LedgerStub) -> CertificateContract:
    """Build a contract bound to `ledger`."""
    return CertificateContract(ledger)
