"""Ledger Records: Certificate, University and Schema as they are persisted.

Invariants:
    - Each record serializes to a flat JSON object whose members are exactly the
      camelCase field names plus `dataType`; no nesting, no envelope
    - `dataType` is pinned to the record's kind; decoding bytes of another kind fails
    - Records are frozen: write-once on the ledger, immutable in memory

Design Decisions:
    - Pydantic aliases keep snake_case attributes in Python and camelCase on the wire
    - encode/decode raise RecordSerializationError carrying the ledger key
"""

from typing import Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from certledger.core.domain_types import DataType
from certledger.core.errors import RecordSerializationError


class LedgerRecord(BaseModel):
    """Base for every record stored in the world state."""

    model_config = ConfigDict(frozen=True, validate_by_name=True, validate_by_alias=True)

    @property
    def kind(self) -> DataType:
        return DataType(self.data_type)


class Certificate(LedgerRecord):
    """Certificate issued by a university to a student."""
    cert_hash: str = Field(alias="certHash")
    university_signature: str = Field(alias="universitySignature")
    student_signature: str = Field(alias="studentSignature")
    date_of_issuing: str = Field(alias="dateOfIssuing")
    cert_number: str = Field("", alias="certNumber")
    cert_uuid: str = Field(alias="certUUID")
    university_pk: str = Field(alias="universityPK")
    student_pk: str = Field(alias="studentPK")
    data_type: Literal["certificate"] = Field("certificate", alias="dataType")


class University(LedgerRecord):
    """University profile; identified by name."""
    name: str
    public_key: str = Field(alias="publicKey")
    location: str
    description: str
    data_type: Literal["university"] = Field("university", alias="dataType")


class Schema(LedgerRecord):
    """Canonical field ordering for one certificate type and version."""
    certificate_type: str = Field(alias="certificateType")
    id: str
    ordering: list[str]
    data_type: Literal["schema"] = Field("schema", alias="dataType")


RecordT = TypeVar("RecordT", bound=LedgerRecord)


def encode_record(record: LedgerRecord, key: str) -> bytes:
    """Serialize to the flat camelCase JSON stored on the ledger."""
    try:
        return record.model_dump_json(by_alias=True).encode("utf-8")
    except (ValueError, TypeError) as e:
        raise RecordSerializationError(str(e), key)


def decode_record(model: type[RecordT], raw: bytes, key: str) -> RecordT:
    """Deserialize stored bytes into `model`; any shape mismatch is a serialization error.

    Only wire member names are accepted; snake_case attribute names in stored
    bytes are rejected.
    """
    try:
        return model.model_validate_json(raw, by_alias=True, by_name=False)
    except ValidationError as e:
        raise RecordSerializationError(
            f"{e.error_count()} validation error(s) decoding {model.__name__}",
            key,
        )


def to_document(record: LedgerRecord) -> dict:
    """Record as a plain dict with wire member names (API responses)."""
    return record.model_dump(by_alias=True)
