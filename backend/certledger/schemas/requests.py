"""Request Schemas: Pydantic bodies with field-level validation for the HTTP surface.

Invariants:
    - Identity fields (certUUID, university name) follow core.key_scheme.check_identity:
      stored verbatim, rejected when blank or padded, same rule as /transactions
    - Bodies accept the same camelCase member names the ledger records use
    - Every registerUniversity argument is required, as in the dispatch path
    - exclusive defaults to False: writes overwrite unless the caller opts out
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from certledger.core.errors import InvalidIdentityError
from certledger.core.key_scheme import check_identity


def _identity(value: str, field: str) -> str:
    try:
        return check_identity(value, field)
    except InvalidIdentityError as e:
        raise ValueError(e.message)


class _CamelBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CertificateIssue(_CamelBody):
    """Body for POST /certificates."""
    cert_hash: str = Field(alias="certHash")
    university_signature: str = Field(alias="universitySignature")
    student_signature: str = Field(alias="studentSignature")
    date_of_issuing: str = Field(alias="dateOfIssuing")
    cert_uuid: str = Field(alias="certUUID", max_length=400)
    university_pk: str = Field(alias="universityPK")
    student_pk: str = Field(alias="studentPK")
    exclusive: bool = False

    @field_validator("cert_uuid")
    @classmethod
    def check_uuid(cls, v: str) -> str:
        return _identity(v, "certUUID")


class UniversityRegister(_CamelBody):
    """Body for POST /universities."""
    name: str = Field(max_length=400)
    public_key: str = Field(alias="publicKey")
    location: str
    description: str
    exclusive: bool = False

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _identity(v, "name")


class TransactionInvoke(BaseModel):
    """Body for POST /transactions/{operation}: positional string arguments."""
    args: list[str] = Field(default_factory=list)
