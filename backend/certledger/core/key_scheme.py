"""Key Scheme: maps record identities to world-state keys.

Invariants:
    - cert_<certUUID>, uni_<name>, schema_<id>; prefixes are disjoint
    - Keys carry no version or timestamp; the same identity always yields the same key
    - Identities are used verbatim; written identities must be non-empty and carry no
      leading or trailing whitespace (check_identity), on every entry point
    - Prefixes must not occur inside identity values (precondition, not checked)
"""

from certledger.core.domain_types import (
    CertUUID, DataType, LedgerKey, SchemaVersion, UniversityName,
)
from certledger.core.errors import InvalidIdentityError
from certledger.core.records import Certificate, LedgerRecord, Schema, University

KEY_PREFIXES: dict[DataType, str] = {
    DataType.CERTIFICATE: "cert_",
    DataType.UNIVERSITY: "uni_",
    DataType.SCHEMA: "schema_",
}


def check_identity(value: str, field: str) -> str:
    """Return `value` unchanged, or raise InvalidIdentityError if it is blank or padded."""
    if not value or value != value.strip():
        raise InvalidIdentityError(field, value)
    return value


def certificate_key(cert_uuid: CertUUID) -> LedgerKey:
    return LedgerKey(KEY_PREFIXES[DataType.CERTIFICATE] + cert_uuid)


def university_key(name: UniversityName) -> LedgerKey:
    return LedgerKey(KEY_PREFIXES[DataType.UNIVERSITY] + name)


def schema_key(version: SchemaVersion) -> LedgerKey:
    return LedgerKey(KEY_PREFIXES[DataType.SCHEMA] + version)


def key_for(record: LedgerRecord) -> LedgerKey:
    """Key under which `record` is stored, chosen by its kind."""
    if isinstance(record, Certificate):
        return certificate_key(CertUUID(record.cert_uuid))
    if isinstance(record, University):
        return university_key(UniversityName(record.name))
    if isinstance(record, Schema):
        return schema_key(SchemaVersion(record.id))
    raise TypeError(f"no key scheme for {type(record).__name__}")


def split_key(key: str) -> tuple[DataType, str]:
    """Recover (kind, identity) from a key. Raises ValueError on an unknown prefix."""
    for kind, prefix in KEY_PREFIXES.items():
        if key.startswith(prefix):
            return kind, key[len(prefix):]
    raise ValueError(f"key '{key}' has no known record prefix")
