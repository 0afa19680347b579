"""Domain Types: identity aliases and the record-kind discriminator.

Invariants:
    - DataType values are the exact strings persisted in every record's `dataType`
    - Identity aliases wrap str; the ledger never sees anything but strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# --- Identity Types --------------------------------------------------------

CertUUID = NewType("CertUUID", str)
PublicKey = NewType("PublicKey", str)
UniversityName = NewType("UniversityName", str)
SchemaVersion = NewType("SchemaVersion", str)
LedgerKey = NewType("LedgerKey", str)


# --- Enums -----------------------------------------------------------------

class DataType(str, Enum):
    """Record kinds sharing the world-state keyspace."""
    CERTIFICATE = "certificate"
    UNIVERSITY = "university"
    SCHEMA = "schema"
