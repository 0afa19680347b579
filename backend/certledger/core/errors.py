"""Error Hierarchy: typed, categorized exceptions for every CertLedger failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every ledger error names the offending key or selector
    - Domain errors (400-level) are caller mistakes; ledger errors (500-level) are critical
    - to_response() produces the REST envelope used by the global handlers

Design Decisions:
    - Single hierarchy with CertLedgerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: carries key/selector/operation without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    SERIALIZATION = "serialization"
    LEDGER_WRITE = "ledger_write"
    LEDGER_QUERY = "ledger_query"
    LEDGER_UNAVAILABLE = "ledger_unavailable"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the failure happened: operation, ledger key, selector."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    ledger_key: str | None = None
    selector: str | None = None
    debug_info: dict[str, Any] | None = None


class CertLedgerError(Exception):
    """Base exception for all CertLedger errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "ledger_key": self.context.ledger_key,
                    "selector": self.context.selector,
                },
            }
        }


def _with_key(context: ErrorContext | None, key: str) -> ErrorContext:
    ctx = context or ErrorContext()
    ctx.ledger_key = key
    return ctx


def _with_selector(context: ErrorContext | None, selector: str) -> ErrorContext:
    ctx = context or ErrorContext()
    ctx.selector = selector
    return ctx


# --- Domain Errors (400-level) ---------------------------------------------

class RecordNotFoundError(CertLedgerError):
    """Requested key has never been written."""
    def __init__(
        self, record_type: str, identity: str, key: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"the {record_type} {identity} does not exist",
            "RECORD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, _with_key(context, key), 404,
        )
        self.record_type = record_type
        self.identity = identity
        self.key = key


class RecordExistsError(CertLedgerError):
    """Exclusive write attempted on a key that already holds a record."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"a record already exists under key '{key}'",
            "RECORD_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, _with_key(context, key), 409,
        )
        self.key = key


class InvalidIdentityError(CertLedgerError):
    """Identity value that cannot be used verbatim as a key suffix."""
    def __init__(self, field: str, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"{field} must be non-empty without leading or trailing whitespace (got {value!r})",
            "INVALID_IDENTITY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field
        self.value = value


class UnknownOperationError(CertLedgerError):
    """Operation name not present in the dispatch table."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Operation '{operation}' does not exist.",
            "UNKNOWN_OPERATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.operation = operation


class OperationArgumentsError(CertLedgerError):
    """Operation invoked with the wrong number of arguments."""
    def __init__(
        self, operation: str, expected: int, received: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Operation '{operation}' expects {expected} argument(s), got {received}.",
            "INVALID_ARGUMENT_COUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.operation = operation
        self.expected = expected
        self.received = received


# --- Ledger Errors (500-level) ---------------------------------------------

class RecordSerializationError(CertLedgerError):
    """Stored bytes do not decode to the expected record, or a record failed to encode."""
    def __init__(self, message: str, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Serialization failed for key '{key}': {message}",
            "SERIALIZATION_ERROR", ErrorCategory.SERIALIZATION,
            ErrorSeverity.CRITICAL, _with_key(context, key), 500,
        )
        self.key = key


class LedgerWriteError(CertLedgerError):
    """The ledger rejected or failed a put."""
    def __init__(self, message: str, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Ledger write to '{key}' failed: {message}",
            "LEDGER_WRITE_ERROR", ErrorCategory.LEDGER_WRITE,
            ErrorSeverity.CRITICAL, _with_key(context, key), 503,
        )
        self.key = key


class LedgerQueryError(CertLedgerError):
    """Selector evaluation failed or the result iterator could not be opened."""
    def __init__(
        self, message: str, selector: str,
        context: ErrorContext | None = None, http_status: int = 503,
    ):
        super().__init__(
            f"Ledger query failed: {message}",
            "LEDGER_QUERY_ERROR", ErrorCategory.LEDGER_QUERY,
            ErrorSeverity.CRITICAL, _with_selector(context, selector), http_status,
        )
        self.selector = selector


class LedgerUnavailableError(CertLedgerError):
    """A point read could not reach the world state."""
    def __init__(self, message: str, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Ledger read of '{key}' failed: {message}",
            "LEDGER_UNAVAILABLE", ErrorCategory.LEDGER_UNAVAILABLE,
            ErrorSeverity.CRITICAL, _with_key(context, key), 503,
        )
        self.key = key
