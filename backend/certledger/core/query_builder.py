"""Query Builder: selector expressions for the world-state rich-query engine.

Invariants:
    - Selector shape: {"selector": {"dataType": "<kind>"[, "<field>": "<value>"]}}
    - At most one equality predicate beyond the kind filter; no ranges, sort or limit
    - Values are JSON-encoded, never spliced into the selector text
    - parse_selector accepts only flat string-equality selectors that name a dataType
"""

import json

from certledger.core.domain_types import DataType
from certledger.core.errors import LedgerQueryError

DATA_TYPE_FIELD = "dataType"


def build_selector(
    kind: DataType, field: str | None = None, value: str | None = None,
) -> str:
    """Selector for all records of `kind`, optionally with `field == value`."""
    if (field is None) != (value is None):
        raise ValueError("field and value must be given together")
    predicates = {DATA_TYPE_FIELD: kind.value}
    if field is not None:
        if field == DATA_TYPE_FIELD:
            raise ValueError("dataType is already constrained by kind")
        predicates[field] = value
    return json.dumps({"selector": predicates}, separators=(",", ":"))


def parse_selector(selector: str) -> dict[str, str]:
    """Validate a selector string and return its equality predicates."""
    try:
        parsed = json.loads(selector)
    except json.JSONDecodeError as e:
        raise LedgerQueryError(f"selector is not valid JSON ({e.msg})", selector, http_status=400)
    predicates = parsed.get("selector") if isinstance(parsed, dict) else None
    if not isinstance(predicates, dict):
        raise LedgerQueryError("missing 'selector' object", selector, http_status=400)
    if DATA_TYPE_FIELD not in predicates:
        raise LedgerQueryError("selector must constrain dataType", selector, http_status=400)
    for name, expected in predicates.items():
        if not isinstance(expected, str):
            raise LedgerQueryError(
                f"only string equality is supported (field '{name}')",
                selector, http_status=400,
            )
    return predicates

