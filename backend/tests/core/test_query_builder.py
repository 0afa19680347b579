"""Query Builder: selector construction, parsing and evaluation.

Tests:
    - Kind-only and kind+field selectors have the documented JSON shape
    - Values are JSON-escaped (quotes cannot break out of the selector)
    - Invalid argument combinations raise ValueError
    - parse_selector rejects malformed selectors with LedgerQueryError (400)
"""

import json

import pytest

from certledger.core.domain_types import DataType
from certledger.core.errors import LedgerQueryError
from certledger.core.query_builder import build_selector, parse_selector


def test_kind_only_selector():
    assert build_selector(DataType.CERTIFICATE) == '{"selector":{"dataType":"certificate"}}'


def test_kind_and_field_selector():
    selector = build_selector(DataType.CERTIFICATE, "studentPK", "pk-1")
    assert json.loads(selector) == {
        "selector": {"dataType": "certificate", "studentPK": "pk-1"},
    }


def test_values_are_escaped():
    hostile = 'x","dataType":"university'
    selector = build_selector(DataType.CERTIFICATE, "studentPK", hostile)
    predicates = parse_selector(selector)
    assert predicates == {"dataType": "certificate", "studentPK": hostile}


def test_field_without_value_rejected():
    with pytest.raises(ValueError):
        build_selector(DataType.CERTIFICATE, "studentPK")


def test_value_without_field_rejected():
    with pytest.raises(ValueError):
        build_selector(DataType.CERTIFICATE, value="pk")


def test_data_type_cannot_be_extra_predicate():
    with pytest.raises(ValueError):
        build_selector(DataType.CERTIFICATE, "dataType", "university")


@pytest.mark.parametrize("selector", [
    "not json",
    "[]",
    '{"selector": "x"}',
    '{"selector": {"studentPK": "a"}}',
    '{"selector": {"dataType": {"$gt": "a"}}}',
])
def test_parse_selector_rejects_malformed(selector):
    with pytest.raises(LedgerQueryError) as exc:
        parse_selector(selector)
    assert exc.value.http_status == 400
    assert exc.value.selector == selector

