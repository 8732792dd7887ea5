"""
Tests for result formatting and serialization.
"""

import json

import pytest

from valora.core.models import FailureRecord, ValidationResult
from valora.utils.reporter import ValidationReporter, format_path

FAILED = ValidationResult.from_errors(
    [
        FailureRecord(("items", 0, "sku"), "required", "This field is required"),
        FailureRecord((), "custom", "Totals do not add up"),
    ]
)
PASSED = ValidationResult.from_errors([])


@pytest.mark.parametrize(
    "path,expected",
    [
        (("items", 0, "sku"), "items[0].sku"),
        (("address", "city"), "address.city"),
        ((0,), "[0]"),
        ((), ""),
    ],
)
def test_format_path(path, expected):
    """Test field paths render in dotted form with indices."""
    assert format_path(path) == expected


def test_format_result():
    """Test human-readable output."""
    assert ValidationReporter.format_result(PASSED) == "Validation passed successfully"
    assert ValidationReporter.format_result(FAILED).splitlines() == [
        "Validation failed with the following errors:",
        "  - items[0].sku: This field is required (required)",
        "  - <root>: Totals do not add up (custom)",
    ]


def test_to_json_conforms_to_schema():
    """Test serialized results match the published result schema."""
    payload = json.loads(ValidationReporter.to_json(FAILED))
    assert payload["errors"][0] == {"path": ["items", 0, "sku"], "rule": "required", "message": "This field is required"}
    assert ValidationReporter.schema_errors(payload) == []
    assert ValidationReporter.schema_errors(ValidationReporter.to_dict(PASSED)) == []


@pytest.mark.parametrize(
    "payload",
    [
        {"success": True, "errors": [{"path": [], "rule": "x", "message": "m"}]},
        {"success": False, "errors": []},
        {"success": False, "errors": [{"path": ["a"], "rule": "", "message": "m"}]},
        {"success": False, "errors": [{"path": [-1], "rule": "x", "message": "m"}]},
        {"success": True},
    ],
)
def test_schema_rejects_inconsistent_payloads(payload):
    """Test payloads breaking the result format are reported."""
    problems = ValidationReporter.schema_errors(payload)
    assert len(problems) == 1
    assert problems[0].startswith("Schema validation failed: ")


def test_from_json():
    """Test parsing serialized results back."""
    assert ValidationReporter.from_json(ValidationReporter.to_json(FAILED)) == FAILED.to_dict()
    with pytest.raises(ValueError, match="Invalid JSON input"):
        ValidationReporter.from_json("{not json")
    with pytest.raises(ValueError, match="Schema validation failed"):
        ValidationReporter.from_json('{"success": false, "errors": []}')
