"""
Tests for the result model, the MISSING sentinel and engine configuration.
"""

import pickle

import pytest

from valora.core.config import EngineConfig
from valora.core.exceptions import ConfigurationError
from valora.core.models import (
    MISSING,
    FailureRecord,
    RuleFailure,
    ValidationContext,
    ValidationResult,
    is_absent,
    read_field,
)


def test_missing_sentinel():
    """Test MISSING is a falsy singleton that survives pickling."""
    assert not MISSING
    assert repr(MISSING) == "MISSING"
    assert pickle.loads(pickle.dumps(MISSING)) is MISSING


@pytest.mark.parametrize(
    "value,none_is_absent,expected",
    [
        (MISSING, True, True),
        (None, True, True),
        (None, False, False),
        ("", True, False),
        (0, True, False),
    ],
)
def test_is_absent(value, none_is_absent, expected):
    """Test absence rules for MISSING, None and falsy values."""
    assert is_absent(value, none_is_absent) is expected


def test_read_field_from_mapping_and_object():
    """Test fields are read from mappings by key and objects by attribute."""

    class Holder:
        def __init__(self):
            self.name = "Ada"

    assert read_field({"name": "Ada"}, "name") == "Ada"
    assert read_field({}, "name") is MISSING
    assert read_field(Holder(), "name") == "Ada"
    assert read_field(Holder(), "email") is MISSING
    assert read_field(None, "name") is MISSING


def test_result_invariant_enforced():
    """Test success must agree with the error list."""
    record = FailureRecord(path=("name",), rule="required", message="This field is required")
    with pytest.raises(ValueError):
        ValidationResult(success=True, errors=(record,))
    with pytest.raises(ValueError):
        ValidationResult(success=False, errors=())


def test_result_serialization():
    """Test the serialized form of a result."""
    result = ValidationResult.from_errors(
        [FailureRecord(path=("items", 0, "sku"), rule="required", message="This field is required")]
    )
    assert result.to_dict() == {
        "success": False,
        "errors": [{"path": ["items", 0, "sku"], "rule": "required", "message": "This field is required"}],
    }
    assert ValidationResult.from_errors([]).to_dict() == {"success": True, "errors": []}


def test_errors_for_prefix():
    """Test filtering records by path prefix."""
    records = [
        FailureRecord(path=("items", 0, "sku"), rule="required", message="a"),
        FailureRecord(path=("items", 1, "qty"), rule="min", message="b"),
        FailureRecord(path=("name",), rule="required", message="c"),
    ]
    result = ValidationResult.from_errors(records)
    assert result.errors_for("items") == tuple(records[:2])
    assert result.errors_for("items", 1) == (records[1],)


def test_rule_failure_at_prefixes_relative_path():
    """Test a failure's own path is appended below the field path."""
    failure = RuleFailure(rule="each", message="bad", path=(2,))
    record = failure.at(("tags",))
    assert record == FailureRecord(path=("tags", 2), rule="each", message="bad")
    assert record.field == "tags"
    assert record.prefixed("post").path == ("post", "tags", 2)


def test_context_lookup():
    """Test dotted lookups against the instance owning the field."""
    context = ValidationContext(path=("confirm",), data={"password": "x", "address": {"city": "Oslo"}})
    assert context.field == "confirm"
    assert context.lookup("password") == "x"
    assert context.lookup("address.city") == "Oslo"
    assert context.lookup("address.zip") is MISSING


def test_engine_config_defaults():
    """Test default configuration values."""
    config = EngineConfig()
    assert config.none_is_absent
    assert not config.keep_unknown_fields
    assert config.fault_message == "Rule evaluation failed"
    assert config.log_faults


@pytest.mark.parametrize(
    "kwargs",
    [
        {"none_is_absent": "yes"},
        {"keep_unknown_fields": 1},
        {"fault_message": ""},
        {"fault_message": None},
    ],
)
def test_engine_config_rejects_invalid_values(kwargs):
    """Test invalid configuration raises ConfigurationError."""
    with pytest.raises(ConfigurationError):
        EngineConfig(**kwargs)
