"""
Tests for comparison rules and field references.
"""

import pytest

from valora.core.exceptions import ConfigurationError
from valora.core.rules import (
    between,
    different_from,
    equal_to,
    greater_than,
    greater_than_or_equal,
    less_than,
    less_than_or_equal,
    not_equal_to,
    not_one_of,
    one_of,
    ref,
    same_as,
)


@pytest.mark.parametrize(
    "rule,value,passes",
    [
        (equal_to("target"), "target", True),
        (equal_to("target"), "wrong", False),
        (not_equal_to(0), 1, True),
        (greater_than(5), 5, False),
        (greater_than_or_equal(5), 5, True),
        (less_than(5), 4.9, True),
        (less_than_or_equal(5), 6, False),
        (less_than(5), "4", False),
        (between(1, 10), 10, True),
        (between(1, 10), 0, False),
        (one_of(["red", "green"]), "red", True),
        (one_of(["red", "green"]), "blue", False),
        (not_one_of(["admin"]), "admin", False),
    ],
)
def test_literal_comparisons(run, rule, value, passes):
    """Test comparisons against literal operands."""
    assert (run(rule, value) is None) is passes


def test_custom_equal_to_message(run):
    """Test the override is used verbatim for equalTo."""
    failure = run(equal_to("target", message="Custom equalTo"), "wrong")
    assert failure.rule == "equalTo"
    assert failure.message == "Custom equalTo"


def test_default_messages(run):
    """Test default comparison messages."""
    assert run(equal_to("target"), "wrong").message == "Must equal target"
    assert run(one_of(["a", "b"]), "c").message == "Must be one of: a, b"
    assert run(same_as("password"), "x", data={"password": "y"}).message == "Must match password"


def test_same_as_reads_sibling(run):
    """Test same_as compares with a field of the owning instance."""
    data = {"password": "s3cret"}
    assert run(same_as("password"), "s3cret", data=data) is None
    assert run(same_as("password"), "other", data=data) is not None
    assert run(same_as("password"), "s3cret", data={}) is not None


def test_different_from(run):
    """Test different_from rejects a value equal to the sibling."""
    data = {"old_password": "a"}
    assert run(different_from("old_password"), "a", data=data) is not None
    assert run(different_from("old_password"), "b", data=data) is None


def test_references_in_operands(run):
    """Test ref() operands are resolved from the owning instance, including dotted paths."""
    data = {"start": 3, "limits": {"max": 10}}
    assert run(greater_than(ref("start")), 4, data=data) is None
    assert run(greater_than(ref("start")), 3, data=data) is not None
    assert run(between(ref("start"), ref("limits.max")), 11, data=data) is not None
    assert run(greater_than(ref("missing")), 100, data=data) is not None


def test_invalid_parameters():
    """Test unsatisfiable comparisons are configuration errors."""
    with pytest.raises(ConfigurationError):
        between(10, 1)
    with pytest.raises(ConfigurationError):
        one_of([])
    with pytest.raises(ConfigurationError):
        ref("")
