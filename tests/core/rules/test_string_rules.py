"""
Tests for string rules.
"""

import re

import pytest

from valora.core.exceptions import ConfigurationError
from valora.core.rules import (
    alpha,
    alphanumeric,
    contains,
    email,
    ends_with,
    is_string,
    length,
    lowercase,
    matches,
    max_length,
    min_length,
    not_empty,
    numeric,
    starts_with,
    trimmed,
    uppercase,
    url,
    uuid,
)


@pytest.mark.parametrize(
    "rule,value,passes",
    [
        (is_string(), "x", True),
        (is_string(), 5, False),
        (not_empty(), "  ", False),
        (not_empty(), " a ", True),
        (trimmed(), " a", False),
        (trimmed(), "a", True),
        (min_length(3), "abc", True),
        (min_length(3), "ab", False),
        (max_length(3), "abcd", False),
        (length(2), "ab", True),
        (length(2), "abc", False),
        (length(2, 4), "abcd", True),
        (length(2, 4), "abcde", False),
        (starts_with("A"), "Apple", True),
        (ends_with(".json"), "data.yaml", False),
        (contains("@"), "a@b", True),
        (matches(r"^\d{3}$"), "123", True),
        (matches(re.compile(r"^\d{3}$")), "12a", False),
        (email(), "ada@example.com", True),
        (email(), "ada@example", False),
        (url(), "https://example.com/path?q=1", True),
        (url(), "ftp://example.com", False),
        (uuid(), "123e4567-e89b-42d3-a456-426614174000", True),
        (uuid(), "not-a-uuid", False),
        (alpha(), "abcXYZ", True),
        (alpha(), "abc1", False),
        (alphanumeric(), "abc123", True),
        (numeric(), "-12.5", True),
        (numeric(), "12a", False),
        (lowercase(), "abc", True),
        (uppercase(), "AbC", False),
    ],
)
def test_string_rules(run, rule, value, passes):
    """Test each string rule against passing and failing values."""
    assert (run(rule, value) is None) is passes


@pytest.mark.parametrize("rule", [min_length(1), email(), matches("x"), starts_with("a")])
def test_non_strings_fail(run, rule):
    """Test string rules fail rather than raise on non-string values."""
    failure = run(rule, 42)
    assert failure is not None
    assert failure.cause is None


def test_default_messages_are_parameterized(run):
    """Test default messages interpolate the rule's parameters."""
    assert run(min_length(5), "abc").message == "Must be at least 5 characters"
    assert run(max_length(2), "abc").message == "Must be at most 2 characters"
    assert run(length(2, 4), "a").message == "Must be between 2 and 4 characters"
    assert run(starts_with("A"), "B").message == 'Must start with "A"'


def test_message_override_is_verbatim(run):
    """Test an override replaces the default message exactly, braces included."""
    failure = run(min_length(5, message="Too short: {min}"), "abc")
    assert failure.rule == "minLength"
    assert failure.message == "Too short: {min}"


def test_invalid_parameters():
    """Test impossible bounds are configuration errors."""
    with pytest.raises(ConfigurationError):
        min_length(-1)
    with pytest.raises(ConfigurationError):
        length(5, 2)


def test_rules_are_immutable():
    """Test rule attributes cannot be reassigned after construction."""
    rule = min_length(3)
    assert rule.min == 3
    with pytest.raises(AttributeError):
        rule.min = 5
    with pytest.raises(AttributeError):
        rule.message = "changed"
