"""
Tests for logical combinators and message precedence.
"""

import pytest

from valora.core.exceptions import ConfigurationError
from valora.core.rules import (
    and_,
    custom,
    email,
    if_then_else,
    is_number,
    is_string,
    max_length,
    min_length,
    not_,
    or_,
    starts_with,
    xor,
)


def counting(rule_result, calls, name):
    """Build a rule that records when it runs."""

    def check(value):
        calls.append(name)
        return rule_result

    return custom(check, name=name, message=f"{name} failed")


def test_and_reports_first_failure_and_short_circuits(run):
    """Test and_ stops at the first failing child and surfaces its failure."""
    calls = []
    rule = and_(counting(True, calls, "a"), counting(False, calls, "b"), counting(False, calls, "c"))
    failure = run(rule, "x")
    assert (failure.rule, failure.message) == ("b", "b failed")
    assert calls == ["a", "b"]


def test_and_min_length_then_starts_with(run):
    """Test and_ surfaces minLength when both children would fail."""
    failure = run(and_(min_length(5), starts_with("A")), "B")
    assert (failure.rule, failure.message) == ("minLength", "Must be at least 5 characters")


def test_and_override(run):
    """Test an and_ override is reported under the and identifier."""
    failure = run(and_(min_length(5), starts_with("A"), message="Custom and"), "B")
    assert (failure.rule, failure.message) == ("and", "Custom and")
    assert failure.details[0].rule == "minLength"


def test_or_evaluates_every_child(run):
    """Test or_ runs every child even after one passes."""
    calls = []
    rule = or_(counting(True, calls, "a"), counting(False, calls, "b"))
    assert run(rule, "x") is None
    assert calls == ["a", "b"]


def test_or_fails_only_when_all_fail(run):
    """Test or_ synthesizes its message when every child fails."""
    assert run(or_(min_length(10), starts_with("B")), "B") is None
    failure = run(or_(min_length(10), starts_with("A")), "B")
    assert (failure.rule, failure.message) == ("or", "At least one condition must be met")
    assert [d.rule for d in failure.details] == ["minLength", "startsWith"]


def test_or_override(run):
    """Test an or_ override replaces the synthesized message."""
    failure = run(or_(is_number(), email(), message="Give a number or an email"), "nope")
    assert failure.message == "Give a number or an email"


def test_if_then_else_branches(run):
    """Test the condition selects which branch decides."""
    rule = if_then_else(starts_with("A"), min_length(10), min_length(5))
    then_failure = run(rule, "ABC")
    assert (then_failure.rule, then_failure.message) == ("minLength", "Must be at least 10 characters")
    else_failure = run(rule, "BC")
    assert else_failure.message == "Must be at least 5 characters"
    assert run(rule, "BCDEFG") is None


def test_if_then_else_override_beats_branch_override(run):
    """Test the combinator override wins over the branch's own override."""
    rule = if_then_else(
        starts_with("A"),
        min_length(10, message="Branch message"),
        message="Conditional message",
    )
    failure = run(rule, "ABC")
    assert (failure.rule, failure.message) == ("ifThenElse", "Conditional message")


def test_if_then_else_without_else_passes(run):
    """Test a failing condition with no else branch passes."""
    assert run(if_then_else(starts_with("A"), min_length(10)), "B") is None


def test_nested_override_survives_without_outer_override(run):
    """Test an inner combinator's override propagates through an outer one without its own."""
    inner = or_(is_number(), email(), message="Inner message")
    failure = run(and_(is_string(), inner), "nope")
    assert (failure.rule, failure.message) == ("or", "Inner message")


def test_outer_override_replaces_inner_override(run):
    """Test an outer combinator's override replaces the inner one."""
    inner = or_(is_number(), email(), message="Inner message")
    failure = run(and_(is_string(), inner, message="Outer message"), "nope")
    assert (failure.rule, failure.message) == ("and", "Outer message")
    assert failure.details[0].message == "Inner message"


def test_not_and_xor(run):
    """Test negation and exclusive disjunction."""
    assert run(not_(starts_with("tmp_")), "tmp_file").message == "Condition must not be met"
    assert run(not_(starts_with("tmp_")), "file") is None
    assert run(xor(is_string(), is_number()), "x") is None
    assert run(xor(max_length(3), min_length(1)), "ab").rule == "xor"


def test_invalid_combinators():
    """Test combinators reject empty or non-rule children."""
    with pytest.raises(ConfigurationError):
        and_()
    with pytest.raises(ConfigurationError):
        or_("not a rule")
    with pytest.raises(ConfigurationError):
        xor(is_string())
