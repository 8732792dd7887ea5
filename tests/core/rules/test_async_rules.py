"""
Tests for asynchronous rules and timeouts.
"""

import asyncio

import pytest

from valora.core.exceptions import ConfigurationError
from valora.core.models import ValidationContext
from valora.core.rules import async_rule, custom, min_length, timeout

TAKEN = {"ada", "grace"}


async def username_available(value, context):
    await asyncio.sleep(0)
    return value not in TAKEN


async def slow_check(value, context):
    await asyncio.sleep(1)
    return True


@pytest.mark.asyncio
async def test_async_rule():
    """Test an awaited predicate decides the outcome."""
    rule = async_rule(username_available, "Username is taken", name="uniqueUsername")
    context = ValidationContext(path=("username",))
    assert await rule.run("linus", context) is None
    failure = await rule.run("ada", context)
    assert (failure.rule, failure.message) == ("uniqueUsername", "Username is taken")


@pytest.mark.asyncio
async def test_custom_accepts_coroutine_functions():
    """Test custom rules await coroutine predicates."""

    async def is_even(value):
        return value % 2 == 0

    context = ValidationContext(path=("n",))
    assert await custom(is_even).run(2, context) is None
    assert await custom(is_even).run(3, context) is not None


@pytest.mark.asyncio
async def test_async_fault():
    """Test an exception raised while awaiting becomes a failure."""

    async def broken(value, context):
        raise ConnectionError("service unavailable")

    faults = []
    context = ValidationContext(path=("username",), diagnostics=faults.append)
    failure = await async_rule(broken).run("ada", context)
    assert failure.message == "Rule evaluation failed: service unavailable"
    assert [fault.rule for fault in faults] == ["async"]


@pytest.mark.asyncio
@pytest.mark.timeout(5)
async def test_timeout_expires():
    """Test a slow rule fails with the timeout message."""
    context = ValidationContext(path=("value",))
    failure = await timeout(async_rule(slow_check), 0.01).run("x", context)
    assert (failure.rule, failure.message) == ("timeout", "Validation timed out after 0.01 seconds")


@pytest.mark.asyncio
async def test_timeout_passes_through():
    """Test a rule finishing in time reports its own outcome."""
    context = ValidationContext(path=("value",))
    assert await timeout(async_rule(username_available), 1).run("linus", context) is None
    failure = await timeout(min_length(3), 1).run("ab", context)
    assert failure.rule == "minLength"


def test_invalid_async_parameters():
    """Test unusable async rule parameters are configuration errors."""
    with pytest.raises(ConfigurationError):
        async_rule(lambda value, context: True)
    with pytest.raises(ConfigurationError):
        timeout(min_length(1), 0)
    with pytest.raises(ConfigurationError):
        timeout("not a rule", 1)
