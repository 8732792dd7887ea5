"""
Asynchronous rules.

Any rule's check may return an awaitable, so ``custom`` already accepts
coroutine functions. ``async_rule`` is the explicit form for predicates that
must be awaited, such as a uniqueness lookup against a service, and always
passes the validation context. ``timeout`` bounds how long a wrapped rule may
take; an overrun is a failure of the timeout rule, not an exception.

Async rules are awaited one at a time in declaration order. Nothing here
retries or cancels beyond the timeout itself.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional

from ..exceptions import ConfigurationError
from ..models import RuleFailure, ValidationContext
from .base import ValidationRule

logger = logging.getLogger(__name__)

AsyncPredicate = Callable[[Any, ValidationContext], Awaitable[bool]]


class AsyncRule(ValidationRule):
    """
    Rule backed by a coroutine function.

    The function receives the value and the ValidationContext and returns
    True if the value is valid.
    """

    name = "async"
    default_message = "Async validation failed"

    def __init__(self, predicate: AsyncPredicate, message: Optional[str] = None, name: str = "async"):
        if not inspect.iscoroutinefunction(predicate):
            raise ConfigurationError("async_rule expects a coroutine function")
        super().__init__(message, predicate=predicate)
        object.__setattr__(self, "name", name)

    async def check(self, value: Any, context: ValidationContext) -> bool:
        return bool(await self.predicate(value, context))

    def __repr__(self) -> str:
        return f"AsyncRule(name={self.name!r})"


class TimeoutRule(ValidationRule):
    """
    Rule failing when a wrapped rule takes longer than ``seconds`` to decide.

    A rule finishing in time reports its own outcome; an override on the
    timeout replaces that failure too, as it does for combinators.
    """

    name = "timeout"
    default_message = "Validation timed out after {seconds} seconds"

    def __init__(self, rule: ValidationRule, seconds: float, message: Optional[str] = None):
        if not isinstance(rule, ValidationRule):
            raise ConfigurationError(f"timeout expects a ValidationRule, got {rule!r}")
        if seconds <= 0:
            raise ConfigurationError("timeout seconds must be positive")
        super().__init__(message, rule=rule, seconds=seconds)

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        try:
            failure = await asyncio.wait_for(self.rule.run(value, context), timeout=self.seconds)
        except asyncio.TimeoutError:
            logger.debug(f"Rule '{self.rule.name}' timed out after {self.seconds}s on {list(context.path)}")
            return self.fail()
        if failure is not None and self.message is not None:
            return self.fail(details=(failure,))
        return failure


def async_rule(predicate: AsyncPredicate, message: Optional[str] = None, name: str = "async") -> AsyncRule:
    return AsyncRule(predicate, message, name)


def timeout(rule: ValidationRule, seconds: float, message: Optional[str] = None) -> TimeoutRule:
    return TimeoutRule(rule, seconds, message)
