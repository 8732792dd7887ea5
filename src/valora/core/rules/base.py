"""
Base Validation Rule for the Valora validation engine

This module provides the ValidationRule base class that every rule family and
every combinator builds on. A rule is a named predicate with:

- a stable identifier (``name``) reported in failure records
- a default message template, interpolated with the rule's parameters
- an optional caller-supplied message that replaces the default verbatim
- read-only parameters, fixed at construction

Checks may be plain functions or coroutines. ``run`` awaits both uniformly, so
synchronous and asynchronous rules are interchangeable wherever a rule is
accepted. A check that raises is reported as a failure of that rule rather than
propagated, so one broken rule cannot abort the validation of a whole shape.
"""

import inspect
import logging
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple, Union

from ..models import RuleFailure, RuleFault, ValidationContext

logger = logging.getLogger(__name__)

MessageTemplate = Union[str, Callable[[Mapping[str, Any]], str]]
CheckResult = Union[bool, Awaitable[bool]]


def _display(value: Any) -> Any:
    """Format a parameter value for message interpolation."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(str(_display(item)) for item in value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class ValidationRule:
    """
    Base class for all validation rules in the system.

    Subclasses set ``name`` and ``default_message`` and override ``check``.
    Parameters passed to the constructor are stored in ``params`` and are also
    readable as attributes; the rule itself is immutable once constructed.

    Attributes:
        name (str): Stable identifier reported in failure records
        default_message: Template such as ``"Must be at least {min} characters"``
            or a callable receiving the params
        presence (bool): Whether the rule still runs on absent optional fields
        message (Optional[str]): Caller override, used verbatim on failure
        params (Mapping[str, Any]): Rule-specific configuration
    """

    name: str = "rule"
    default_message: MessageTemplate = "Invalid value"
    presence: bool = False

    def __init__(self, message: Optional[str] = None, **params: Any):
        """
        Initialize a validation rule.

        Args:
            message: Message to report instead of the default when the rule fails
            **params: Rule-specific configuration used by the check and the message
        """
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "params", MappingProxyType(dict(params)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __getattr__(self, name: str) -> Any:
        if name == "params":
            raise AttributeError(name)
        try:
            return self.params[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}") from None

    def __repr__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in self.params.items())
        return f"{type(self).__name__}({args})"

    def check(self, value: Any, context: ValidationContext) -> CheckResult:
        """
        Validate a value against the rule.

        Args:
            value: Value to validate; MISSING when the field is absent
            context: Per-field validation context

        Returns:
            True if validation passes, False otherwise, or an awaitable of either

        Raises:
            NotImplementedError: If the subclass doesn't implement this method
        """
        raise NotImplementedError("Validation rules must implement check()")

    def render_message(self) -> str:
        """Return the message reported when this rule fails."""
        if self.message is not None:
            return self.message
        template = self.default_message
        if callable(template):
            return template(self.params)
        display = {key: _display(value) for key, value in self.params.items()}
        return template.format_map(display)

    def fail(
        self,
        details: Tuple[RuleFailure, ...] = (),
        cause: Optional[BaseException] = None,
    ) -> RuleFailure:
        """Build this rule's failure."""
        return RuleFailure(rule=self.name, message=self.render_message(), details=details, cause=cause)

    def fault(self, error: Exception, context: ValidationContext) -> RuleFailure:
        """
        Turn an exception raised by the check into a failure of this rule.

        The cause is logged, handed to the context's diagnostics callback and
        kept on the failure; the caller override still wins for the message.

        Args:
            error: Exception raised while checking
            context: Per-field validation context

        Returns:
            RuleFailure describing the fault
        """
        config = context.config
        if config.log_faults:
            logger.warning(f"Rule '{self.name}' raised on {list(context.path)}: {error!r}")
        context.report_fault(RuleFault(path=context.path, rule=self.name, error=error))
        if self.message is not None:
            message = self.message
        else:
            message = f"{config.fault_message}: {error}"
        return RuleFailure(rule=self.name, message=message, cause=error)

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        """
        Evaluate the rule, awaiting asynchronous checks.

        Args:
            value: Value to validate
            context: Per-field validation context

        Returns:
            None if the rule passes, otherwise the rule's failure
        """
        try:
            outcome = self.check(value, context)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as e:
            return self.fault(e, context)
        if outcome:
            return None
        return self.fail()


class CustomRule(ValidationRule):
    """
    Rule for custom validation functions.

    The function may be synchronous or a coroutine function. By default it
    receives the value only; with ``with_context=True`` it also receives the
    ValidationContext, which gives access to sibling fields.

    Example:
        >>> even = CustomRule(lambda v: v % 2 == 0, message="Must be even")
    """

    default_message = "Validation failed"

    def __init__(
        self,
        validator_func: Callable[..., CheckResult],
        message: Optional[str] = None,
        name: str = "custom",
        with_context: bool = False,
    ):
        """
        Initialize a custom validation rule.

        Args:
            validator_func: Function that takes a value and returns True if valid
            message: Message to report on failure
            name: Identifier reported in failure records
            with_context: Pass the validation context as a second argument
        """
        super().__init__(message, validator_func=validator_func, with_context=with_context)
        object.__setattr__(self, "name", name)

    def check(self, value: Any, context: ValidationContext) -> CheckResult:
        if self.with_context:
            return self.validator_func(value, context)
        return self.validator_func(value)

    def __repr__(self) -> str:
        return f"CustomRule(name={self.name!r})"


def custom(
    validator_func: Callable[..., CheckResult],
    message: Optional[str] = None,
    name: str = "custom",
    with_context: bool = False,
) -> CustomRule:
    """Create a rule from an arbitrary predicate."""
    return CustomRule(validator_func, message=message, name=name, with_context=with_context)
