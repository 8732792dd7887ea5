"""
Logical Rule Combinators for the Valora validation engine

Combinators are rules built from other rules. Each one is itself a
ValidationRule, so combinators nest freely and attach to fields like any other
rule. They report at most one failure:

- and_: all children must pass; stops at the first failing child
- or_: at least one child must pass; every child is evaluated
- if_then_else: a condition selects which branch decides
- not_: the child must fail
- xor: exactly one child must pass

A combinator constructed with ``message`` reports that message under its own
identifier whenever it fails, replacing whatever its children reported. Without
one, ``and_`` and ``if_then_else`` surface the deciding child's failure as is,
while ``or_``, ``not_`` and ``xor`` synthesize their default message. Nested
combinators follow the same rule at every level, so an inner override survives
unless an outer combinator has its own.
"""

from typing import Any, List, Optional, Tuple

from ..exceptions import ConfigurationError
from ..models import RuleFailure, ValidationContext
from .base import ValidationRule


def _require_rules(name: str, rules: Tuple[Any, ...], minimum: int = 1) -> Tuple[ValidationRule, ...]:
    if len(rules) < minimum:
        raise ConfigurationError(f"{name} requires at least {minimum} rule(s)")
    for rule in rules:
        if not isinstance(rule, ValidationRule):
            raise ConfigurationError(f"{name} expects ValidationRule instances, got {rule!r}")
    return tuple(rules)


class AndRule(ValidationRule):
    """Conjunction: passes iff every child passes, evaluated left to right."""

    name = "and"
    default_message = "All conditions must be met"

    def __init__(self, *rules: ValidationRule, message: Optional[str] = None):
        super().__init__(message, rules=_require_rules("and", rules))

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        for rule in self.rules:
            failure = await rule.run(value, context)
            if failure is not None:
                if self.message is not None:
                    return self.fail(details=(failure,))
                return failure
        return None


class OrRule(ValidationRule):
    """
    Disjunction: passes iff at least one child passes.

    Every child is evaluated, even after one has passed, so the collected
    failures stay available as ``details`` for diagnostics. Only one failure
    surfaces.
    """

    name = "or"
    default_message = "At least one condition must be met"

    def __init__(self, *rules: ValidationRule, message: Optional[str] = None):
        super().__init__(message, rules=_require_rules("or", rules))

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        failures: List[RuleFailure] = []
        passed = False
        for rule in self.rules:
            failure = await rule.run(value, context)
            if failure is None:
                passed = True
            else:
                failures.append(failure)
        if passed:
            return None
        return self.fail(details=tuple(failures))


class IfThenElseRule(ValidationRule):
    """
    Conditional: the condition selects the branch whose result decides.

    When the condition fails and no else branch was given, the rule passes.
    """

    name = "ifThenElse"
    default_message = "Conditional validation failed"

    def __init__(
        self,
        condition: ValidationRule,
        then_rule: ValidationRule,
        else_rule: Optional[ValidationRule] = None,
        message: Optional[str] = None,
    ):
        branches = (condition, then_rule) if else_rule is None else (condition, then_rule, else_rule)
        _require_rules("ifThenElse", branches, minimum=2)
        super().__init__(message, condition=condition, then_rule=then_rule, else_rule=else_rule)

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        if await self.condition.run(value, context) is None:
            branch = self.then_rule
        elif self.else_rule is not None:
            branch = self.else_rule
        else:
            return None
        failure = await branch.run(value, context)
        if failure is not None and self.message is not None:
            return self.fail(details=(failure,))
        return failure


class NotRule(ValidationRule):
    """Negation: passes iff the child fails."""

    name = "not"
    default_message = "Condition must not be met"

    def __init__(self, rule: ValidationRule, message: Optional[str] = None):
        _require_rules("not", (rule,))
        super().__init__(message, rule=rule)

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        if await self.rule.run(value, context) is None:
            return self.fail()
        return None


class XorRule(ValidationRule):
    """Exclusive disjunction: passes iff exactly one child passes."""

    name = "xor"
    default_message = "Exactly one condition must be met"

    def __init__(self, *rules: ValidationRule, message: Optional[str] = None):
        super().__init__(message, rules=_require_rules("xor", rules, minimum=2))

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        failures: List[RuleFailure] = []
        for rule in self.rules:
            failure = await rule.run(value, context)
            if failure is not None:
                failures.append(failure)
        if len(self.rules) - len(failures) == 1:
            return None
        return self.fail(details=tuple(failures))


def and_(*rules: ValidationRule, message: Optional[str] = None) -> AndRule:
    """All rules must pass."""
    return AndRule(*rules, message=message)


def or_(*rules: ValidationRule, message: Optional[str] = None) -> OrRule:
    """At least one rule must pass."""
    return OrRule(*rules, message=message)


def if_then_else(
    condition: ValidationRule,
    then_rule: ValidationRule,
    else_rule: Optional[ValidationRule] = None,
    message: Optional[str] = None,
) -> IfThenElseRule:
    """Validate with ``then_rule`` when ``condition`` passes, else with ``else_rule``."""
    return IfThenElseRule(condition, then_rule, else_rule, message=message)


def not_(rule: ValidationRule, message: Optional[str] = None) -> NotRule:
    """The rule must fail."""
    return NotRule(rule, message=message)


def xor(*rules: ValidationRule, message: Optional[str] = None) -> XorRule:
    """Exactly one rule must pass."""
    return XorRule(*rules, message=message)
