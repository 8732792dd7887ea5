"""
Comparison Validation Rules for the Valora validation engine

Comparison operands are either literal values or field references created
with ``ref("other")``. A reference is read from the instance owning the field
being validated, so ``same_as("password")`` compares ``confirm`` with its
sibling ``password``. Dotted paths walk into nested values.

A comparison against a referenced field that is absent fails. A comparison
between values of incompatible types (``"a" < 3``) fails too; it is not
reported as a rule fault.
"""

import operator
from typing import Any, Callable, Iterable, Optional

from ..exceptions import ConfigurationError
from ..models import MISSING, ValidationContext
from .base import ValidationRule


class FieldRef:
    """Reference to another field of the instance being validated."""

    def __init__(self, path: str):
        if not isinstance(path, str) or not path:
            raise ConfigurationError("field reference path must be a non-empty string")
        self.path = path

    def resolve(self, context: ValidationContext) -> Any:
        return context.lookup(self.path)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, FieldRef) and other.path == self.path

    def __hash__(self) -> int:
        return hash(("FieldRef", self.path))

    def __repr__(self) -> str:
        return f"ref({self.path!r})"

    def __str__(self) -> str:
        return self.path


def ref(path: str) -> FieldRef:
    """Reference the field at ``path``, relative to the instance owning the validated field."""
    return FieldRef(path)


def _operand(value: Any, context: ValidationContext) -> Any:
    if isinstance(value, FieldRef):
        return value.resolve(context)
    return value


class CompareRule(ValidationRule):
    """Base class for binary comparisons against a literal or referenced operand."""

    compare: Callable[[Any, Any], bool] = staticmethod(operator.eq)

    def __init__(self, expected: Any, message: Optional[str] = None):
        super().__init__(message, expected=expected)

    def check(self, value: Any, context: ValidationContext) -> bool:
        expected = _operand(self.expected, context)
        if expected is MISSING or value is MISSING:
            return False
        try:
            return bool(type(self).compare(value, expected))
        except TypeError:
            return False


class EqualToRule(CompareRule):
    name = "equalTo"
    default_message = "Must equal {expected}"


class NotEqualToRule(CompareRule):
    name = "notEqualTo"
    default_message = "Must not equal {expected}"
    compare = staticmethod(operator.ne)


class GreaterThanRule(CompareRule):
    name = "greaterThan"
    default_message = "Must be greater than {expected}"
    compare = staticmethod(operator.gt)


class GreaterThanOrEqualRule(CompareRule):
    name = "greaterThanOrEqual"
    default_message = "Must be greater than or equal to {expected}"
    compare = staticmethod(operator.ge)


class LessThanRule(CompareRule):
    name = "lessThan"
    default_message = "Must be less than {expected}"
    compare = staticmethod(operator.lt)


class LessThanOrEqualRule(CompareRule):
    name = "lessThanOrEqual"
    default_message = "Must be less than or equal to {expected}"
    compare = staticmethod(operator.le)


class BetweenRule(ValidationRule):
    """Rule requiring the value to lie in an inclusive range; either bound may be a reference."""

    name = "between"
    default_message = "Must be between {min} and {max}"

    def __init__(self, low: Any, high: Any, message: Optional[str] = None):
        if not isinstance(low, FieldRef) and not isinstance(high, FieldRef):
            try:
                if low > high:
                    raise ConfigurationError(f"between lower bound {low} exceeds upper bound {high}")
            except TypeError:
                raise ConfigurationError(f"between bounds {low!r} and {high!r} are not comparable") from None
        super().__init__(message, min=low, max=high)

    def check(self, value: Any, context: ValidationContext) -> bool:
        low = _operand(self.min, context)
        high = _operand(self.max, context)
        if MISSING in (value, low, high):
            return False
        try:
            return low <= value <= high
        except TypeError:
            return False


class OneOfRule(ValidationRule):
    name = "oneOf"
    default_message = "Must be one of: {values}"

    def __init__(self, values: Iterable[Any], message: Optional[str] = None):
        values = tuple(values)
        if not values:
            raise ConfigurationError("one_of requires at least one allowed value")
        super().__init__(message, values=values)

    def check(self, value: Any, context: ValidationContext) -> bool:
        return value is not MISSING and value in self.values


class NotOneOfRule(ValidationRule):
    name = "notOneOf"
    default_message = "Must not be one of: {values}"

    def __init__(self, values: Iterable[Any], message: Optional[str] = None):
        super().__init__(message, values=tuple(values))

    def check(self, value: Any, context: ValidationContext) -> bool:
        return value not in self.values


class SameAsRule(ValidationRule):
    """Rule requiring the value to equal a sibling field, such as a password confirmation."""

    name = "sameAs"
    default_message = "Must match {field}"

    def __init__(self, field_path: str, message: Optional[str] = None):
        super().__init__(message, field=FieldRef(field_path))

    def check(self, value: Any, context: ValidationContext) -> bool:
        other = self.field.resolve(context)
        return other is not MISSING and value == other


class DifferentFromRule(ValidationRule):
    name = "differentFrom"
    default_message = "Must be different from {field}"

    def __init__(self, field_path: str, message: Optional[str] = None):
        super().__init__(message, field=FieldRef(field_path))

    def check(self, value: Any, context: ValidationContext) -> bool:
        return value != self.field.resolve(context)


def equal_to(expected: Any, message: Optional[str] = None) -> EqualToRule:
    return EqualToRule(expected, message)


def not_equal_to(expected: Any, message: Optional[str] = None) -> NotEqualToRule:
    return NotEqualToRule(expected, message)


def greater_than(expected: Any, message: Optional[str] = None) -> GreaterThanRule:
    return GreaterThanRule(expected, message)


def greater_than_or_equal(expected: Any, message: Optional[str] = None) -> GreaterThanOrEqualRule:
    return GreaterThanOrEqualRule(expected, message)


def less_than(expected: Any, message: Optional[str] = None) -> LessThanRule:
    return LessThanRule(expected, message)


def less_than_or_equal(expected: Any, message: Optional[str] = None) -> LessThanOrEqualRule:
    return LessThanOrEqualRule(expected, message)


def between(low: Any, high: Any, message: Optional[str] = None) -> BetweenRule:
    return BetweenRule(low, high, message)


def one_of(values: Iterable[Any], message: Optional[str] = None) -> OneOfRule:
    return OneOfRule(values, message)


def not_one_of(values: Iterable[Any], message: Optional[str] = None) -> NotOneOfRule:
    return NotOneOfRule(values, message)


def same_as(field_path: str, message: Optional[str] = None) -> SameAsRule:
    return SameAsRule(field_path, message)


def different_from(field_path: str, message: Optional[str] = None) -> DifferentFromRule:
    return DifferentFromRule(field_path, message)
