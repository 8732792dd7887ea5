"""
Numeric Validation Rules for the Valora validation engine

Numeric rules accept ``int``, ``float`` and ``Decimal`` values. Booleans are
rejected even though ``bool`` subclasses ``int``; a JSON ``true`` is not a
number.
"""

import math
from decimal import Decimal
from typing import Any, Optional, Union

from ..exceptions import ConfigurationError
from ..models import ValidationContext
from .base import ValidationRule

Number = Union[int, float, Decimal]

MAX_SAFE_INTEGER = 2**53 - 1


def is_number_value(value: Any) -> bool:
    """Return True for real numbers, excluding booleans and NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, float):
        return not math.isnan(value)
    if isinstance(value, Decimal):
        return not value.is_nan()
    return True


class NumberRule(ValidationRule):
    """Base class for rules that only accept numbers."""

    def check(self, value: Any, context: ValidationContext) -> bool:
        if not is_number_value(value):
            return False
        return self.test(value)

    def test(self, value: Number) -> bool:
        """Check a numeric value."""
        return True


class IsNumberRule(NumberRule):
    name = "isNumber"
    default_message = "Must be a number"


class IntegerRule(NumberRule):
    name = "integer"
    default_message = "Must be an integer"

    def test(self, value: Number) -> bool:
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return value.is_integer()
        return value == value.to_integral_value()


class SafeIntegerRule(IntegerRule):
    name = "safeInteger"
    default_message = "Must be a safe integer"

    def test(self, value: Number) -> bool:
        return super().test(value) and abs(value) <= MAX_SAFE_INTEGER


class FiniteRule(NumberRule):
    name = "finite"
    default_message = "Must be a finite number"

    def test(self, value: Number) -> bool:
        if isinstance(value, Decimal):
            return value.is_finite()
        return math.isfinite(value)


class MinRule(NumberRule):
    name = "min"
    default_message = "Must be at least {min}"

    def __init__(self, minimum: Number, message: Optional[str] = None):
        super().__init__(message, min=minimum)

    def test(self, value: Number) -> bool:
        return value >= self.min


class MaxRule(NumberRule):
    name = "max"
    default_message = "Must be at most {max}"

    def __init__(self, maximum: Number, message: Optional[str] = None):
        super().__init__(message, max=maximum)

    def test(self, value: Number) -> bool:
        return value <= self.max


class RangeRule(NumberRule):
    """
    Rule for validating numeric ranges.

    This rule ensures that a numeric value falls within a specified inclusive
    range. Either bound can be None to create an open-ended range.

    Attributes:
        min (Optional[Number]): Minimum allowed value
        max (Optional[Number]): Maximum allowed value
    """

    name = "range"

    def __init__(
        self,
        min_value: Optional[Number] = None,
        max_value: Optional[Number] = None,
        message: Optional[str] = None,
    ):
        """
        Initialize a range validation rule.

        Args:
            min_value: Minimum allowed value, or None for no minimum
            max_value: Maximum allowed value, or None for no maximum
            message: Message to report on failure

        Raises:
            ConfigurationError: If both bounds are given and min exceeds max
        """
        if min_value is not None and max_value is not None and min_value > max_value:
            raise ConfigurationError(f"range minimum {min_value} exceeds maximum {max_value}")
        super().__init__(message, min=min_value, max=max_value)

    @staticmethod
    def default_message(params) -> str:
        if params["min"] is None:
            return f"Must be at most {params['max']}"
        if params["max"] is None:
            return f"Must be at least {params['min']}"
        return f"Must be between {params['min']} and {params['max']}"

    def test(self, value: Number) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class PositiveRule(NumberRule):
    name = "positive"
    default_message = "Must be a positive number"

    def test(self, value: Number) -> bool:
        return value > 0


class NegativeRule(NumberRule):
    name = "negative"
    default_message = "Must be a negative number"

    def test(self, value: Number) -> bool:
        return value < 0


class NonNegativeRule(NumberRule):
    name = "nonNegative"
    default_message = "Must be zero or a positive number"

    def test(self, value: Number) -> bool:
        return value >= 0


class NonPositiveRule(NumberRule):
    name = "nonPositive"
    default_message = "Must be zero or a negative number"

    def test(self, value: Number) -> bool:
        return value <= 0


class MultipleOfRule(NumberRule):
    """Rule requiring the value to be an integral multiple of a factor."""

    name = "multipleOf"
    default_message = "Must be a multiple of {factor}"

    def __init__(self, factor: Number, message: Optional[str] = None):
        if factor == 0:
            raise ConfigurationError("multiple_of factor must be non-zero")
        super().__init__(message, factor=factor)

    def test(self, value: Number) -> bool:
        if not math.isfinite(value):
            return False
        if isinstance(value, float) or isinstance(self.factor, float):
            quotient = float(value) / float(self.factor)
            return math.isclose(quotient, round(quotient), abs_tol=1e-9)
        return value % self.factor == 0


def is_number(message: Optional[str] = None) -> IsNumberRule:
    return IsNumberRule(message)


def integer(message: Optional[str] = None) -> IntegerRule:
    return IntegerRule(message)


def safe_integer(message: Optional[str] = None) -> SafeIntegerRule:
    return SafeIntegerRule(message)


def finite(message: Optional[str] = None) -> FiniteRule:
    return FiniteRule(message)


def minimum(value: Number, message: Optional[str] = None) -> MinRule:
    return MinRule(value, message)


def maximum(value: Number, message: Optional[str] = None) -> MaxRule:
    return MaxRule(value, message)


def in_range(
    min_value: Optional[Number] = None,
    max_value: Optional[Number] = None,
    message: Optional[str] = None,
) -> RangeRule:
    return RangeRule(min_value, max_value, message)


def positive(message: Optional[str] = None) -> PositiveRule:
    return PositiveRule(message)


def negative(message: Optional[str] = None) -> NegativeRule:
    return NegativeRule(message)


def non_negative(message: Optional[str] = None) -> NonNegativeRule:
    return NonNegativeRule(message)


def non_positive(message: Optional[str] = None) -> NonPositiveRule:
    return NonPositiveRule(message)


def multiple_of(factor: Number, message: Optional[str] = None) -> MultipleOfRule:
    return MultipleOfRule(factor, message)
