"""
Array Validation Rules for the Valora validation engine

Array rules accept lists and tuples. Strings, bytes and mappings are never
treated as arrays even though they are sequences.

``each`` applies another rule to every item. It reports a single failure, for
the first failing item, addressed below the field by the item's index; the
evaluator's nested-array handling is the place to collect every element's
failures for arrays of shapes.
"""

from typing import Any, Iterable, List, Optional, Sequence

from ..exceptions import ConfigurationError
from ..models import RuleFailure, ValidationContext
from .base import ValidationRule


def is_array_value(value: Any) -> bool:
    """Return True for lists and tuples."""
    return isinstance(value, (list, tuple))


def _has_duplicates(items: Sequence[Any]) -> bool:
    seen: List[Any] = []
    hashed = set()
    for item in items:
        try:
            if item in hashed:
                return True
            hashed.add(item)
        except TypeError:
            if item in seen:
                return True
            seen.append(item)
    return False


class ArrayRule(ValidationRule):
    """Base class for rules that only accept arrays."""

    def check(self, value: Any, context: ValidationContext) -> bool:
        if not is_array_value(value):
            return False
        return self.test(value)

    def test(self, value: Sequence[Any]) -> bool:
        """Check an array value."""
        return True


class IsArrayRule(ArrayRule):
    name = "isArray"
    default_message = "Must be an array"


class ArrayNotEmptyRule(ArrayRule):
    name = "arrayNotEmpty"
    default_message = "Cannot be an empty array"

    def test(self, value: Sequence[Any]) -> bool:
        return len(value) > 0


class ArrayMinSizeRule(ArrayRule):
    name = "arrayMinSize"
    default_message = "Must have at least {min} items"

    def __init__(self, min_size: int, message: Optional[str] = None):
        if min_size < 0:
            raise ConfigurationError("min_size must be non-negative")
        super().__init__(message, min=min_size)

    def test(self, value: Sequence[Any]) -> bool:
        return len(value) >= self.min


class ArrayMaxSizeRule(ArrayRule):
    name = "arrayMaxSize"
    default_message = "Must have at most {max} items"

    def __init__(self, max_size: int, message: Optional[str] = None):
        if max_size < 0:
            raise ConfigurationError("max_size must be non-negative")
        super().__init__(message, max=max_size)

    def test(self, value: Sequence[Any]) -> bool:
        return len(value) <= self.max


class ArrayLengthRule(ArrayRule):
    name = "arrayLength"
    default_message = "Must have exactly {length} items"

    def __init__(self, size: int, message: Optional[str] = None):
        super().__init__(message, length=size)

    def test(self, value: Sequence[Any]) -> bool:
        return len(value) == self.length


class ArrayUniqueRule(ArrayRule):
    name = "arrayUnique"
    default_message = "All items must be unique"

    def test(self, value: Sequence[Any]) -> bool:
        return not _has_duplicates(value)


class ArrayContainsRule(ArrayRule):
    name = "arrayContains"
    default_message = "Must include {values}"

    def __init__(self, values: Iterable[Any], message: Optional[str] = None):
        super().__init__(message, values=tuple(values))

    def test(self, value: Sequence[Any]) -> bool:
        return all(item in value for item in self.values)


class EachRule(ValidationRule):
    """Rule applying another rule to every item of an array."""

    name = "each"
    default_message = "Every item must be valid"

    def __init__(self, rule: ValidationRule, message: Optional[str] = None):
        if not isinstance(rule, ValidationRule):
            raise ConfigurationError(f"each expects a ValidationRule, got {rule!r}")
        super().__init__(message, rule=rule)

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        if not is_array_value(value):
            return RuleFailure(rule=self.name, message=self.message or "Must be an array")
        for index, item in enumerate(value):
            failure = await self.rule.run(item, context)
            if failure is not None:
                if self.message is not None:
                    return RuleFailure(rule=self.name, message=self.message, details=(failure,), path=(index,))
                return RuleFailure(
                    rule=failure.rule,
                    message=failure.message,
                    details=failure.details,
                    path=(index,) + failure.path,
                    cause=failure.cause,
                )
        return None


class SomeRule(ValidationRule):
    """Rule requiring at least one item of an array to satisfy another rule."""

    name = "some"
    default_message = "At least one item must be valid"

    def __init__(self, rule: ValidationRule, message: Optional[str] = None):
        if not isinstance(rule, ValidationRule):
            raise ConfigurationError(f"some expects a ValidationRule, got {rule!r}")
        super().__init__(message, rule=rule)

    async def run(self, value: Any, context: ValidationContext) -> Optional[RuleFailure]:
        if not is_array_value(value):
            return self.fail()
        for item in value:
            if await self.rule.run(item, context) is None:
                return None
        return self.fail()


def is_array(message: Optional[str] = None) -> IsArrayRule:
    return IsArrayRule(message)


def array_not_empty(message: Optional[str] = None) -> ArrayNotEmptyRule:
    return ArrayNotEmptyRule(message)


def array_min_size(min_size: int, message: Optional[str] = None) -> ArrayMinSizeRule:
    return ArrayMinSizeRule(min_size, message)


def array_max_size(max_size: int, message: Optional[str] = None) -> ArrayMaxSizeRule:
    return ArrayMaxSizeRule(max_size, message)


def array_length(size: int, message: Optional[str] = None) -> ArrayLengthRule:
    return ArrayLengthRule(size, message)


def array_unique(message: Optional[str] = None) -> ArrayUniqueRule:
    return ArrayUniqueRule(message)


def array_contains(values: Iterable[Any], message: Optional[str] = None) -> ArrayContainsRule:
    return ArrayContainsRule(values, message)


def each(rule: ValidationRule, message: Optional[str] = None) -> EachRule:
    return EachRule(rule, message)


def some(rule: ValidationRule, message: Optional[str] = None) -> SomeRule:
    return SomeRule(rule, message)
