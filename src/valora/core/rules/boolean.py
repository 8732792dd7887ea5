"""Boolean rules."""

from typing import Any, Optional

from ..models import ValidationContext
from .base import ValidationRule


class IsBooleanRule(ValidationRule):
    name = "isBoolean"
    default_message = "Must be a boolean"

    def check(self, value: Any, context: ValidationContext) -> bool:
        return isinstance(value, bool)


class IsTrueRule(ValidationRule):
    name = "isTrue"
    default_message = "Must be true"

    def check(self, value: Any, context: ValidationContext) -> bool:
        return value is True


class IsFalseRule(ValidationRule):
    name = "isFalse"
    default_message = "Must be false"

    def check(self, value: Any, context: ValidationContext) -> bool:
        return value is False


def is_boolean(message: Optional[str] = None) -> IsBooleanRule:
    return IsBooleanRule(message)


def is_true(message: Optional[str] = None) -> IsTrueRule:
    return IsTrueRule(message)


def is_false(message: Optional[str] = None) -> IsFalseRule:
    return IsFalseRule(message)
