"""
Common rules: presence and type checks.

Presence rules are the only rules that still run when an optional field is
absent; every other rule is skipped for such a field.
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple, Type, Union

from ..models import MISSING, ValidationContext
from .base import ValidationRule


class RequiredRule(ValidationRule):
    """
    Rule for validating required fields.

    This rule ensures that a value is present, not None and, if it's a string,
    not empty after stripping whitespace.
    """

    name = "required"
    default_message = "This field is required"
    presence = True

    def check(self, value: Any, context: ValidationContext) -> bool:
        if value is MISSING or value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        return True


class DefinedRule(ValidationRule):
    """Rule passing for any present value, None included."""

    name = "defined"
    default_message = "This field must be defined"
    presence = True

    def check(self, value: Any, context: ValidationContext) -> bool:
        return value is not MISSING


class TypeRule(ValidationRule):
    """
    Rule for type checking values.

    ``bool`` is never accepted where ``int`` or ``float`` is expected unless it
    is listed explicitly.
    """

    name = "type"

    def __init__(
        self,
        expected_type: Union[Type, Tuple[Type, ...]],
        message: Optional[str] = None,
    ):
        """
        Initialize a type validation rule.

        Args:
            expected_type: Type or tuple of types to check against
            message: Message to report on failure
        """
        types = expected_type if isinstance(expected_type, tuple) else (expected_type,)
        super().__init__(message, expected_type=types, type_name=" or ".join(t.__name__ for t in types))

    @staticmethod
    def default_message(params) -> str:
        return f"Must be of type {params['type_name']}"

    def check(self, value: Any, context: ValidationContext) -> bool:
        if isinstance(value, bool) and bool not in self.expected_type:
            return False
        return isinstance(value, self.expected_type)


class IsObjectRule(ValidationRule):
    """Rule accepting mappings and declared shape instances."""

    name = "isObject"
    default_message = "Must be an object"

    def check(self, value: Any, context: ValidationContext) -> bool:
        if isinstance(value, Mapping):
            return True
        registry = context.registry
        return registry is not None and registry.is_registered(type(value))


def required(message: Optional[str] = None) -> RequiredRule:
    """The value must be present and non-empty."""
    return RequiredRule(message)


def defined(message: Optional[str] = None) -> DefinedRule:
    """The value must be present; None is accepted."""
    return DefinedRule(message)


def is_type(expected_type: Union[Type, Tuple[Type, ...]], message: Optional[str] = None) -> TypeRule:
    """The value must be an instance of ``expected_type``."""
    return TypeRule(expected_type, message)


def is_object(message: Optional[str] = None) -> IsObjectRule:
    """The value must be a mapping or a shape instance."""
    return IsObjectRule(message)
