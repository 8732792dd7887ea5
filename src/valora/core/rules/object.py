"""
Object Validation Rules for the Valora validation engine

Object rules accept mappings and shape instances. A shape instance is viewed
through its plain-data form (see ``Materializer.dump``), so a JSON schema sees
nested shapes as nested objects.

``matches_schema`` checks a value against a JSON schema with jsonschema. The
schema itself is checked when the rule is built, so a malformed schema is a
ConfigurationError at declaration time rather than a failure on every call.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from ..exceptions import ConfigurationError
from ..materializer import dump
from ..models import ValidationContext
from .base import ValidationRule


def _as_object(value: Any) -> Optional[Mapping]:
    """Return the mapping view of an object value, or None for non-objects."""
    if isinstance(value, Mapping):
        return value
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return dump(value)
    return None


class MatchesSchemaRule(ValidationRule):
    """
    Rule for validating a value against a JSON schema.

    Example:
        >>> rule = MatchesSchemaRule({
        ...     "type": "object",
        ...     "properties": {"port": {"type": "integer", "minimum": 1}},
        ...     "required": ["port"],
        ... })
    """

    name = "matchesSchema"
    default_message = "Must match the required schema"

    def __init__(self, schema: Dict[str, Any], message: Optional[str] = None):
        """
        Initialize a JSON schema rule.

        Args:
            schema: JSON schema definition as a dictionary
            message: Message to report on failure

        Raises:
            ConfigurationError: If the schema itself is invalid
        """
        try:
            validator_for(schema).check_schema(schema)
        except SchemaError as e:
            raise ConfigurationError(f"invalid JSON schema: {e.message}") from e
        super().__init__(message, schema=schema)

    def check(self, value: Any, context: ValidationContext) -> bool:
        view = _as_object(value)
        instance = dict(view) if view is not None else value
        try:
            json_validate(instance=instance, schema=self.schema)
        except JsonSchemaError:
            return False
        return True


class MinKeysRule(ValidationRule):
    name = "minKeys"
    default_message = "Must have at least {min} properties"

    def __init__(self, min_keys: int, message: Optional[str] = None):
        if min_keys < 0:
            raise ConfigurationError("min_keys must be non-negative")
        super().__init__(message, min=min_keys)

    def check(self, value: Any, context: ValidationContext) -> bool:
        view = _as_object(value)
        return view is not None and len(view) >= self.min


class MaxKeysRule(ValidationRule):
    name = "maxKeys"
    default_message = "Must have at most {max} properties"

    def __init__(self, max_keys: int, message: Optional[str] = None):
        if max_keys < 0:
            raise ConfigurationError("max_keys must be non-negative")
        super().__init__(message, max=max_keys)

    def check(self, value: Any, context: ValidationContext) -> bool:
        view = _as_object(value)
        return view is not None and len(view) <= self.max


class HasKeysRule(ValidationRule):
    name = "hasKeys"
    default_message = "Must have properties: {keys}"

    def __init__(self, keys: Iterable[str], message: Optional[str] = None):
        super().__init__(message, keys=tuple(keys))

    def check(self, value: Any, context: ValidationContext) -> bool:
        view = _as_object(value)
        return view is not None and all(key in view for key in self.keys)


class StrictKeysRule(ValidationRule):
    """Rule rejecting objects with properties outside an allowed set."""

    name = "strictKeys"
    default_message = "Only these properties are allowed: {keys}"

    def __init__(self, keys: Iterable[str], message: Optional[str] = None):
        super().__init__(message, keys=tuple(keys))

    def check(self, value: Any, context: ValidationContext) -> bool:
        view = _as_object(value)
        return view is not None and all(key in self.keys for key in view)


def matches_schema(schema: Dict[str, Any], message: Optional[str] = None) -> MatchesSchemaRule:
    return MatchesSchemaRule(schema, message)


def min_keys(count: int, message: Optional[str] = None) -> MinKeysRule:
    return MinKeysRule(count, message)


def max_keys(count: int, message: Optional[str] = None) -> MaxKeysRule:
    return MaxKeysRule(count, message)


def has_keys(keys: Iterable[str], message: Optional[str] = None) -> HasKeysRule:
    return HasKeysRule(keys, message)


def strict_keys(keys: Iterable[str], message: Optional[str] = None) -> StrictKeysRule:
    return StrictKeysRule(keys, message)
