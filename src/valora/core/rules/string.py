"""
String Validation Rules for the Valora validation engine

This module provides the string rule family. Every rule in it fails on values
that are not strings, so a string rule attached to a numeric field reports a
failure instead of raising.

Supported checks:
- Type and emptiness: is_string, not_empty, trimmed
- Length: min_length, max_length, length
- Content: starts_with, ends_with, contains, matches
- Formats: email, url, uuid, alpha, alphanumeric, numeric, lowercase, uppercase
"""

import re
from typing import Any, Optional, Union

from ..exceptions import ConfigurationError
from ..models import ValidationContext
from .base import ValidationRule

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-8][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)
ALPHA_PATTERN = re.compile(r"^[a-zA-Z]+$")
ALPHANUMERIC_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")
NUMERIC_PATTERN = re.compile(r"^-?\d*\.?\d+$")


class StringRule(ValidationRule):
    """Base class for rules that only accept strings."""

    def check(self, value: Any, context: ValidationContext) -> bool:
        if not isinstance(value, str):
            return False
        return self.test(value)

    def test(self, value: str) -> bool:
        """Check a string value."""
        return True


class IsStringRule(StringRule):
    name = "isString"
    default_message = "Must be a string"


class NotEmptyRule(StringRule):
    name = "notEmpty"
    default_message = "Cannot be empty or whitespace only"

    def test(self, value: str) -> bool:
        return bool(value.strip())


class TrimmedRule(StringRule):
    name = "trimmed"
    default_message = "Must not have leading or trailing whitespace"

    def test(self, value: str) -> bool:
        return value == value.strip()


class MinLengthRule(StringRule):
    name = "minLength"
    default_message = "Must be at least {min} characters"

    def __init__(self, min_length: int, message: Optional[str] = None):
        if min_length < 0:
            raise ConfigurationError("min_length must be non-negative")
        super().__init__(message, min=min_length)

    def test(self, value: str) -> bool:
        return len(value) >= self.min


class MaxLengthRule(StringRule):
    name = "maxLength"
    default_message = "Must be at most {max} characters"

    def __init__(self, max_length: int, message: Optional[str] = None):
        if max_length < 0:
            raise ConfigurationError("max_length must be non-negative")
        super().__init__(message, max=max_length)

    def test(self, value: str) -> bool:
        return len(value) <= self.max


class LengthRule(StringRule):
    """
    Rule for string length.

    With one bound the length must be exact; with two it must fall in the
    inclusive range.
    """

    name = "length"

    def __init__(self, min_length: int, max_length: Optional[int] = None, message: Optional[str] = None):
        if max_length is not None and max_length < min_length:
            raise ConfigurationError("max_length must not be less than min_length")
        super().__init__(message, min=min_length, max=max_length)

    @staticmethod
    def default_message(params) -> str:
        if params["max"] is None:
            return f"Must be exactly {params['min']} characters"
        return f"Must be between {params['min']} and {params['max']} characters"

    def test(self, value: str) -> bool:
        if self.max is None:
            return len(value) == self.min
        return self.min <= len(value) <= self.max


class StartsWithRule(StringRule):
    name = "startsWith"
    default_message = 'Must start with "{prefix}"'

    def __init__(self, prefix: str, message: Optional[str] = None):
        super().__init__(message, prefix=prefix)

    def test(self, value: str) -> bool:
        return value.startswith(self.prefix)


class EndsWithRule(StringRule):
    name = "endsWith"
    default_message = 'Must end with "{suffix}"'

    def __init__(self, suffix: str, message: Optional[str] = None):
        super().__init__(message, suffix=suffix)

    def test(self, value: str) -> bool:
        return value.endswith(self.suffix)


class ContainsRule(StringRule):
    name = "contains"
    default_message = 'Must contain "{substring}"'

    def __init__(self, substring: str, message: Optional[str] = None):
        super().__init__(message, substring=substring)

    def test(self, value: str) -> bool:
        return self.substring in value


class PatternRule(StringRule):
    """
    Rule for regex pattern matching.

    The whole string is searched with ``re.search``; anchor the pattern to
    require a full match.
    """

    name = "matches"
    default_message = "Does not match the required pattern"

    def __init__(self, pattern: Union[str, re.Pattern], message: Optional[str] = None, name: str = "matches"):
        """
        Initialize a regex validation rule.

        Args:
            pattern: Regular expression pattern string or compiled pattern
            message: Message to report on failure
            name: Identifier reported in failure records
        """
        compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
        super().__init__(message, pattern=compiled.pattern, regex=compiled)
        object.__setattr__(self, "name", name)

    def test(self, value: str) -> bool:
        return self.regex.search(value) is not None


class _FormatRule(StringRule):
    pattern: re.Pattern

    def test(self, value: str) -> bool:
        return self.pattern.match(value) is not None


class EmailRule(_FormatRule):
    name = "email"
    default_message = "Must be a valid email address"
    pattern = EMAIL_PATTERN


class UrlRule(_FormatRule):
    name = "url"
    default_message = "Must be a valid URL"
    pattern = URL_PATTERN


class UuidRule(_FormatRule):
    name = "uuid"
    default_message = "Must be a valid UUID"
    pattern = UUID_PATTERN


class AlphaRule(_FormatRule):
    name = "alpha"
    default_message = "Must contain only letters"
    pattern = ALPHA_PATTERN


class AlphanumericRule(_FormatRule):
    name = "alphanumeric"
    default_message = "Must contain only letters and numbers"
    pattern = ALPHANUMERIC_PATTERN


class NumericStringRule(_FormatRule):
    name = "numeric"
    default_message = "Must contain only numbers"
    pattern = NUMERIC_PATTERN


class LowercaseRule(StringRule):
    name = "lowercase"
    default_message = "Must be lowercase"

    def test(self, value: str) -> bool:
        return value == value.lower()


class UppercaseRule(StringRule):
    name = "uppercase"
    default_message = "Must be uppercase"

    def test(self, value: str) -> bool:
        return value == value.upper()


def is_string(message: Optional[str] = None) -> IsStringRule:
    return IsStringRule(message)


def not_empty(message: Optional[str] = None) -> NotEmptyRule:
    return NotEmptyRule(message)


def trimmed(message: Optional[str] = None) -> TrimmedRule:
    return TrimmedRule(message)


def min_length(min_length: int, message: Optional[str] = None) -> MinLengthRule:
    return MinLengthRule(min_length, message)


def max_length(max_length: int, message: Optional[str] = None) -> MaxLengthRule:
    return MaxLengthRule(max_length, message)


def length(min_length: int, max_length: Optional[int] = None, message: Optional[str] = None) -> LengthRule:
    return LengthRule(min_length, max_length, message)


def starts_with(prefix: str, message: Optional[str] = None) -> StartsWithRule:
    return StartsWithRule(prefix, message)


def ends_with(suffix: str, message: Optional[str] = None) -> EndsWithRule:
    return EndsWithRule(suffix, message)


def contains(substring: str, message: Optional[str] = None) -> ContainsRule:
    return ContainsRule(substring, message)


def matches(pattern: Union[str, re.Pattern], message: Optional[str] = None) -> PatternRule:
    return PatternRule(pattern, message)


def email(message: Optional[str] = None) -> EmailRule:
    return EmailRule(message)


def url(message: Optional[str] = None) -> UrlRule:
    return UrlRule(message)


def uuid(message: Optional[str] = None) -> UuidRule:
    return UuidRule(message)


def alpha(message: Optional[str] = None) -> AlphaRule:
    return AlphaRule(message)


def alphanumeric(message: Optional[str] = None) -> AlphanumericRule:
    return AlphanumericRule(message)


def numeric(message: Optional[str] = None) -> NumericStringRule:
    return NumericStringRule(message)


def lowercase(message: Optional[str] = None) -> LowercaseRule:
    return LowercaseRule(message)


def uppercase(message: Optional[str] = None) -> UppercaseRule:
    return UppercaseRule(message)
