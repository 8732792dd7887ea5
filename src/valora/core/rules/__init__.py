"""
Rule families for the Valora validation engine.

Every family builds on ValidationRule and plugs into the same error-reporting
contract; there is no central registry of rule kinds. The lower-case factory
functions are the declaration vocabulary, the classes are exported for
subclassing and isinstance checks.
"""

from .array import (
    EachRule,
    SomeRule,
    array_contains,
    array_length,
    array_max_size,
    array_min_size,
    array_not_empty,
    array_unique,
    each,
    is_array,
    some,
)
from .asynchronous import AsyncRule, TimeoutRule, async_rule, timeout
from .base import CustomRule, ValidationRule, custom
from .boolean import is_boolean, is_false, is_true
from .business import credit_card, iban, phone, ssn, url_slug
from .common import DefinedRule, RequiredRule, TypeRule, defined, is_object, is_type, required
from .comparison import (
    FieldRef,
    between,
    different_from,
    equal_to,
    greater_than,
    greater_than_or_equal,
    less_than,
    less_than_or_equal,
    not_equal_to,
    not_one_of,
    one_of,
    ref,
    same_as,
)
from .date import (
    is_after,
    is_before,
    is_date,
    is_future,
    is_past,
    is_today,
    is_weekday,
    is_weekend,
    max_age,
    max_date,
    min_age,
    min_date,
    within,
)
from .file import file_extension_in, image_dimensions, max_file_size, mime_type, min_file_size
from .logic import AndRule, IfThenElseRule, NotRule, OrRule, XorRule, and_, if_then_else, not_, or_, xor
from .number import (
    finite,
    in_range,
    integer,
    is_number,
    maximum,
    minimum,
    multiple_of,
    negative,
    non_negative,
    non_positive,
    positive,
    safe_integer,
)
from .object import has_keys, matches_schema, max_keys, min_keys, strict_keys
from .string import (
    alpha,
    alphanumeric,
    contains,
    email,
    ends_with,
    is_string,
    length,
    lowercase,
    matches,
    max_length,
    min_length,
    not_empty,
    numeric,
    starts_with,
    trimmed,
    uppercase,
    url,
    uuid,
)

__all__ = [
    # Base
    "ValidationRule",
    "CustomRule",
    "custom",
    # Common
    "RequiredRule",
    "DefinedRule",
    "TypeRule",
    "required",
    "defined",
    "is_type",
    "is_object",
    # Logic
    "AndRule",
    "OrRule",
    "IfThenElseRule",
    "NotRule",
    "XorRule",
    "and_",
    "or_",
    "if_then_else",
    "not_",
    "xor",
    # String
    "is_string",
    "not_empty",
    "trimmed",
    "min_length",
    "max_length",
    "length",
    "starts_with",
    "ends_with",
    "contains",
    "matches",
    "email",
    "url",
    "uuid",
    "alpha",
    "alphanumeric",
    "numeric",
    "lowercase",
    "uppercase",
    # Number
    "is_number",
    "integer",
    "safe_integer",
    "finite",
    "minimum",
    "maximum",
    "in_range",
    "positive",
    "negative",
    "non_negative",
    "non_positive",
    "multiple_of",
    # Boolean
    "is_boolean",
    "is_true",
    "is_false",
    # Date
    "is_date",
    "min_date",
    "max_date",
    "is_after",
    "is_before",
    "is_past",
    "is_future",
    "is_today",
    "is_weekday",
    "is_weekend",
    "min_age",
    "max_age",
    "within",
    # Array
    "EachRule",
    "SomeRule",
    "is_array",
    "array_not_empty",
    "array_min_size",
    "array_max_size",
    "array_length",
    "array_unique",
    "array_contains",
    "each",
    "some",
    # Comparison
    "FieldRef",
    "ref",
    "equal_to",
    "not_equal_to",
    "greater_than",
    "greater_than_or_equal",
    "less_than",
    "less_than_or_equal",
    "between",
    "one_of",
    "not_one_of",
    "same_as",
    "different_from",
    # Business
    "credit_card",
    "iban",
    "phone",
    "ssn",
    "url_slug",
    # File
    "mime_type",
    "file_extension_in",
    "min_file_size",
    "max_file_size",
    "image_dimensions",
    # Object
    "matches_schema",
    "min_keys",
    "max_keys",
    "has_keys",
    "strict_keys",
    # Async
    "AsyncRule",
    "TimeoutRule",
    "async_rule",
    "timeout",
]
