"""
Valora - Declarative Shape Validation

This package validates loosely typed data against classes annotated with
composable rule declarations. It includes:

- A declaration layer (``@shape``, ``field``, ``nested``)
- A materializer turning parsed JSON into shape instances
- An asynchronous evaluator producing per-field error reports
- Rule families for strings, numbers, dates, arrays, comparisons, business
  identifiers, files, objects and asynchronous checks, plus logical combinators

Example:
    >>> from valora import shape, field, required, min_length, validate_sync, materialize
    >>> @shape
    ... class User:
    ...     name = field(required(), min_length(2))
    >>> validate_sync(materialize(User, {"name": "A"})).errors[0].message
    'Must be at least 2 characters'
"""

__version__ = "0.1.0"
__author__ = "Valora Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 12):
    raise RuntimeError("Valora requires Python 3.12 or higher")

from .core import (
    MISSING,
    ConfigurationError,
    DeclarationError,
    DuplicateFieldError,
    DuplicateRuleError,
    EngineConfig,
    Evaluator,
    FailureRecord,
    Materializer,
    MetadataRegistry,
    RegistryFrozenError,
    ShapeValidationError,
    UnknownShapeError,
    UnresolvedShapeError,
    ValidationContext,
    ValidationResult,
    ValoraError,
    default_registry,
    dump,
)
from .core.rules import *  # noqa: F401,F403
from .core.rules import __all__ as _rules_all
from .decorators import field, nested, shape
from .utils.reporter import ValidationReporter
from .validator import Validator, materialize, parse, validate, validate_sync

__all__ = [
    "shape",
    "field",
    "nested",
    "Validator",
    "materialize",
    "validate",
    "validate_sync",
    "parse",
    "dump",
    "MetadataRegistry",
    "default_registry",
    "Materializer",
    "Evaluator",
    "EngineConfig",
    "MISSING",
    "FailureRecord",
    "ValidationContext",
    "ValidationResult",
    "ValidationReporter",
    "ValoraError",
    "DeclarationError",
    "DuplicateFieldError",
    "DuplicateRuleError",
    "RegistryFrozenError",
    "UnknownShapeError",
    "UnresolvedShapeError",
    "ConfigurationError",
    "ShapeValidationError",
] + list(_rules_all)
