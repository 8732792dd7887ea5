"""
Custom exceptions for the validation engine.

This module defines the hierarchy of custom exceptions used throughout the engine.
Two very different kinds of problems exist:

- Declaration errors: a programming mistake in the shape declarations, such as a
  field declared twice or a nested reference that cannot be resolved. These are
  raised and must reach the caller.
- Validation failures: data not matching a rule. These are never raised by the
  engine itself; they are returned inside a ValidationResult. ShapeValidationError
  exists only for callers that explicitly ask for raise-on-failure behaviour.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .models import ValidationResult


class ValoraError(Exception):
    """Base class for every error raised by the engine."""


class DeclarationError(ValoraError):
    """
    Raised when shape declarations are inconsistent.

    Declaration errors surface at module load time or on the first
    materialize/validate call touching the offending shape.

    Examples:
        * Duplicate field declarations
        * Registering against a frozen shape
        * Unresolvable nested shape references
    """

    def __str__(self) -> str:
        """Format declaration error message."""
        return f"Declaration Error: {super().__str__()}"


class DuplicateFieldError(DeclarationError):
    """
    Raised when a field is declared twice on the same shape.

    Examples:
        * Two ``field(...)`` declarations resolving to the same name
        * A nested marker registered twice for one field
        * A subclass redeclaring a field inherited from a base shape
    """


class DuplicateRuleError(DeclarationError):
    """Raised when the same rule object is attached twice to one field."""


class RegistryFrozenError(DeclarationError):
    """
    Raised when registering against a shape whose metadata is frozen.

    Shape metadata is frozen when its declaring decorator finishes, or the first
    time the materializer or evaluator looks it up.
    """


class UnknownShapeError(DeclarationError):
    """
    Raised when a shape was never declared against the registry.

    Examples:
        * Validating an instance of a plain, undecorated class
        * Materializing against a class registered in a different registry
    """

    def __init__(self, shape: Any):
        self.shape = shape
        name = getattr(shape, "__qualname__", repr(shape))
        super().__init__(f"shape {name} has no registered metadata")


class UnresolvedShapeError(DeclarationError):
    """
    Raised when a nested field's shape reference cannot be resolved.

    The reference is a zero-argument callable evaluated lazily. Resolution fails
    if the callable raises (typically a NameError for a forward reference that
    never got defined) or returns something that is not a declared shape.
    """

    def __init__(self, shape: Any, field_name: str, reason: str):
        self.shape = shape
        self.field_name = field_name
        name = getattr(shape, "__qualname__", repr(shape))
        super().__init__(f"cannot resolve nested shape for {name}.{field_name}: {reason}")


class ConfigurationError(ValoraError):
    """
    Raised when configuration is invalid.

    Examples:
        * Invalid EngineConfig values
        * Rule parameters that can never be satisfied (min greater than max)
    """


class ShapeValidationError(ValoraError):
    """
    Raised by ``Validator.parse`` when an input does not validate.

    The engine never raises this on its own; it is the boundary translation used
    by framework hooks that prefer exceptions to result objects.

    Attributes:
        result: The failed ValidationResult; its ``errors`` is never empty
        shape_name: Name of the shape that was validated
    """

    def __init__(self, result: "ValidationResult", shape_name: Optional[str] = None):
        self.result = result
        self.shape_name = shape_name or "shape"
        super().__init__(f"{len(result.errors)} error(s) in {self.shape_name}")

    @property
    def errors(self):
        """Failure records of the underlying result."""
        return self.result.errors

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"
