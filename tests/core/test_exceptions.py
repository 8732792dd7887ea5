"""
Tests for custom exceptions.
"""

import pytest

from valora.core.exceptions import (
    ConfigurationError,
    DeclarationError,
    DuplicateFieldError,
    ShapeValidationError,
    UnknownShapeError,
    UnresolvedShapeError,
    ValoraError,
)
from valora.core.models import FailureRecord, ValidationResult


class Invoice:
    pass


def test_declaration_error_message():
    """Test declaration error message formatting."""
    error = DuplicateFieldError("field 'name' is already declared")
    assert str(error) == "Declaration Error: field 'name' is already declared"


def test_unknown_shape_error_names_shape():
    """Test unknown shape errors carry and name the shape."""
    error = UnknownShapeError(Invoice)
    assert error.shape is Invoice
    assert str(error) == "Declaration Error: shape Invoice has no registered metadata"


def test_unresolved_shape_error():
    """Test unresolved shape errors name the field and the reason."""
    error = UnresolvedShapeError(Invoice, "lines", "NameError: name 'Line' is not defined")
    assert error.field_name == "lines"
    assert "Invoice.lines" in str(error)
    assert "NameError" in str(error)


def test_shape_validation_error():
    """Test validation error message formatting and result access."""
    result = ValidationResult.from_errors(
        [
            FailureRecord(path=("total",), rule="min", message="Must be at least 0"),
            FailureRecord(path=("lines",), rule="nested.required", message="Nested property lines is required"),
        ]
    )
    error = ShapeValidationError(result, "Invoice")
    assert str(error) == "Validation Error: 2 error(s) in Invoice"
    assert error.errors == result.errors
    assert error.result is result


@pytest.mark.parametrize(
    "error_class",
    [DeclarationError, DuplicateFieldError, ConfigurationError, ShapeValidationError],
)
def test_hierarchy(error_class):
    """Test every engine error derives from ValoraError."""
    assert issubclass(error_class, ValoraError)
