"""
Validation Reporter Components for Valora

This module provides components for formatting and outputting validation results
in various formats. It supports:
- Human-readable string formatting
- Dictionary conversion
- JSON serialization, checked against a JSON schema of the result format

The serialized form is the one framework hooks translate into their own error
responses:

    {"success": false, "errors": [{"path": ["items", 0, "sku"], "rule": "required",
                                   "message": "This field is required"}]}
"""

import json
from typing import Any, Dict, List

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ..core.models import FieldPath, ValidationResult

RESULT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "success": {"type": "boolean"},
        "errors": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "path": {
                        "type": "array",
                        "items": {"anyOf": [{"type": "string"}, {"type": "integer", "minimum": 0}]},
                    },
                    "rule": {"type": "string", "minLength": 1},
                    "message": {"type": "string"},
                },
                "required": ["path", "rule", "message"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["success", "errors"],
    "additionalProperties": False,
    "if": {"properties": {"success": {"const": True}}},
    "then": {"properties": {"errors": {"maxItems": 0}}},
    "else": {"properties": {"errors": {"minItems": 1}}},
}


def format_path(path: FieldPath) -> str:
    """
    Render a field path in dotted form.

    Example:
        >>> format_path(("items", 0, "sku"))
        'items[0].sku'
    """
    rendered = ""
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = str(segment)
    return rendered


class ValidationReporter:
    """
    Reporter for formatting and outputting validation results.

    This class provides static methods for converting ValidationResult instances
    into various formats suitable for different use cases, such as human-readable
    output, dictionary representation, or JSON serialization.
    """

    @staticmethod
    def format_result(result: ValidationResult) -> str:
        """
        Format a validation result as a human-readable string.

        Args:
            result: ValidationResult instance to format

        Returns:
            str: Formatted string representation of the validation result

        Example:
            >>> print(ValidationReporter.format_result(result))
            Validation failed with the following errors:
              - address.city: This field is required (required)
        """
        if result.success:
            return "Validation passed successfully"

        lines = ["Validation failed with the following errors:"]
        for error in result.errors:
            location = format_path(error.path) or "<root>"
            lines.append(f"  - {location}: {error.message} ({error.rule})")
        return "\n".join(lines)

    @staticmethod
    def to_dict(result: ValidationResult) -> Dict[str, Any]:
        """
        Convert a validation result to a dictionary.

        Args:
            result: ValidationResult instance to convert

        Returns:
            Dict[str, Any]: Dictionary representation of the validation result
        """
        return result.to_dict()

    @staticmethod
    def to_json(result: ValidationResult) -> str:
        """
        Convert a validation result to JSON.

        Args:
            result: ValidationResult instance to convert

        Returns:
            str: JSON string representation of the validation result
        """
        return json.dumps(ValidationReporter.to_dict(result), indent=2)

    @staticmethod
    def schema_errors(payload: Any) -> List[str]:
        """
        Check a serialized result against RESULT_SCHEMA.

        Args:
            payload: Parsed JSON, such as the output of ``to_dict``

        Returns:
            List[str]: Schema violations; empty if the payload conforms
        """
        try:
            json_validate(instance=payload, schema=RESULT_SCHEMA)
        except JsonSchemaError as e:
            return [f"Schema validation failed: {e.message}"]
        return []

    @staticmethod
    def from_json(text: str) -> Dict[str, Any]:
        """
        Parse a serialized result, checking it against RESULT_SCHEMA.

        Raises:
            ValueError: If the text is not JSON or does not match the schema
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON input: {e}") from e
        problems = ValidationReporter.schema_errors(payload)
        if problems:
            raise ValueError(problems[0])
        return payload
