"""Command Line Interface for Valora.

This module validates JSON documents against declared shapes from the command
line, which is handy for checking fixtures and configuration files in CI.

The CLI supports the following commands:
    - validate: Validate a JSON document against a shape
    - fields: Show the declared fields of a shape

Shapes are named by import path, ``package.module:ClassName``. JSON input can be
provided either as a direct string or as a file path prefixed with '@'.

Example Usage:
    python -m valora validate myapp.shapes:User @fixtures/user.json
    python -m valora validate myapp.shapes:User '{"name": "Ada"}' --format json
    python -m valora fields myapp.shapes:User
"""

import argparse
import importlib
import json
import logging
import os
import sys
from typing import Any, List, Optional

from .core.config import EngineConfig
from .core.exceptions import DeclarationError
from .decorators import REGISTRY_ATTRIBUTE
from .utils.reporter import ValidationReporter
from .validator import Validator

logger = logging.getLogger(__name__)


def load_shape(path: str) -> type:
    """Import a shape from a ``module:ClassName`` path.

    Args:
        path (str): Import path of the shape.

    Returns:
        type: The shape class.

    Raises:
        ValueError: If the path is malformed or does not name a class.
    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Shape must be given as module:ClassName, got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import {module_name}: {e}")
    target: Any = module
    for part in attribute.split("."):
        target = getattr(target, part, None)
        if target is None:
            raise ValueError(f"{module_name} has no attribute {attribute!r}")
    if not isinstance(target, type):
        raise ValueError(f"{path} is not a class")
    return target


def parse_json_input(json_str: str) -> Any:
    """Parse JSON input from either a string or file.

    Args:
        json_str (str): Either a JSON string or a file path prefixed with '@'.
                       Relative paths are resolved against the current directory.

    Returns:
        Any: Parsed JSON data.

    Raises:
        ValueError: If the JSON is invalid or the specified file is not found.
    """
    if json_str.startswith("@"):
        file_path = json_str[1:]
        if not os.path.isabs(file_path):
            file_path = os.path.join(os.getcwd(), file_path)

        if not os.path.exists(file_path):
            raise ValueError(f"File not found: {file_path}")

        with open(file_path, "r") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {file_path}: {e}")

    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON input: {e}")


def describe_fields(shape: type) -> List[str]:
    """List the declared fields of a shape with their rules.

    Args:
        shape (type): Declared shape class.

    Returns:
        List[str]: One line per field, in declaration order.
    """
    validator = Validator(getattr(shape, REGISTRY_ATTRIBUTE, None))
    lines = []
    for entry in validator.registry.lookup(shape):
        flags = []
        if entry.optional:
            flags.append("optional")
        if entry.is_nested:
            target = validator.registry.resolve(entry, shape)
            flags.append(f"{target.__name__}[]" if entry.is_array else target.__name__)
        rules = ", ".join(rule.name for rule in entry.rules) or "-"
        suffix = f" ({', '.join(flags)})" if flags else ""
        lines.append(f"- {entry.name}{suffix}: {rules}")
    return lines


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="valora", description="Validate JSON documents against Valora shapes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    validate = subparsers.add_parser("validate", help="Validate a JSON document against a shape")
    validate.add_argument("shape", help="Shape import path, module:ClassName")
    validate.add_argument("data", help="JSON string or @filename containing the document")
    validate.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    validate.add_argument(
        "--keep-unknown", action="store_true", help="Keep undeclared keys on the materialized instance"
    )

    fields = subparsers.add_parser("fields", help="Show the declared fields of a shape")
    fields.add_argument("shape", help="Shape import path, module:ClassName")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Args:
        argv: Arguments to parse instead of ``sys.argv``.

    Returns:
        int: Exit status; 0 when the document is valid, 1 when it is not,
        2 for usage, input or declaration errors.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        shape = load_shape(args.shape)

        if args.command == "fields":
            print(f"{shape.__qualname__}:")
            for line in describe_fields(shape):
                print(f"  {line}")
            return 0

        data = parse_json_input(args.data)
        validator = Validator(
            getattr(shape, REGISTRY_ATTRIBUTE, None),
            EngineConfig(keep_unknown_fields=args.keep_unknown),
        )
        result = await validator.validate_raw(shape, data)

    except (ValueError, DeclarationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.format == "json":
        print(ValidationReporter.to_json(result))
    else:
        print(ValidationReporter.format_result(result))
    return 0 if result.success else 1
