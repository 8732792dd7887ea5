"""
Validator facade.

The Validator bundles a registry, a materializer, an evaluator and an engine
configuration behind the calls an application actually makes:

- ``materialize(shape, raw)``: build a shape instance from parsed input
- ``validate(instance)``: evaluate an instance, returning a ValidationResult
- ``parse(shape, raw)``: materialize then validate, returning the instance or
  raising ShapeValidationError; this is the hook web framework adapters call

Module-level helpers of the same names use a Validator over the default
registry, or over the registry the shape was declared against.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from .core.config import EngineConfig
from .core.evaluator import Evaluator
from .core.exceptions import ShapeValidationError, UnknownShapeError
from .core.materializer import Materializer
from .core.models import RuleFault, ValidationResult
from .core.registry import MetadataRegistry, default_registry
from .decorators import REGISTRY_ATTRIBUTE

logger = logging.getLogger(__name__)


class Validator:
    """
    Entry point for materializing and validating shapes.

    Attributes:
        registry: Registry holding the shape declarations
        config: Engine configuration shared by materializer and evaluator
        materializer: Materializer bound to the registry
        evaluator: Evaluator bound to the registry

    Example:
        >>> validator = Validator()
        >>> result = validator.validate_sync(validator.materialize(User, {"name": ""}))
        >>> result.success
        False
    """

    def __init__(
        self,
        registry: Optional[MetadataRegistry] = None,
        config: Optional[EngineConfig] = None,
        diagnostics: Optional[Callable[[RuleFault], None]] = None,
    ):
        self.registry = registry if registry is not None else default_registry
        self.config = config if config is not None else EngineConfig()
        self.materializer = Materializer(self.registry, self.config)
        self.evaluator = Evaluator(self.registry, self.config, diagnostics)

    def materialize(self, shape: type, raw: Any) -> Any:
        return self.materializer.materialize(shape, raw)

    async def validate(self, instance: Any, shape: Optional[type] = None) -> ValidationResult:
        """
        Validate a shape instance.

        Args:
            instance: Instance to validate
            shape: Shape to validate against; defaults to the instance's class

        Returns:
            ValidationResult with every failure in declaration order

        Raises:
            UnknownShapeError: If the shape was never declared
        """
        if shape is None:
            if isinstance(instance, Mapping):
                raise UnknownShapeError(type(instance))
            shape = type(instance)
        return await self.evaluator.evaluate(shape, instance)

    def validate_sync(self, instance: Any, shape: Optional[type] = None) -> ValidationResult:
        """
        Validate from synchronous code.

        Runs its own event loop, so it cannot be called from a running loop;
        await ``validate`` there instead.
        """
        return asyncio.run(self.validate(instance, shape))

    async def validate_raw(self, shape: type, raw: Any) -> ValidationResult:
        """Materialize ``raw`` as ``shape`` and validate the result."""
        return await self.validate(self.materialize(shape, raw), shape)

    async def parse(self, shape: type, raw: Any) -> Any:
        """
        Materialize and validate, raising on failure.

        Args:
            shape: Declared shape class
            raw: Parsed input

        Returns:
            The validated instance

        Raises:
            ShapeValidationError: If validation fails; carries the ValidationResult
        """
        result = await self.validate_raw(shape, raw)
        if not result.success:
            logger.debug(f"Rejecting {shape.__qualname__}: {len(result.errors)} error(s)")
            raise ShapeValidationError(result, shape.__qualname__)
        return result.data

    def parse_sync(self, shape: type, raw: Any) -> Any:
        return asyncio.run(self.parse(shape, raw))


def _validator_for(shape: Any, registry: Optional[MetadataRegistry]) -> Validator:
    if registry is None:
        registry = getattr(shape, REGISTRY_ATTRIBUTE, None)
    return Validator(registry)


def materialize(shape: type, raw: Any, registry: Optional[MetadataRegistry] = None) -> Any:
    """Build an instance of ``shape`` from raw input."""
    return _validator_for(shape, registry).materialize(shape, raw)


async def validate(instance: Any, registry: Optional[MetadataRegistry] = None) -> ValidationResult:
    """Validate a shape instance against its own class."""
    return await _validator_for(type(instance), registry).validate(instance)


def validate_sync(instance: Any, registry: Optional[MetadataRegistry] = None) -> ValidationResult:
    """Validate a shape instance from synchronous code."""
    return _validator_for(type(instance), registry).validate_sync(instance)


async def parse(shape: type, raw: Any, registry: Optional[MetadataRegistry] = None) -> Any:
    """Materialize and validate ``raw``, raising ShapeValidationError on failure."""
    return await _validator_for(shape, registry).parse(shape, raw)
