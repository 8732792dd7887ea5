"""
Evaluator for the Valora validation engine

The evaluator checks a shape instance against every rule declared on its
shape and aggregates the outcome into one ValidationResult. For each field, in
declaration order:

1. The value is read; a field that was never set reads as MISSING.
2. An absent (MISSING, or None by default) optional field runs its presence
   rules only.
3. Every rule runs in order, synchronous and asynchronous alike; each failing
   rule contributes one FailureRecord at the field's path.
4. A nested field is checked structurally and validated recursively, with the
   field name (and element index for arrays) prefixed to every nested path.

Evaluation never stops early and never raises for data problems. A rule whose
check raises is reported as a failure of that rule; declaration errors still
propagate.

Nested fields report these structural failures:

- ``nested.required``: a required nested field is absent
- ``nested.array_expected``: an array field does not hold a list or tuple
- ``nested.type``: a value or element is not an instance of the nested shape
- ``nested.validation``: the collapsed record reported instead of the nested
  failures when the field was declared with a message
"""

import logging
from typing import Any, Callable, List, Optional

from .config import EngineConfig
from .models import (
    FailureRecord,
    FieldPath,
    RuleFault,
    ValidationContext,
    ValidationResult,
    is_absent,
    read_field,
)
from .registry import FieldMetadata, MetadataRegistry, default_registry

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Validates shape instances against their declared rules.

    The evaluator holds no per-call state; one instance can serve any number
    of concurrent evaluations.

    Attributes:
        registry: Registry holding the shape declarations
        config: Engine configuration
        diagnostics: Optional callback receiving every rule fault
    """

    def __init__(
        self,
        registry: Optional[MetadataRegistry] = None,
        config: Optional[EngineConfig] = None,
        diagnostics: Optional[Callable[[RuleFault], None]] = None,
    ):
        self.registry = registry if registry is not None else default_registry
        self.config = config if config is not None else EngineConfig()
        self.diagnostics = diagnostics

    async def evaluate(self, shape: type, instance: Any) -> ValidationResult:
        """
        Validate an instance against a shape.

        Args:
            shape: Declared shape class
            instance: Instance to validate, usually produced by the materializer

        Returns:
            ValidationResult listing every failure in declaration order

        Raises:
            UnknownShapeError: If ``shape`` was never declared
            UnresolvedShapeError: If a nested reference cannot be resolved
        """
        errors = await self._collect(shape, instance, (), instance)
        if errors:
            logger.debug(f"{shape.__qualname__} failed validation with {len(errors)} error(s)")
        return ValidationResult.from_errors(errors, data=instance)

    async def _collect(self, shape: type, instance: Any, path: FieldPath, root: Any) -> List[FailureRecord]:
        metadata = self.registry.lookup(shape)
        errors: List[FailureRecord] = []

        for entry in metadata:
            field_path = path + (entry.name,)
            value = read_field(instance, entry.name)
            skip = entry.optional and is_absent(value, self.config.none_is_absent)
            context = ValidationContext(
                path=field_path,
                data=instance,
                root=root,
                registry=self.registry,
                diagnostics=self.diagnostics,
                config=self.config,
            )

            for rule in entry.rules:
                if skip and not rule.presence:
                    continue
                failure = await rule.run(value, context)
                if failure is not None:
                    errors.append(failure.at(field_path))

            if entry.is_nested and not skip:
                errors.extend(await self._collect_nested(shape, entry, value, field_path, root))

        return errors

    async def _collect_nested(
        self,
        owner: type,
        entry: FieldMetadata,
        value: Any,
        path: FieldPath,
        root: Any,
    ) -> List[FailureRecord]:
        target = self.registry.resolve(entry, owner)

        if is_absent(value, self.config.none_is_absent):
            return [
                FailureRecord(path=path, rule="nested.required", message=f"Nested property {entry.name} is required")
            ]

        if entry.is_array:
            if not isinstance(value, (list, tuple)):
                return [
                    FailureRecord(
                        path=path, rule="nested.array_expected", message=f"Expected an array for {entry.name}"
                    )
                ]
            errors: List[FailureRecord] = []
            for index, item in enumerate(value):
                errors.extend(await self._collect_instance(target, item, path + (index,), root))
        else:
            errors = await self._collect_instance(target, value, path, root)

        if errors and entry.message is not None:
            return [FailureRecord(path=path, rule="nested.validation", message=entry.message)]
        return errors

    async def _collect_instance(self, target: type, value: Any, path: FieldPath, root: Any) -> List[FailureRecord]:
        if not isinstance(value, target):
            return [
                FailureRecord(path=path, rule="nested.type", message=f"Expected an instance of {target.__name__}")
            ]
        return await self._collect(target, value, path, root)
