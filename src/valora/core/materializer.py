"""
Materializer for the Valora validation engine

The materializer turns loosely typed input, typically parsed JSON, into an
instance of a declared shape with nested shapes instantiated. It never
validates: values are copied as they are, and whatever does not fit the
declared structure is left for the evaluator to report.

- An instance of the shape is returned unchanged.
- A mapping becomes a new instance, created without calling ``__init__``.
  Declared fields present in the mapping are copied; absent ones stay unset.
- Nested fields are materialized recursively, arrays element by element.
  Nested values that are not mappings are passed through unchanged.
- Undeclared keys are dropped unless ``keep_unknown_fields`` is configured;
  even then, keys that are not public identifiers or that name a class
  attribute are dropped.
- Any other top-level input yields an instance with every field absent.

Only declaration errors are raised: UnknownShapeError for an undeclared shape
and UnresolvedShapeError for a nested reference that cannot be resolved.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .config import EngineConfig
from .registry import FieldMetadata, MetadataRegistry, default_registry

logger = logging.getLogger(__name__)


class Materializer:
    """
    Converts raw input into shape instances.

    Attributes:
        registry: Registry holding the shape declarations
        config: Engine configuration
    """

    def __init__(self, registry: Optional[MetadataRegistry] = None, config: Optional[EngineConfig] = None):
        self.registry = registry if registry is not None else default_registry
        self.config = config if config is not None else EngineConfig()

    def materialize(self, shape: type, raw: Any) -> Any:
        """
        Build an instance of ``shape`` from raw input.

        Args:
            shape: Declared shape class
            raw: Mapping, existing instance, or any other value

        Returns:
            An instance of ``shape``

        Raises:
            UnknownShapeError: If ``shape`` was never declared
            UnresolvedShapeError: If a nested reference cannot be resolved
        """
        metadata = self.registry.lookup(shape)
        if isinstance(raw, shape):
            return raw

        instance = shape.__new__(shape)
        if not isinstance(raw, Mapping):
            logger.debug(f"Materializing {shape.__qualname__} from non-mapping {type(raw).__name__}")
            return instance

        for entry in metadata:
            if entry.name not in raw:
                continue
            value = raw[entry.name]
            if entry.is_nested:
                value = self._materialize_nested(shape, entry, value)
            object.__setattr__(instance, entry.name, value)

        if self.config.keep_unknown_fields:
            for key, value in raw.items():
                if key in metadata.fields:
                    continue
                if not isinstance(key, str) or not key.isidentifier() or key.startswith("_") or hasattr(shape, key):
                    logger.debug(f"Dropping unknown key {key!r} from {shape.__qualname__} input")
                    continue
                object.__setattr__(instance, key, value)

        return instance

    def _materialize_nested(self, owner: type, entry: FieldMetadata, value: Any) -> Any:
        target = self.registry.resolve(entry, owner)
        if not entry.is_array:
            return self._materialize_value(target, value)
        if not isinstance(value, (list, tuple)):
            return value
        return [self._materialize_value(target, item) for item in value]

    def _materialize_value(self, target: type, value: Any) -> Any:
        if isinstance(value, target) or not isinstance(value, Mapping):
            return value
        return self.materialize(target, value)


def dump(value: Any) -> Any:
    """
    Convert a shape instance back into plain data.

    Instances become dicts of their set attributes, recursively; lists and
    tuples become lists; mappings keep their keys. Other values are returned
    unchanged.

    Example:
        >>> dump(materialize(User, {"name": "Ada", "tags": ["x"]}))
        {'name': 'Ada', 'tags': ['x']}
    """
    if isinstance(value, Mapping):
        return {key: dump(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [dump(item) for item in value]
    if isinstance(value, (str, bytes, int, float, bool)) or value is None:
        return value
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return {key: dump(item) for key, item in vars(value).items() if not key.startswith("_")}
    return value
