"""
Metadata Registry for the Valora validation engine

The registry associates rules with fields of declared shapes. It is written
once, at declaration time, by the declaration layer in ``valora.decorators``,
and only read afterwards by the materializer and the evaluator.

Shape metadata is append-only until frozen. A shape is frozen when its
declaring decorator finishes, or the first time it is looked up; any
registration after that raises RegistryFrozenError. Frozen metadata is safe to
share between any number of concurrent validations.

Nested fields reference their shape through a zero-argument callable so that
a shape can reference one declared later in the module, or itself. The
reference is resolved on first use and cached.

Example:
    >>> registry = MetadataRegistry()
    >>> registry.declare_field(User, "name")
    >>> registry.register_rule(User, "name", required())
    >>> registry.lookup(User).field_names()
    ('name',)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .exceptions import (
    DuplicateFieldError,
    DuplicateRuleError,
    RegistryFrozenError,
    UnknownShapeError,
    UnresolvedShapeError,
)

logger = logging.getLogger(__name__)

ShapeRef = Callable[[], type]

_UNRESOLVED = object()


@dataclass
class FieldMetadata:
    """
    Declared metadata of one field.

    Attributes:
        name: Field name, unique within the shape
        rules: Rules in declaration order, which is evaluation order
        is_nested: Whether the field holds a nested shape
        is_array: Whether a nested field holds an array of that shape
        shape_ref: Zero-argument callable returning the nested shape
        optional: Whether an absent value skips every non-presence rule
        message: Override collapsing nested failures into one record
    """

    name: str
    rules: List[Any] = field(default_factory=list)
    is_nested: bool = False
    is_array: bool = False
    shape_ref: Optional[ShapeRef] = None
    optional: bool = False
    message: Optional[str] = None
    _resolved: Any = field(default=_UNRESOLVED, repr=False, compare=False)


@dataclass
class ShapeMetadata:
    """
    Declared metadata of one shape.

    Attributes:
        shape: The declared class
        fields: Field metadata keyed by name, in declaration order
        frozen: Whether the metadata accepts further registrations
    """

    shape: type
    fields: Dict[str, FieldMetadata] = field(default_factory=dict)
    frozen: bool = False

    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.fields)

    def __iter__(self):
        return iter(self.fields.values())


class MetadataRegistry:
    """
    Registry of shape metadata.

    Every component accepts an injected registry; ``default_registry`` is used
    when none is given. Tests use private registries to stay independent.
    """

    def __init__(self):
        self._shapes: Dict[type, ShapeMetadata] = {}

    def _writable(self, shape: type) -> ShapeMetadata:
        metadata = self._shapes.get(shape)
        if metadata is None:
            metadata = ShapeMetadata(shape=shape)
            self._shapes[shape] = metadata
        elif metadata.frozen:
            raise RegistryFrozenError(f"shape {shape.__qualname__} is frozen")
        return metadata

    def _field(self, shape: type, field_name: str) -> FieldMetadata:
        metadata = self._writable(shape)
        existing = metadata.fields.get(field_name)
        if existing is None:
            existing = FieldMetadata(name=field_name)
            metadata.fields[field_name] = existing
        return existing

    def declare_field(self, shape: type, field_name: str, optional: bool = False) -> FieldMetadata:
        """
        Create a field entry.

        Args:
            shape: Declared class owning the field
            field_name: Field name
            optional: Whether the field may be absent

        Returns:
            The new FieldMetadata

        Raises:
            DuplicateFieldError: If the field already exists on the shape
            RegistryFrozenError: If the shape is frozen
        """
        metadata = self._writable(shape)
        if field_name in metadata.fields:
            raise DuplicateFieldError(f"field '{field_name}' is already declared on {shape.__qualname__}")
        entry = FieldMetadata(name=field_name, optional=optional)
        metadata.fields[field_name] = entry
        return entry

    def register_rule(self, shape: type, field_name: str, rule: Any) -> None:
        """
        Append a rule to a field, creating the field on first use.

        Raises:
            DuplicateRuleError: If the same rule object is already attached to the field
            RegistryFrozenError: If the shape is frozen
        """
        entry = self._field(shape, field_name)
        if any(existing is rule for existing in entry.rules):
            raise DuplicateRuleError(
                f"rule {rule!r} is attached twice to {shape.__qualname__}.{field_name}"
            )
        entry.rules.append(rule)

    def register_nested_field(
        self,
        shape: type,
        field_name: str,
        shape_ref: ShapeRef,
        is_array: bool = False,
        message: Optional[str] = None,
    ) -> None:
        """
        Mark a field as holding a nested shape, or an array of them.

        Args:
            shape: Declared class owning the field
            field_name: Field name
            shape_ref: Zero-argument callable returning the nested shape
            is_array: Whether the field holds an array of the nested shape
            message: Override reported instead of the nested failures

        Raises:
            DuplicateFieldError: If the field is already marked nested
            RegistryFrozenError: If the shape is frozen
        """
        if not callable(shape_ref):
            raise UnresolvedShapeError(shape, field_name, "shape reference is not callable")
        entry = self._field(shape, field_name)
        if entry.is_nested:
            raise DuplicateFieldError(
                f"field '{field_name}' is already nested on {shape.__qualname__}"
            )
        entry.is_nested = True
        entry.is_array = is_array
        entry.shape_ref = shape_ref
        entry.message = message

    def mark_optional(self, shape: type, field_name: str) -> None:
        self._field(shape, field_name).optional = True

    def freeze(self, shape: Optional[type] = None) -> None:
        """Freeze one shape, or every known shape when none is given."""
        if shape is None:
            for metadata in self._shapes.values():
                metadata.frozen = True
            return
        self._writable(shape).frozen = True
        logger.debug(f"Froze metadata for {shape.__qualname__}")

    def lookup(self, shape: type) -> ShapeMetadata:
        """
        Return the metadata of a shape, freezing it.

        Raises:
            UnknownShapeError: If nothing was ever registered against the shape
        """
        metadata = self._shapes.get(shape)
        if metadata is None:
            raise UnknownShapeError(shape)
        metadata.frozen = True
        return metadata

    def resolve(self, entry: FieldMetadata, owner: Optional[type] = None) -> type:
        """
        Resolve the shape referenced by a nested field, caching the result.

        Args:
            entry: Nested field metadata
            owner: Shape owning the field, used in error messages

        Raises:
            UnresolvedShapeError: If the reference raises or yields an undeclared shape
        """
        if entry._resolved is not _UNRESOLVED:
            return entry._resolved
        if not entry.is_nested or entry.shape_ref is None:
            raise UnresolvedShapeError(owner, entry.name, "field is not nested")
        try:
            target = entry.shape_ref()
        except Exception as e:
            raise UnresolvedShapeError(owner, entry.name, f"{type(e).__name__}: {e}") from e
        if not isinstance(target, type) or target not in self._shapes:
            raise UnresolvedShapeError(owner, entry.name, f"{target!r} is not a declared shape")
        entry._resolved = target
        return target

    def is_registered(self, shape: Any) -> bool:
        return shape in self._shapes

    def shapes(self) -> Tuple[type, ...]:
        return tuple(self._shapes)

    def __contains__(self, shape: Any) -> bool:
        return self.is_registered(shape)

    def __len__(self) -> int:
        return len(self._shapes)


default_registry = MetadataRegistry()
