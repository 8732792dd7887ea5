"""
Declaration layer for Valora shapes.

Shapes are plain classes decorated with ``@shape``. Fields are declared as
class attributes holding ``field(...)`` or ``nested(...)`` markers, in the
order they should be validated:

    @shape
    class Address:
        city = field(required(), min_length(2))
        zip_code = field(matches(r"^\\d{5}$"), optional=True)

    @shape
    class User:
        name = field(required())
        address = nested(lambda: Address)
        previous = nested(lambda: Address, each=True, optional=True)

The decorator is the only caller of the registry's registration API. It
registers every marker, removes the markers from the class so that absent
fields stay absent on instances, copies the fields of decorated base classes,
and freezes the shape. Declaration mistakes raise DeclarationError subclasses
at import time.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .core.exceptions import DeclarationError, DuplicateFieldError
from .core.registry import MetadataRegistry, default_registry
from .core.rules.base import ValidationRule

logger = logging.getLogger(__name__)

REGISTRY_ATTRIBUTE = "__valora_registry__"


class FieldDeclaration:
    """Marker for a field with a list of rules."""

    def __init__(self, rules: Tuple[ValidationRule, ...], optional: bool = False):
        for rule in rules:
            if not isinstance(rule, ValidationRule):
                raise DeclarationError(f"field() expects ValidationRule instances, got {rule!r}")
        self.rules = rules
        self.optional = optional

    def register(self, registry: MetadataRegistry, shape: type, name: str) -> None:
        registry.declare_field(shape, name, optional=self.optional)
        for rule in self.rules:
            registry.register_rule(shape, name, rule)


class NestedDeclaration(FieldDeclaration):
    """Marker for a field holding a nested shape, or an array of them."""

    def __init__(
        self,
        shape_ref: Callable[[], type],
        rules: Tuple[ValidationRule, ...],
        each: bool = False,
        optional: bool = False,
        message: Optional[str] = None,
    ):
        super().__init__(rules, optional)
        if not callable(shape_ref):
            raise DeclarationError(f"nested() expects a callable returning a shape, got {shape_ref!r}")
        self.shape_ref = shape_ref
        self.each = each
        self.message = message

    def register(self, registry: MetadataRegistry, shape: type, name: str) -> None:
        super().register(registry, shape, name)
        registry.register_nested_field(shape, name, self.shape_ref, is_array=self.each, message=self.message)


def field(*rules: ValidationRule, optional: bool = False) -> Any:
    """
    Declare a field validated by ``rules``, in order.

    Args:
        *rules: Rules to run against the field's value
        optional: Skip every non-presence rule when the value is absent

    Returns:
        A declaration marker consumed by ``@shape``
    """
    return FieldDeclaration(rules, optional)


def nested(
    shape_ref: Callable[[], type],
    *rules: ValidationRule,
    each: bool = False,
    optional: bool = False,
    message: Optional[str] = None,
) -> Any:
    """
    Declare a field holding a nested shape.

    Args:
        shape_ref: Zero-argument callable returning the nested shape, such as
            ``lambda: Address``; evaluated lazily so forward and self references work
        *rules: Rules to run against the field's value itself
        each: The field holds an array whose every element is validated
        optional: An absent value is not an error and is not validated
        message: Report this single message instead of the nested failures

    Returns:
        A declaration marker consumed by ``@shape``
    """
    return NestedDeclaration(shape_ref, rules, each=each, optional=optional, message=message)


def _inherit(registry: MetadataRegistry, cls: type, own: Dict[str, FieldDeclaration]) -> List[str]:
    """Copy the fields of decorated base classes onto ``cls``."""
    inherited: List[str] = []
    for base in reversed(cls.__mro__[1:]):
        if not registry.is_registered(base):
            continue
        for entry in registry.lookup(base):
            if entry.name in own:
                raise DuplicateFieldError(
                    f"field '{entry.name}' of {cls.__qualname__} is already declared on {base.__qualname__}"
                )
            if entry.name in inherited:
                continue
            registry.declare_field(cls, entry.name, optional=entry.optional)
            for rule in entry.rules:
                registry.register_rule(cls, entry.name, rule)
            if entry.is_nested:
                registry.register_nested_field(cls, entry.name, entry.shape_ref, entry.is_array, entry.message)
            inherited.append(entry.name)
    return inherited


def _shape_init(self, **values: Any) -> None:
    registry = getattr(type(self), REGISTRY_ATTRIBUTE)
    names = registry.lookup(type(self)).fields
    for key, value in values.items():
        if key not in names:
            raise TypeError(f"{type(self).__name__}() got an unexpected keyword argument '{key}'")
        object.__setattr__(self, key, value)


def _shape_eq(self, other: Any) -> bool:
    if type(other) is not type(self):
        return NotImplemented
    return vars(self) == vars(other)


def _shape_repr(self) -> str:
    args = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
    return f"{type(self).__name__}({args})"


def shape(cls: Optional[type] = None, *, registry: Optional[MetadataRegistry] = None) -> Any:
    """
    Class decorator declaring a validated shape.

    Can be used bare (``@shape``) or with a private registry
    (``@shape(registry=my_registry)``).

    Keyword ``__init__``, ``__eq__`` and ``__repr__`` methods are added unless
    the class defines its own.

    Raises:
        DuplicateFieldError: If a field is declared twice, including over an inherited field
        RegistryFrozenError: If the class was already declared
    """
    target_registry = registry if registry is not None else default_registry

    def wrap(klass: type) -> type:
        own: Dict[str, FieldDeclaration] = {
            name: value for name, value in vars(klass).items() if isinstance(value, FieldDeclaration)
        }
        inherited = _inherit(target_registry, klass, own)
        for name, declaration in own.items():
            declaration.register(target_registry, klass, name)
            delattr(klass, name)
        target_registry.freeze(klass)

        setattr(klass, REGISTRY_ATTRIBUTE, target_registry)
        if "__init__" not in vars(klass) and klass.__init__ is object.__init__:
            klass.__init__ = _shape_init
        if "__eq__" not in vars(klass):
            klass.__eq__ = _shape_eq
            klass.__hash__ = None
        if "__repr__" not in vars(klass):
            klass.__repr__ = _shape_repr

        logger.debug(f"Declared shape {klass.__qualname__} with {len(own) + len(inherited)} field(s)")
        return klass

    if cls is not None:
        return wrap(cls)
    return wrap
