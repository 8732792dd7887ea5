"""
Tests for the metadata registry.
"""

import pytest

from valora.core.exceptions import (
    DeclarationError,
    DuplicateFieldError,
    DuplicateRuleError,
    RegistryFrozenError,
    UnknownShapeError,
    UnresolvedShapeError,
)
from valora.core.registry import MetadataRegistry, default_registry
from valora.core.rules import max_length, min_length, required


class Account:
    pass


class Profile:
    pass


def test_register_rule_creates_field_in_order(registry):
    """Test rules are kept in registration order and fields are created on first use."""
    first, second = required(), min_length(3)
    registry.register_rule(Account, "name", first)
    registry.register_rule(Account, "name", second)
    registry.register_rule(Account, "email", required())

    metadata = registry.lookup(Account)
    assert metadata.field_names() == ("name", "email")
    assert metadata.fields["name"].rules == [first, second]


def test_declare_field_twice_raises(registry):
    """Test declaring the same field twice is a declaration error."""
    registry.declare_field(Account, "name")
    with pytest.raises(DuplicateFieldError) as exc_info:
        registry.declare_field(Account, "name")
    assert isinstance(exc_info.value, DeclarationError)
    assert str(exc_info.value).startswith("Declaration Error:")


def test_same_rule_object_twice_raises(registry):
    """Test attaching one rule object twice to a field raises."""
    rule = max_length(10)
    registry.register_rule(Account, "name", rule)
    with pytest.raises(DuplicateRuleError):
        registry.register_rule(Account, "name", rule)


def test_equal_but_distinct_rules_are_allowed(registry):
    """Test two separately built rules with the same parameters can coexist."""
    registry.register_rule(Account, "name", max_length(10))
    registry.register_rule(Account, "name", max_length(10))
    assert len(registry.lookup(Account).fields["name"].rules) == 2


def test_nested_field_registered_twice_raises(registry):
    """Test a second nested registration for one field raises."""
    registry.declare_field(Profile, "bio")
    registry.register_nested_field(Account, "profile", lambda: Profile)
    with pytest.raises(DuplicateFieldError):
        registry.register_nested_field(Account, "profile", lambda: Profile, is_array=True)


def test_lookup_unknown_shape_raises(registry):
    """Test looking up a shape never registered raises UnknownShapeError."""
    with pytest.raises(UnknownShapeError, match="Account"):
        registry.lookup(Account)


def test_lookup_freezes_shape(registry):
    """Test the first lookup freezes the shape against further registration."""
    registry.register_rule(Account, "name", required())
    assert registry.lookup(Account).frozen

    with pytest.raises(RegistryFrozenError):
        registry.register_rule(Account, "email", required())
    with pytest.raises(RegistryFrozenError):
        registry.mark_optional(Account, "name")


def test_freeze_all(registry):
    """Test freezing without a shape freezes every known shape."""
    registry.declare_field(Account, "name")
    registry.declare_field(Profile, "bio")
    registry.freeze()
    with pytest.raises(RegistryFrozenError):
        registry.declare_field(Profile, "avatar")


def test_resolve_caches_reference(registry):
    """Test the nested shape reference is evaluated once."""
    calls = []

    def reference():
        calls.append(1)
        return Profile

    registry.declare_field(Profile, "bio")
    registry.register_nested_field(Account, "profile", reference)
    entry = registry.lookup(Account).fields["profile"]

    assert registry.resolve(entry, Account) is Profile
    assert registry.resolve(entry, Account) is Profile
    assert len(calls) == 1


def test_resolve_failing_reference_raises(registry):
    """Test a reference raising NameError surfaces as UnresolvedShapeError."""
    registry.register_nested_field(Account, "profile", lambda: UndefinedShape)  # noqa: F821
    entry = registry.lookup(Account).fields["profile"]
    with pytest.raises(UnresolvedShapeError, match="Account.profile"):
        registry.resolve(entry, Account)


def test_resolve_undeclared_shape_raises(registry):
    """Test a reference to a class with no metadata raises."""
    registry.register_nested_field(Account, "profile", lambda: Profile)
    entry = registry.lookup(Account).fields["profile"]
    with pytest.raises(UnresolvedShapeError, match="not a declared shape"):
        registry.resolve(entry, Account)


def test_mark_optional(registry):
    """Test marking a field optional."""
    registry.declare_field(Account, "nickname")
    registry.mark_optional(Account, "nickname")
    assert registry.lookup(Account).fields["nickname"].optional


def test_is_registered_and_shapes(registry):
    """Test registry introspection helpers."""
    registry.declare_field(Account, "name")
    assert registry.is_registered(Account)
    assert Account in registry
    assert not registry.is_registered(Profile)
    assert registry.shapes() == (Account,)
    assert len(registry) == 1


def test_default_registry_is_shared():
    """Test the default registry is a module-level MetadataRegistry."""
    assert isinstance(default_registry, MetadataRegistry)
