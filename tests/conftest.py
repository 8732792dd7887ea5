"""Shared fixtures for the Valora test suite."""

import asyncio
from typing import Any, Callable, Optional

import pytest

from valora.core.models import RuleFailure, ValidationContext
from valora.core.registry import MetadataRegistry
from valora.core.rules.base import ValidationRule
from valora.validator import Validator


@pytest.fixture
def registry() -> MetadataRegistry:
    """Fixture providing a private registry, so tests never touch the default one."""
    return MetadataRegistry()


@pytest.fixture
def validator(registry: MetadataRegistry) -> Validator:
    """Fixture providing a validator bound to the private registry."""
    return Validator(registry)


@pytest.fixture
def run() -> Callable[..., Optional[RuleFailure]]:
    """Fixture running a single rule against a value outside any shape."""

    def _run(rule: ValidationRule, value: Any, data: Any = None) -> Optional[RuleFailure]:
        context = ValidationContext(path=("value",), data=data, root=data)
        return asyncio.run(rule.run(value, context))

    return _run
