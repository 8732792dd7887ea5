"""
Core validation engine.

This package holds the engine proper: the metadata registry, the
materializer, the evaluator, the result model and the rule families. The
declaration layer and the Validator facade in the top-level package are thin
callers of it.
"""

from .config import EngineConfig
from .evaluator import Evaluator
from .exceptions import (
    ConfigurationError,
    DeclarationError,
    DuplicateFieldError,
    DuplicateRuleError,
    RegistryFrozenError,
    ShapeValidationError,
    UnknownShapeError,
    UnresolvedShapeError,
    ValoraError,
)
from .materializer import Materializer, dump
from .models import MISSING, FailureRecord, RuleFailure, RuleFault, ValidationContext, ValidationResult
from .registry import FieldMetadata, MetadataRegistry, ShapeMetadata, default_registry

__all__ = [
    "EngineConfig",
    "Evaluator",
    "Materializer",
    "dump",
    "MetadataRegistry",
    "FieldMetadata",
    "ShapeMetadata",
    "default_registry",
    "MISSING",
    "FailureRecord",
    "RuleFailure",
    "RuleFault",
    "ValidationContext",
    "ValidationResult",
    "ValoraError",
    "DeclarationError",
    "DuplicateFieldError",
    "DuplicateRuleError",
    "RegistryFrozenError",
    "UnknownShapeError",
    "UnresolvedShapeError",
    "ConfigurationError",
    "ShapeValidationError",
]
