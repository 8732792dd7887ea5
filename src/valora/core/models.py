"""
Core data models for the validation engine.

This module provides the value objects passed between the rules, the evaluator
and callers:

- MISSING: sentinel standing for a field absent from an instance
- RuleFailure: what a single rule reports when it does not pass
- FailureRecord: a RuleFailure addressed by its field path
- ValidationResult: the aggregated, ordered report of one validation call
- ValidationContext: per-field state handed to every rule check

All of these are created per call and owned by the caller; none of them is
shared between concurrent validations.

Example:
    >>> record = FailureRecord(path=("address", "city"), rule="required",
    ...                        message="This field is required")
    >>> ValidationResult.from_errors([record]).to_dict()
    {'success': False, 'errors': [{'path': ['address', 'city'], 'rule': 'required',
    'message': 'This field is required'}]}
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from .config import EngineConfig

PathSegment = Union[str, int]
FieldPath = Tuple[PathSegment, ...]


class _Missing:
    """Type of the MISSING sentinel."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()


def is_absent(value: Any, none_is_absent: bool = True) -> bool:
    """Return True if a field value counts as absent."""
    if value is MISSING:
        return True
    return none_is_absent and value is None


@dataclass(frozen=True)
class RuleFailure:
    """
    Outcome of a rule that did not pass.

    Attributes:
        rule: Identifier of the rule (or combinator) reporting the failure
        message: Resolved message, after override and parameter interpolation
        details: Failures of child rules, kept for diagnostics only
        path: Location of the failure below the validated field, such as an item index
        cause: Exception raised by the check, if the failure is a rule fault
    """

    rule: str
    message: str
    details: Tuple["RuleFailure", ...] = ()
    path: FieldPath = ()
    cause: Optional[BaseException] = field(default=None, compare=False)

    def at(self, path: FieldPath) -> "FailureRecord":
        """Address this failure at a field path."""
        return FailureRecord(path=tuple(path) + self.path, rule=self.rule, message=self.message)


@dataclass(frozen=True)
class FailureRecord:
    """
    One reported rule violation.

    Attributes:
        path: Field names and array indices from the validated root to the field
        rule: Identifier of the failing rule
        message: Resolved failure message
    """

    path: FieldPath
    rule: str
    message: str

    def prefixed(self, *segments: PathSegment) -> "FailureRecord":
        """Return a copy whose path starts with the given segments."""
        return replace(self, path=tuple(segments) + self.path)

    @property
    def field(self) -> str:
        """Name of the innermost field in the path."""
        names = [segment for segment in self.path if isinstance(segment, str)]
        return names[-1] if names else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a JSON-serializable dictionary."""
        return {"path": list(self.path), "rule": self.rule, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """
    Aggregated result of validating one instance.

    ``errors`` is empty if and only if ``success`` is True; the constructor
    refuses any other combination.

    Attributes:
        success: Whether every rule passed
        errors: Failure records in declaration order
        data: The validated instance
    """

    success: bool
    errors: Tuple[FailureRecord, ...] = ()
    data: Any = field(default=None, compare=False)

    def __post_init__(self):
        """Validate the success/errors invariant."""
        object.__setattr__(self, "errors", tuple(self.errors))
        if self.success == bool(self.errors):
            raise ValueError("success must be True exactly when errors is empty")

    @classmethod
    def from_errors(cls, errors: Iterable[FailureRecord], data: Any = None) -> "ValidationResult":
        """Build a result whose success flag follows from the errors."""
        errors = tuple(errors)
        return cls(success=not errors, errors=errors, data=data)

    def errors_for(self, *path: PathSegment) -> Tuple[FailureRecord, ...]:
        """Return the records whose path starts with the given segments."""
        return tuple(e for e in self.errors if e.path[: len(path)] == tuple(path))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to its serialized form."""
        return {"success": self.success, "errors": [e.to_dict() for e in self.errors]}


@dataclass
class ValidationContext:
    """
    State handed to rule checks for one field.

    Attributes:
        path: Path of the field being validated
        data: Instance owning the field, used by cross-field rules
        root: Top-level instance of the validation call
        registry: Registry driving the validation
        diagnostics: Optional callback receiving rule faults
        config: Engine configuration in effect for the call
    """

    path: FieldPath = ()
    data: Any = None
    root: Any = None
    registry: Any = None
    diagnostics: Optional[Callable[["RuleFault"], None]] = None
    config: EngineConfig = field(default_factory=EngineConfig)

    @property
    def field(self) -> str:
        """Name of the field being validated."""
        names = [segment for segment in self.path if isinstance(segment, str)]
        return names[-1] if names else ""

    def lookup(self, dotted_path: str) -> Any:
        """
        Read a sibling value by dotted path.

        The path is resolved against ``data`` (the instance owning the field),
        walking mappings by key and objects by attribute.

        Args:
            dotted_path: Path such as ``"password"`` or ``"address.city"``

        Returns:
            The referenced value, or MISSING if any segment is absent
        """
        value = self.data
        for key in dotted_path.split("."):
            value = read_field(value, key)
            if value is MISSING or value is None:
                return MISSING
        return value

    def report_fault(self, fault: "RuleFault") -> None:
        """Pass a rule fault to the diagnostics callback, if any."""
        if self.diagnostics is not None:
            self.diagnostics(fault)


@dataclass(frozen=True)
class RuleFault:
    """
    Diagnostic record of a rule whose check raised.

    Attributes:
        path: Path of the field being validated
        rule: Identifier of the faulting rule
        error: The exception raised by the check
    """

    path: FieldPath
    rule: str
    error: BaseException


def read_field(container: Any, name: str) -> Any:
    """
    Read a field from a mapping or an object.

    Args:
        container: Mapping or object holding the field
        name: Field name

    Returns:
        The field value, or MISSING if the field is not present
    """
    if container is None or container is MISSING:
        return MISSING
    if isinstance(container, Mapping):
        return container.get(name, MISSING)
    try:
        return vars(container).get(name, MISSING)
    except TypeError:
        return getattr(container, name, MISSING)
