"""
Engine configuration.

EngineConfig gathers the few knobs that change how the materializer and the
evaluator treat data. It carries no state of its own and can be shared between
any number of concurrent validations.
"""

from dataclasses import dataclass

from .exceptions import ConfigurationError

DEFAULT_FAULT_MESSAGE = "Rule evaluation failed"


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for materialization and evaluation.

    Attributes:
        none_is_absent: Treat an explicit ``None`` like a missing key when deciding
            whether an optional field is skipped
        keep_unknown_fields: Copy input keys that are not declared on the shape
            onto the materialized instance instead of dropping them
        fault_message: Message prefix used when a rule's check raises
        log_faults: Log rule faults through the evaluator's logger
    """

    none_is_absent: bool = True
    keep_unknown_fields: bool = False
    fault_message: str = DEFAULT_FAULT_MESSAGE
    log_faults: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        for name in ("none_is_absent", "keep_unknown_fields", "log_faults"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be a bool")
        if not isinstance(self.fault_message, str) or not self.fault_message.strip():
            raise ConfigurationError("fault_message must be a non-empty string")
