"""
Configuration error classifications.

Raised when editor configuration built from defaults, YAML profiles or host
overrides fails validation.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigurationError(Exception):
    """Configuration could not be turned into a usable EditorConfig."""

    def __init__(self, message: str, errors: Optional[list[ValidationError]] = None,
                 source: Optional[str] = None):
        super().__init__(message)
        self.errors = errors or []
        self.source = source

    def __str__(self) -> str:
        base = super().__str__()
        if not self.errors:
            return base
        details = "; ".join(f"{e.field}: {e.message} (value: {e.value!r})" for e in self.errors)
        return f"{base}: {details}"
