"""
semaphore-config — configuration error taxonomy.

File: src/semaphore_config/config/errors.py
Last updated: 2026-10-17

Purpose
- Define the typed failures raised while loading, resolving and consuming config.

Functional requirements
- Every failure is unrecoverable; callers stop the process with a clear message.
- Secret values never appear in rendered messages.
"""

from __future__ import annotations

from collections.abc import Sequence

CONFIG_FILE_HINT = (
    "Cannot find configuration! Use --config parameter to point to a JSON file "
    "generated by `semaphore-config setup`."
)


class ConfigError(ValueError):
    """Base class for operator-facing configuration failures."""


class SchemaError(LookupError):
    """Raised when an internal path does not address a real record field.

    This indicates a programming defect in one of the attribute tables, never an
    operator mistake, so it is deliberately not a ``ConfigError``.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"invalid config attribute {path!r}: {reason}")


class ConfigDecodeError(ConfigError):
    """Raised when the configuration file is missing or is not valid JSON."""

    def __init__(self, message: str, *, hint: str | None = CONFIG_FILE_HINT) -> None:
        self.hint = hint
        rendered = message if hint is None else f"{message}\n{hint}"
        super().__init__(rendered)


class CoercionError(ConfigError):
    """Raised when a value cannot be converted to the declared field type."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.reason = message
        super().__init__(f"{path}: {message}")


class ConfigValidationError(ConfigError):
    """Raised with every pattern mismatch collected during validation."""

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages = tuple(messages)
        if not self.messages:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item}" for item in self.messages)
        super().__init__(f"invalid config:\n{rendered}")


class DialectError(ConfigError):
    """Raised when no storage backend is selected or the selection is unsupported."""


__all__ = [
    "CONFIG_FILE_HINT",
    "CoercionError",
    "ConfigDecodeError",
    "ConfigError",
    "ConfigValidationError",
    "DialectError",
    "SchemaError",
]
