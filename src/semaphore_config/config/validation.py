"""
semaphore-config — resolved config validation.

File: src/semaphore_config/config/validation.py
Last updated: 2026-10-17

Purpose
- Check resolved values against whole-string patterns and report every mismatch.

Functional requirements
- Normalize the listen port to ``:<number>`` before matching.
- Never include the value of a secret-bearing setting in a message.
- Reporting policy belongs to the caller; the default collects and raises once.
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Callable, Iterable
from typing import Final

from semaphore_config.config.accessor import get_value
from semaphore_config.config.errors import ConfigValidationError
from semaphore_config.config.model import ServerConfig
from semaphore_config.config.tables import KEY_MATERIAL_PATHS, VALIDATION_PATTERNS

ErrorReporter = Callable[[str], None]

PORT_SEPARATOR: Final[str] = ":"
_SECRET_MARKERS: Final[tuple[str, ...]] = ("assword", "ecret")


class ErrorCollector:
    """Reporter that keeps every message and raises them together."""

    __slots__ = ("_messages",)

    def __init__(self) -> None:
        self._messages: list[str] = []

    def __call__(self, message: str) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def raise_if_any(self) -> None:
        if self._messages:
            raise ConfigValidationError(self._messages)


def is_secret_path(path: str) -> bool:
    """Heuristic for settings whose values must be withheld from error text."""

    if path in KEY_MATERIAL_PATHS:
        return True
    lowered = path.lower()
    return any(marker in lowered for marker in _SECRET_MARKERS)


def normalize_port(port: str) -> str:
    if port.startswith(PORT_SEPARATOR):
        return port
    return PORT_SEPARATOR + port


def validate_config(
    config: ServerConfig,
    on_error: ErrorReporter,
    *,
    patterns: Iterable[tuple[str, str]] = VALIDATION_PATTERNS,
) -> int:
    """Validate ``config`` in place and return the number of reported problems."""

    port = normalize_port(config.port)
    if port != config.port:
        config.port = port

    failed: set[str] = set()
    for path, pattern in patterns:
        value = get_value(config, path)
        if re.fullmatch(pattern, value):
            continue
        failed.add(path)
        if is_secret_path(path):
            on_error(f"value of setting {path!r} is not valid! (must match pattern {pattern!r})")
        else:
            on_error(
                f"value of setting {path!r} is not valid: {value!r} "
                f"(must match pattern {pattern!r})"
            )

    for path in KEY_MATERIAL_PATHS:
        value = get_value(config, path)
        if path in failed or not value or decode_key(value) is not None:
            continue
        failed.add(path)
        on_error(f"value of setting {path!r} is not valid base64")

    return len(failed)


def check_config(config: ServerConfig) -> None:
    """Validate with the default policy: collect everything, then raise once."""

    collector = ErrorCollector()
    validate_config(config, collector)
    collector.raise_if_any()


def decode_key(value: str) -> bytes | None:
    """Decode standard base64 key material; ``None`` when malformed."""

    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


__all__ = [
    "ErrorCollector",
    "ErrorReporter",
    "PORT_SEPARATOR",
    "check_config",
    "decode_key",
    "is_secret_path",
    "normalize_port",
    "validate_config",
]
