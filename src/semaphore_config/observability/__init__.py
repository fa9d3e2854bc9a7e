"""Public observability primitives: structured JSON-lines logging with redaction."""

from semaphore_config.observability.logging import (
    REDACTED_VALUE,
    LoggingConfig,
    LogRedactor,
    StructuredLoggingHandle,
    default_log_redactor,
    get_active_logging_handle,
    is_sensitive_key,
    setup_logging,
    setup_structured_logging,
    shutdown_logging,
)

__all__ = [
    "LogRedactor",
    "LoggingConfig",
    "REDACTED_VALUE",
    "StructuredLoggingHandle",
    "default_log_redactor",
    "get_active_logging_handle",
    "is_sensitive_key",
    "setup_logging",
    "setup_structured_logging",
    "shutdown_logging",
]
