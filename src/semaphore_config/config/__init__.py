"""
semaphore-config config package public API.

File: src/semaphore_config/config/__init__.py
Last updated: 2026-10-17

Purpose
- Export the record model, path accessor, layered loader, validator, dialect
  helpers, secret generation and runtime bundle.

Functional requirements
- Importing this package must not read files or the environment.
"""

from semaphore_config.config.accessor import get_value, leaf_paths, set_value
from semaphore_config.config.dialect import (
    DatabaseSettings,
    Dialect,
    connection_string,
    database_settings,
    describe_database,
    resolve_dialect,
)
from semaphore_config.config.errors import (
    CoercionError,
    ConfigDecodeError,
    ConfigError,
    ConfigValidationError,
    DialectError,
    SchemaError,
)
from semaphore_config.config.keygen import generate_secrets
from semaphore_config.config.loader import (
    apply_defaults,
    apply_environment,
    load_config,
    resolve_config,
)
from semaphore_config.config.model import (
    DbConfig,
    LdapMappings,
    OidcEndpoint,
    OidcProvider,
    ServerConfig,
    decode_config,
    render_config,
)
from semaphore_config.config.runtime import CookieKeys, ServerRuntime, build_runtime
from semaphore_config.config.validation import check_config, validate_config

__all__ = [
    "CoercionError",
    "ConfigDecodeError",
    "ConfigError",
    "ConfigValidationError",
    "CookieKeys",
    "DatabaseSettings",
    "DbConfig",
    "Dialect",
    "DialectError",
    "LdapMappings",
    "OidcEndpoint",
    "OidcProvider",
    "SchemaError",
    "ServerConfig",
    "ServerRuntime",
    "apply_defaults",
    "apply_environment",
    "build_runtime",
    "check_config",
    "connection_string",
    "database_settings",
    "decode_config",
    "describe_database",
    "generate_secrets",
    "get_value",
    "leaf_paths",
    "load_config",
    "render_config",
    "resolve_config",
    "resolve_dialect",
    "set_value",
    "validate_config",
]
