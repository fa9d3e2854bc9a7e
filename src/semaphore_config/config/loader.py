"""
semaphore-config — layered configuration loader.

File: src/semaphore_config/config/loader.py
Last updated: 2026-10-17

Purpose
- Resolve the effective server config from a JSON file, environment variables and defaults.

What should be included in this file
- Config file discovery: explicit path > ``SEMAPHORE_CONFIG_PATH`` > ``./config.json``
  > system path.
- Environment overlay driven by ``ENVIRONMENT_VARIABLES``, scoped to the active dialect.
- Defaults fill-in for empty values, validation, then freezing.

Functional requirements
- Stages run in a fixed order; environment wins over file, defaults never overwrite.
- Every failure raises a typed ``ConfigError``; nothing is retried.

Non-functional requirements
- Single pass at process start; the returned record is immutable.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from semaphore_config.config.accessor import coerce_value, get_value, leaf, set_value, verify_paths
from semaphore_config.config.errors import CoercionError, ConfigDecodeError
from semaphore_config.config.model import ServerConfig, decode_config
from semaphore_config.config.tables import (
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_FILENAME,
    DEFAULTS,
    ENVIRONMENT_VARIABLES,
    STORAGE_GROUPS,
    SYSTEM_CONFIG_PATH,
    all_table_paths,
)
from semaphore_config.config.validation import ErrorReporter, check_config, validate_config

logger = logging.getLogger(__name__)


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
    on_error: ErrorReporter | None = None,
) -> ServerConfig:
    """Load, resolve, validate and freeze the server config.

    Parameters
    ----------
    config_path:
        Explicit config file. When omitted, ``SEMAPHORE_CONFIG_PATH`` and then the
        default search locations are used.
    environ:
        Environment mapping; defaults to ``os.environ``.
    cwd:
        Directory searched for ``config.json``; defaults to the process cwd.
    on_error:
        Validation reporter. The default collects every problem and raises a single
        ``ConfigValidationError``.
    """

    env = os.environ if environ is None else environ
    path = locate_config_file(config_path, environ=env, cwd=cwd)
    logger.info("loading config", extra={"config_path": str(path)})
    config = read_config_file(path)
    return resolve_config(config, environ=env, on_error=on_error)


def resolve_config(
    config: ServerConfig,
    *,
    environ: Mapping[str, str] | None = None,
    on_error: ErrorReporter | None = None,
) -> ServerConfig:
    """Apply environment and defaults to a decoded record, validate it and freeze it."""

    verify_tables()
    apply_environment(config, environ)
    apply_defaults(config)

    logger.info("validating config")
    if on_error is None:
        check_config(config)
    else:
        validate_config(config, on_error)
    return config.freeze()


def locate_config_file(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
) -> Path:
    env = os.environ if environ is None else environ
    selected: str | Path | None = config_path or env.get(CONFIG_PATH_ENV) or None
    if selected is not None:
        return Path(selected).expanduser()

    try:
        base = Path.cwd() if cwd is None else Path(cwd)
    except OSError as exc:
        raise ConfigDecodeError(f"unable to determine working directory: {exc}") from exc

    for candidate in (base / DEFAULT_CONFIG_FILENAME, Path(SYSTEM_CONFIG_PATH)):
        try:
            candidate.stat()
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("config candidate not found", extra={"config_path": str(candidate)})
            continue
        except OSError as exc:
            raise ConfigDecodeError(f"unable to access config file {candidate}: {exc}") from exc
        return candidate

    raise ConfigDecodeError("no configuration file found")


def read_config_file(path: Path) -> ServerConfig:
    """Decode one JSON config file into a mutable record."""

    try:
        with path.open("rb") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise ConfigDecodeError(f"config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigDecodeError(f"unable to read config file {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigDecodeError(f"could not decode configuration {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigDecodeError(f"config root must be an object: {path}")
    return decode_config(payload)


def apply_environment(
    config: ServerConfig,
    environ: Mapping[str, str] | None = None,
) -> tuple[str, ...]:
    """Overlay non-empty environment variables and return the paths that changed."""

    env = os.environ if environ is None else environ
    applied: list[str] = []
    for path, variable in ENVIRONMENT_VARIABLES:
        group = path.split(".", 1)[0]
        if group in STORAGE_GROUPS and group != config.dialect:
            continue
        value = env.get(variable)
        if not value:
            continue
        try:
            set_value(config, path, value)
        except CoercionError as exc:
            raise CoercionError(path, f"environment variable {variable}: {exc.reason}") from exc
        applied.append(path)

    if applied:
        logger.debug("applied environment overrides", extra={"paths": applied})
    return tuple(applied)


def apply_defaults(config: ServerConfig) -> tuple[str, ...]:
    """Fill empty settings from ``DEFAULTS`` and return the paths that changed."""

    applied: list[str] = []
    for path, default in DEFAULTS:
        if get_value(config, path):
            continue
        set_value(config, path, default)
        applied.append(path)
    return tuple(applied)


def verify_tables() -> None:
    """Check every table path and default value against the record schema."""

    verify_paths(all_table_paths())
    for path, default in DEFAULTS:
        coerce_value(leaf(path).kind, default, path)


__all__ = [
    "apply_defaults",
    "apply_environment",
    "load_config",
    "locate_config_file",
    "read_config_file",
    "resolve_config",
    "verify_tables",
]
