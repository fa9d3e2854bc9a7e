"""
semaphore-config — storage dialect resolution and connection strings.

File: src/semaphore_config/config/dialect.py
Last updated: 2026-10-17

Purpose
- Decide which storage backend is active and render its connection descriptor.

What should be included in this file
- Explicit selection, falling back to hostname presence in a fixed order.
- Read-time ``SEMAPHORE_DB_*`` overrides for the active storage group.
- Driver-specific descriptor rendering with query option merging.

Functional requirements
- Runs on demand against a resolved record, never during loading.
- Missing or unsupported backends raise ``DialectError``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final
from urllib.parse import quote_plus

from semaphore_config.config.errors import DialectError
from semaphore_config.config.model import DbConfig, ServerConfig
from semaphore_config.config.tables import DB_HOST_ENV, DB_NAME_ENV, DB_PASS_ENV, DB_USER_ENV


class Dialect(StrEnum):
    """Supported storage backends; values match the record's group names."""

    MYSQL = "mysql"
    BOLT = "bolt"
    POSTGRES = "postgres"


# Inference order when no dialect is configured explicitly.
DIALECT_PRIORITY: Final[tuple[Dialect, ...]] = (Dialect.MYSQL, Dialect.BOLT, Dialect.POSTGRES)

MYSQL_DEFAULT_OPTIONS: Final[Mapping[str, str]] = {
    "parseTime": "true",
    "interpolateParams": "true",
}

_DISPLAY_NAMES: Final[Mapping[Dialect, str]] = {
    Dialect.MYSQL: "MySQL",
    Dialect.BOLT: "BoltDB",
    Dialect.POSTGRES: "Postgres",
}


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Effective connection settings of the active storage group."""

    dialect: Dialect
    hostname: str
    username: str
    password: str = field(repr=False)
    db_name: str
    options: Mapping[str, str] = field(default_factory=dict)


def _env(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def effective_hostname(db: DbConfig, *, environ: Mapping[str, str] | None = None) -> str:
    return _env(environ).get(DB_HOST_ENV) or db.hostname


def is_present(db: DbConfig, *, environ: Mapping[str, str] | None = None) -> bool:
    return effective_hostname(db, environ=environ) != ""


def storage_group(config: ServerConfig, dialect: Dialect) -> DbConfig:
    group = getattr(config, dialect.value)
    assert isinstance(group, DbConfig)
    return group


def resolve_dialect(
    config: ServerConfig,
    *,
    environ: Mapping[str, str] | None = None,
) -> Dialect:
    """Return the explicit dialect, or infer it from populated storage groups."""

    if config.dialect:
        try:
            return Dialect(config.dialect)
        except ValueError:
            raise DialectError(f"unsupported database driver: {config.dialect}") from None

    for dialect in DIALECT_PRIORITY:
        if is_present(storage_group(config, dialect), environ=environ):
            return dialect
    raise DialectError("database configuration not found")


def database_settings(
    config: ServerConfig,
    *,
    environ: Mapping[str, str] | None = None,
) -> DatabaseSettings:
    """Resolve the active storage group with read-time environment overrides."""

    env = _env(environ)
    dialect = resolve_dialect(config, environ=env)
    db = storage_group(config, dialect)
    return DatabaseSettings(
        dialect=dialect,
        hostname=env.get(DB_HOST_ENV) or db.hostname,
        username=env.get(DB_USER_ENV) or db.username,
        password=env.get(DB_PASS_ENV) or db.password,
        db_name=env.get(DB_NAME_ENV) or db.db_name,
        options=dict(db.options),
    )


def connection_string(settings: DatabaseSettings, *, include_db_name: bool = True) -> str:
    """Render the driver-specific connection descriptor."""

    if settings.dialect is Dialect.BOLT:
        return settings.hostname

    if settings.dialect is Dialect.MYSQL:
        descriptor = f"{settings.username}:{settings.password}@tcp({settings.hostname})/"
        if include_db_name:
            descriptor += settings.db_name
        options = {**MYSQL_DEFAULT_OPTIONS, **settings.options}
        return descriptor + query_string(options)

    if settings.dialect is Dialect.POSTGRES:
        descriptor = (
            f"postgres://{settings.username}:{quote_plus(settings.password)}@{settings.hostname}"
        )
        if include_db_name:
            descriptor += f"/{settings.db_name}"
        return descriptor + query_string(settings.options)

    raise DialectError(f"unsupported database driver: {settings.dialect}")


def query_string(options: Mapping[str, str]) -> str:
    """Join options as ``?k=v&k2=v2`` in insertion order; empty for no options."""

    if not options:
        return ""
    return "?" + "&".join(f"{key}={value}" for key, value in options.items())


def describe_database(settings: DatabaseSettings) -> str:
    """One-line, password-free summary of the active storage backend."""

    name = _DISPLAY_NAMES[settings.dialect]
    if settings.dialect is Dialect.BOLT:
        return f"{name} {settings.hostname}"
    return f"{name} {settings.username}@{settings.hostname} {settings.db_name}"


__all__ = [
    "DIALECT_PRIORITY",
    "DatabaseSettings",
    "Dialect",
    "MYSQL_DEFAULT_OPTIONS",
    "connection_string",
    "database_settings",
    "describe_database",
    "effective_hostname",
    "is_present",
    "query_string",
    "resolve_dialect",
    "storage_group",
]
