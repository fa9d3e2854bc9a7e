"""
semaphore-config — path-addressable attribute access.

File: src/semaphore_config/config/accessor.py
Last updated: 2026-10-17

Purpose
- Get and set scalar leaves of ``ServerConfig`` by dotted path (``"mysql.hostname"``).

What should be included in this file
- A schema table built once from the dataclass declarations.
- Canonical string rendering and string-to-native coercion for leaves.
- A self-test that checks every internal table path against the schema.

Functional requirements
- Unknown paths always raise ``SchemaError``, for reads and writes alike.
- Integer coercion failures raise ``CoercionError``; boolean coercion never fails.
"""

from __future__ import annotations

import dataclasses
import re
import typing
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Final, Literal

from semaphore_config.config.errors import CoercionError, SchemaError
from semaphore_config.config.model import ConfigGroup, ServerConfig

LeafKind = Literal["str", "int", "bool"]

_INT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_SCALAR_KINDS: Final[Mapping[object, LeafKind]] = {str: "str", int: "int", bool: "bool"}


@dataclass(frozen=True, slots=True)
class LeafSpec:
    """Accessor pair for one scalar leaf of the record."""

    path: str
    kind: LeafKind
    attrs: tuple[str, ...]

    def read(self, config: ServerConfig) -> object:
        cursor: object = config
        for attr in self.attrs:
            cursor = getattr(cursor, attr)
        return cursor

    def write(self, config: ServerConfig, value: object) -> None:
        cursor: object = config
        for attr in self.attrs[:-1]:
            cursor = getattr(cursor, attr)
        setattr(cursor, self.attrs[-1], value)


@dataclass(frozen=True, slots=True)
class _Schema:
    leaves: Mapping[str, LeafSpec]
    groups: frozenset[str]
    containers: frozenset[str]


def _build_schema() -> _Schema:
    leaves: dict[str, LeafSpec] = {}
    groups: set[str] = set()
    containers: set[str] = set()

    def visit(cls: type[ConfigGroup], prefix: tuple[str, ...]) -> None:
        hints = typing.get_type_hints(cls)
        for item in dataclasses.fields(cls):  # type: ignore[arg-type]
            attrs = (*prefix, item.name)
            path = ".".join(attrs)
            annotation = hints[item.name]
            kind = _SCALAR_KINDS.get(annotation)
            if kind is not None:
                leaves[path] = LeafSpec(path=path, kind=kind, attrs=attrs)
            elif isinstance(annotation, type) and issubclass(annotation, ConfigGroup):
                groups.add(path)
                visit(annotation, attrs)
            else:
                containers.add(path)

    visit(ServerConfig, ())
    return _Schema(leaves=leaves, groups=frozenset(groups), containers=frozenset(containers))


_SCHEMA: Final[_Schema] = _build_schema()


def leaf(path: str) -> LeafSpec:
    """Resolve ``path`` to its leaf spec or raise ``SchemaError``."""

    spec = _SCHEMA.leaves.get(path)
    if spec is not None:
        return spec

    segments = path.split(".")
    if not path or any(not segment for segment in segments):
        raise SchemaError(path, "path must be a non-empty dot-separated field list")

    for depth, segment in enumerate(segments):
        prefix = ".".join(segments[: depth + 1])
        last = depth == len(segments) - 1
        if prefix in _SCHEMA.groups:
            if last:
                raise SchemaError(path, "path addresses a group, not a leaf")
            continue
        if prefix in _SCHEMA.leaves or prefix in _SCHEMA.containers:
            if not last:
                raise SchemaError(path, f"{prefix!r} is not a group")
            raise SchemaError(path, "path addresses a map or list field, not a scalar leaf")
        raise SchemaError(path, f"no field named {segment!r}")

    raise SchemaError(path, "unresolvable path")  # pragma: no cover - loop always raises


def has_path(path: str) -> bool:
    return path in _SCHEMA.leaves


def leaf_paths() -> tuple[str, ...]:
    """All addressable scalar paths in declaration order."""

    return tuple(_SCHEMA.leaves)


def verify_paths(paths: Iterable[str]) -> None:
    """Fail with ``SchemaError`` on the first path that is not a scalar leaf."""

    for path in paths:
        leaf(path)


def get_value(config: ServerConfig, path: str) -> str:
    """Return the canonical string form of the leaf at ``path``."""

    return render_value(leaf(path).read(config))


def set_value(config: ServerConfig, path: str, value: object) -> None:
    """Coerce ``value`` to the declared leaf type and assign it in place."""

    spec = leaf(path)
    spec.write(config, coerce_value(spec.kind, value, path))


def render_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce_value(kind: LeafKind, value: object, path: str) -> object:
    if kind == "bool":
        if isinstance(value, bool):
            return value
        text = render_value(value)
        return text == "1" or text.lower() == "true"

    if kind == "int":
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        text = render_value(value)
        if not _INT_PATTERN.fullmatch(text):
            raise CoercionError(path, f"cannot convert {text!r} to an integer")
        return int(text)

    if not isinstance(value, str):
        raise CoercionError(path, f"expected string, got {type(value).__name__}")
    return value


__all__ = [
    "LeafKind",
    "LeafSpec",
    "coerce_value",
    "get_value",
    "has_path",
    "leaf",
    "leaf_paths",
    "render_value",
    "set_value",
    "verify_paths",
]
