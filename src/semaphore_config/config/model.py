"""
semaphore-config — configuration record model.

File: src/semaphore_config/config/model.py
Last updated: 2026-10-17

Purpose
- Define the nested configuration record and its JSON file representation.

What should be included in this file
- One dataclass per group; JSON keys declared as field metadata.
- Generic decode/encode driven by dataclass field declarations.
- In-place freezing once resolution has finished.

Functional requirements
- Unknown JSON keys are ignored; missing or null keys keep zero values.
- Rendering is the inverse of decoding, including the OIDC provider mapping.
"""

from __future__ import annotations

import dataclasses
import functools
import json
import types
import typing
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Self

from semaphore_config.config.errors import CoercionError


def _json_field(key: str, default: object = "") -> Any:
    return field(default=default, metadata={"json": key})


def _json_factory(key: str, factory: Callable[[], object]) -> Any:
    return field(default_factory=factory, metadata={"json": key})


class ConfigGroup:
    """Base for record groups: generic JSON codec plus in-place freezing."""

    _frozen: ClassVar[bool] = False

    def __setattr__(self, name: str, value: object) -> None:
        if self._frozen:
            raise dataclasses.FrozenInstanceError(
                f"cannot assign to field {name!r} of a resolved configuration"
            )
        object.__setattr__(self, name, value)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Self:
        """Recursively forbid further mutation. Maps become read-only views."""

        for item in dataclasses.fields(self):  # type: ignore[arg-type]
            object.__setattr__(self, item.name, _freeze_value(getattr(self, item.name)))
        object.__setattr__(self, "_frozen", True)
        return self

    @classmethod
    def from_dict(cls, payload: Mapping[str, object], *, path: str = "") -> Self:
        """Decode a JSON object into a new group instance."""

        hints = _type_hints(cls)
        kwargs: dict[str, object] = {}
        for item in dataclasses.fields(cls):  # type: ignore[arg-type]
            key = json_key(item)
            raw = payload.get(key)
            if raw is None:
                continue
            kwargs[item.name] = _decode_value(hints[item.name], raw, _join(path, key))
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Encode this group using the same JSON keys accepted by ``from_dict``."""

        return {
            json_key(item): _encode_value(getattr(self, item.name))
            for item in dataclasses.fields(self)  # type: ignore[arg-type]
        }


@dataclass
class DbConfig(ConfigGroup):
    """Connection settings for one storage backend."""

    hostname: str = _json_field("host")
    username: str = _json_field("user")
    password: str = _json_field("pass")
    db_name: str = _json_field("name")
    options: dict[str, str] = _json_factory("options", dict)


@dataclass
class LdapMappings(ConfigGroup):
    """LDAP attribute names used to build a user record."""

    dn: str = _json_field("dn")
    mail: str = _json_field("mail")
    uid: str = _json_field("uid")
    cn: str = _json_field("cn")


@dataclass
class OidcEndpoint(ConfigGroup):
    issuer_url: str = _json_field("issuer")
    auth_url: str = _json_field("auth")
    token_url: str = _json_field("token")
    userinfo_url: str = _json_field("userinfo")
    jwks_url: str = _json_field("jwks")
    algorithms: list[str] = _json_factory("algorithms", list)


@dataclass
class OidcProvider(ConfigGroup):
    client_id: str = _json_field("client_id")
    client_secret: str = _json_field("client_secret")
    redirect_url: str = _json_field("redirect_url")
    scopes: list[str] = _json_factory("scopes", list)
    display_name: str = _json_field("display_name")
    auto_discovery: str = _json_field("provider_url")
    endpoint: OidcEndpoint = _json_factory("endpoint", OidcEndpoint)
    username_claim: str = _json_field("username_claim")
    name_claim: str = _json_field("name_claim")
    email_claim: str = _json_field("email_claim")


@dataclass
class ServerConfig(ConfigGroup):
    """Root configuration record, mirrored one-to-one by ``config.json``."""

    mysql: DbConfig = _json_factory("mysql", DbConfig)
    bolt: DbConfig = _json_factory("bolt", DbConfig)
    postgres: DbConfig = _json_factory("postgres", DbConfig)

    # Empty means "infer from whichever storage group is populated".
    dialect: str = _json_field("dialect")

    # Format ``:port_num``; a missing ``:`` is corrected during validation.
    port: str = _json_field("port")
    interface: str = _json_field("interface")

    tmp_path: str = _json_field("tmp_path")
    ssh_config_path: str = _json_field("ssh_config_path")
    git_client: str = _json_field("git_client")

    web_host: str = _json_field("web_host")

    # Base64 encoded key material.
    cookie_hash: str = _json_field("cookie_hash")
    cookie_encryption: str = _json_field("cookie_encryption")
    access_key_encryption: str = _json_field("access_key_encryption")

    email_alert: bool = _json_field("email_alert", False)
    email_sender: str = _json_field("email_sender")
    email_host: str = _json_field("email_host")
    email_port: str = _json_field("email_port")
    email_username: str = _json_field("email_username")
    email_password: str = _json_field("email_password")
    email_secure: bool = _json_field("email_secure", False)

    ldap_enable: bool = _json_field("ldap_enable", False)
    ldap_bind_dn: str = _json_field("ldap_binddn")
    ldap_bind_password: str = _json_field("ldap_bindpassword")
    ldap_server: str = _json_field("ldap_server")
    ldap_search_dn: str = _json_field("ldap_searchdn")
    ldap_search_filter: str = _json_field("ldap_searchfilter")
    ldap_mappings: LdapMappings = _json_factory("ldap_mappings", LdapMappings)
    ldap_need_tls: bool = _json_field("ldap_needtls", False)

    telegram_alert: bool = _json_field("telegram_alert", False)
    telegram_chat: str = _json_field("telegram_chat")
    telegram_token: str = _json_field("telegram_token")
    slack_alert: bool = _json_field("slack_alert", False)
    slack_url: str = _json_field("slack_url")

    oidc_providers: dict[str, OidcProvider] = _json_factory("oidc_providers", dict)

    max_parallel_tasks: int = _json_field("max_parallel_tasks", 0)

    # Deprecated, kept so existing config files still round-trip.
    demo_mode: bool = _json_field("demo_mode", False)
    password_login_disable: bool = _json_field("password_login_disable", False)
    non_admin_can_create_project: bool = _json_field("non_admin_can_create_project", False)


def json_key(item: dataclasses.Field[Any]) -> str:
    """Return the JSON key declared for a dataclass field."""

    key = item.metadata.get("json")
    return key if isinstance(key, str) else item.name


def decode_config(payload: object) -> ServerConfig:
    """Decode a parsed JSON document into a fresh, mutable record."""

    if not isinstance(payload, Mapping):
        raise CoercionError("<root>", f"expected object, got {_json_type_name(payload)}")
    return ServerConfig.from_dict(payload)


def render_config(config: ServerConfig) -> str:
    """Serialize the record back to indented JSON for display/debugging."""

    return json.dumps(config.to_dict(), indent=2, ensure_ascii=False)


@functools.cache
def _type_hints(cls: type) -> dict[str, Any]:
    return typing.get_type_hints(cls)


def _decode_value(annotation: Any, raw: object, path: str) -> object:
    if annotation is bool:
        if not isinstance(raw, bool):
            raise CoercionError(path, f"expected boolean, got {_json_type_name(raw)}")
        return raw
    if annotation is int:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise CoercionError(path, f"expected integer, got {_json_type_name(raw)}")
        return raw
    if annotation is str:
        if not isinstance(raw, str):
            raise CoercionError(path, f"expected string, got {_json_type_name(raw)}")
        return raw
    if isinstance(annotation, type) and issubclass(annotation, ConfigGroup):
        if not isinstance(raw, Mapping):
            raise CoercionError(path, f"expected object, got {_json_type_name(raw)}")
        return annotation.from_dict(raw, path=path)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if origin is dict:
        if not isinstance(raw, Mapping):
            raise CoercionError(path, f"expected object, got {_json_type_name(raw)}")
        return {
            str(key): _decode_value(args[1], item, _join(path, str(key)))
            for key, item in raw.items()
        }
    if origin is list:
        if not isinstance(raw, list):
            raise CoercionError(path, f"expected array, got {_json_type_name(raw)}")
        return [_decode_value(args[0], item, f"{path}[{index}]") for index, item in enumerate(raw)]

    raise TypeError(f"unsupported field annotation {annotation!r} at {path}")


def _encode_value(value: object) -> object:
    if isinstance(value, ConfigGroup):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {str(key): _encode_value(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [_encode_value(item) for item in value]
    return value


def _freeze_value(value: object) -> object:
    if isinstance(value, ConfigGroup):
        return value.freeze()
    if isinstance(value, Mapping):
        return types.MappingProxyType({key: _freeze_value(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze_value(item) for item in value)
    return value


def _json_type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _join(path: str, key: str) -> str:
    return key if not path else f"{path}.{key}"


__all__ = [
    "ConfigGroup",
    "DbConfig",
    "LdapMappings",
    "OidcEndpoint",
    "OidcProvider",
    "ServerConfig",
    "decode_config",
    "json_key",
    "render_config",
]
