"""
semaphore-config — values derived from a resolved config.

File: src/semaphore_config/config/runtime.py
Last updated: 2026-10-17

Purpose
- Build the immutable runtime bundle handed to the HTTP layer and other consumers.

Functional requirements
- Decode cookie key material; encryption key is optional.
- Parse the public web root, treating an empty value as "not configured".
- No global state: callers pass the returned ``ServerRuntime`` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import SplitResult, urlsplit

from semaphore_config.config.errors import ConfigValidationError
from semaphore_config.config.model import ServerConfig
from semaphore_config.config.validation import decode_key


@dataclass(frozen=True, slots=True)
class CookieKeys:
    """Signing (hash) key and optional encryption (block) key for session cookies."""

    hash_key: bytes = field(repr=False)
    block_key: bytes | None = field(default=None, repr=False)


@dataclass(frozen=True, slots=True)
class ServerRuntime:
    config: ServerConfig
    cookie_keys: CookieKeys
    web_host_url: SplitResult | None
    listen_address: str

    @property
    def access_key_encryption(self) -> bytes | None:
        if not self.config.access_key_encryption:
            return None
        return decode_key(self.config.access_key_encryption)


def cookie_keys(config: ServerConfig) -> CookieKeys:
    hash_key = decode_key(config.cookie_hash)
    if not hash_key:
        raise ConfigValidationError(["value of setting 'cookie_hash' is not valid base64"])

    block_key: bytes | None = None
    if config.cookie_encryption:
        block_key = decode_key(config.cookie_encryption)
        if block_key is None:
            raise ConfigValidationError(
                ["value of setting 'cookie_encryption' is not valid base64"]
            )
    return CookieKeys(hash_key=hash_key, block_key=block_key)


def web_host_url(config: ServerConfig) -> SplitResult | None:
    if not config.web_host:
        return None
    return urlsplit(config.web_host)


def listen_address(config: ServerConfig) -> str:
    """Interface in front of the port, e.g. ``0.0.0.0:3000`` or ``:3000``."""

    return f"{config.interface}{config.port}"


def build_runtime(config: ServerConfig) -> ServerRuntime:
    return ServerRuntime(
        config=config,
        cookie_keys=cookie_keys(config),
        web_host_url=web_host_url(config),
        listen_address=listen_address(config),
    )


__all__ = [
    "CookieKeys",
    "ServerRuntime",
    "build_runtime",
    "cookie_keys",
    "listen_address",
    "web_host_url",
]
