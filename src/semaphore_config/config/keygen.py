"""Setup-time generation of cookie and access-key encryption secrets."""

from __future__ import annotations

import base64
import secrets
from collections.abc import Callable
from typing import Final

from semaphore_config.config.model import ServerConfig

KEY_LENGTH: Final[int] = 32

RandomBytes = Callable[[int], bytes]


def generate_random_key(length: int = KEY_LENGTH, *, randbytes: RandomBytes | None = None) -> bytes:
    if length <= 0:
        raise ValueError("key length must be > 0")
    source = secrets.token_bytes if randbytes is None else randbytes
    key = source(length)
    if len(key) != length:
        raise ValueError(f"random source returned {len(key)} bytes, expected {length}")
    return key


def encode_key(key: bytes) -> str:
    return base64.b64encode(key).decode("ascii")


def generate_secrets(config: ServerConfig, *, randbytes: RandomBytes | None = None) -> None:
    """Replace all three key-material settings with fresh random keys.

    Only valid on a record that has not been frozen; the result is meant to be
    persisted and loaded normally on the next start.
    """

    config.cookie_hash = encode_key(generate_random_key(randbytes=randbytes))
    config.cookie_encryption = encode_key(generate_random_key(randbytes=randbytes))
    config.access_key_encryption = encode_key(generate_random_key(randbytes=randbytes))


__all__ = ["KEY_LENGTH", "RandomBytes", "encode_key", "generate_random_key", "generate_secrets"]
