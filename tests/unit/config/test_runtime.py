"""
semaphore-config — unit tests for values derived from a resolved config

File: tests/unit/config/test_runtime.py
Last updated: 2026-10-17

Purpose
- Validate cookie key decoding, web root parsing and the listen address.
"""

from __future__ import annotations

import base64

import pytest

from semaphore_config.config.errors import ConfigValidationError
from semaphore_config.config.model import ServerConfig
from semaphore_config.config.runtime import (
    build_runtime,
    cookie_keys,
    listen_address,
    web_host_url,
)

HASH = base64.b64encode(b"h" * 32).decode("ascii")
BLOCK = base64.b64encode(b"b" * 32).decode("ascii")


def test_build_runtime_decodes_keys_and_urls() -> None:
    config = ServerConfig(
        cookie_hash=HASH,
        cookie_encryption=BLOCK,
        access_key_encryption=BLOCK,
        web_host="https://semaphore.example.com/ui",
        interface="0.0.0.0",
        port=":3000",
    ).freeze()

    runtime = build_runtime(config)

    assert runtime.config is config
    assert runtime.cookie_keys.hash_key == b"h" * 32
    assert runtime.cookie_keys.block_key == b"b" * 32
    assert runtime.access_key_encryption == b"b" * 32
    assert runtime.web_host_url is not None
    assert runtime.web_host_url.netloc == "semaphore.example.com"
    assert runtime.web_host_url.path == "/ui"
    assert runtime.listen_address == "0.0.0.0:3000"


def test_optional_values_resolve_to_none() -> None:
    config = ServerConfig(cookie_hash=HASH, port=":3000")

    runtime = build_runtime(config)

    assert runtime.cookie_keys.block_key is None
    assert runtime.web_host_url is None
    assert runtime.access_key_encryption is None
    assert runtime.listen_address == ":3000"


def test_missing_hash_key_is_rejected() -> None:
    with pytest.raises(ConfigValidationError, match="cookie_hash"):
        cookie_keys(ServerConfig())


def test_malformed_block_key_is_rejected() -> None:
    with pytest.raises(ConfigValidationError, match="cookie_encryption"):
        cookie_keys(ServerConfig(cookie_hash=HASH, cookie_encryption="-" * 44))


def test_key_repr_hides_material() -> None:
    keys = cookie_keys(ServerConfig(cookie_hash=HASH))

    assert "hhhh" not in repr(keys)


def test_helpers() -> None:
    config = ServerConfig(interface="127.0.0.1", port=":8080", web_host="http://localhost")

    assert listen_address(config) == "127.0.0.1:8080"
    parsed = web_host_url(config)
    assert parsed is not None
    assert parsed.scheme == "http"
