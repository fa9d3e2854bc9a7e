"""
semaphore-config — unit tests for setup-time secret generation

File: tests/unit/config/test_keygen.py
Last updated: 2026-10-17

Purpose
- Validate random key generation and that generated secrets pass validation.
"""

from __future__ import annotations

import base64

import pytest

from semaphore_config.config.keygen import (
    KEY_LENGTH,
    encode_key,
    generate_random_key,
    generate_secrets,
)
from semaphore_config.config.model import ServerConfig
from semaphore_config.config.validation import check_config


def test_generated_key_has_requested_length() -> None:
    assert len(generate_random_key()) == KEY_LENGTH
    assert len(generate_random_key(16)) == 16


def test_generated_keys_differ() -> None:
    assert generate_random_key() != generate_random_key()


def test_invalid_length_is_rejected() -> None:
    with pytest.raises(ValueError, match="must be > 0"):
        generate_random_key(0)


def test_short_random_source_is_rejected() -> None:
    with pytest.raises(ValueError, match="expected 32"):
        generate_random_key(randbytes=lambda size: b"x")


def test_generate_secrets_sets_all_key_material() -> None:
    config = ServerConfig(dialect="bolt", port=":3000", git_client="go_git")

    generate_secrets(config, randbytes=lambda size: b"\x01" * size)

    expected = encode_key(b"\x01" * KEY_LENGTH)
    assert config.cookie_hash == expected
    assert config.cookie_encryption == expected
    assert config.access_key_encryption == expected
    assert base64.b64decode(config.cookie_hash) == b"\x01" * KEY_LENGTH
    check_config(config)


def test_generate_secrets_uses_fresh_keys_per_setting() -> None:
    config = ServerConfig()

    generate_secrets(config)

    assert len({config.cookie_hash, config.cookie_encryption, config.access_key_encryption}) == 3
