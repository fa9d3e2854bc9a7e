"""Fixed attribute tables driving the environment, defaults and validation stages."""

from __future__ import annotations

from typing import Final

CONFIG_PATH_ENV: Final[str] = "SEMAPHORE_CONFIG_PATH"
DEFAULT_CONFIG_FILENAME: Final[str] = "config.json"
SYSTEM_CONFIG_PATH: Final[str] = "/usr/local/etc/semaphore/config.json"

# Storage groups share variable names, so only the selected dialect's entries apply.
# "dialect" comes first: the remaining entries depend on its resolved value.
ENVIRONMENT_VARIABLES: Final[tuple[tuple[str, str], ...]] = (
    ("dialect", "SEMAPHORE_DB_DIALECT"),
    ("mysql.hostname", "SEMAPHORE_DB_HOST"),
    ("mysql.username", "SEMAPHORE_DB_USER"),
    ("mysql.password", "SEMAPHORE_DB_PASS"),
    ("mysql.db_name", "SEMAPHORE_DB"),
    ("postgres.hostname", "SEMAPHORE_DB_HOST"),
    ("postgres.username", "SEMAPHORE_DB_USER"),
    ("postgres.password", "SEMAPHORE_DB_PASS"),
    ("postgres.db_name", "SEMAPHORE_DB"),
    ("bolt.hostname", "SEMAPHORE_DB_HOST"),
    ("port", "SEMAPHORE_PORT"),
    ("interface", "SEMAPHORE_INTERFACE"),
    ("tmp_path", "SEMAPHORE_TMP_PATH"),
    ("ssh_config_path", "SEMAPHORE_SSH_CONFIG_PATH"),
    ("git_client", "SEMAPHORE_GIT_CLIENT"),
    ("web_host", "SEMAPHORE_WEB_ROOT"),
    ("cookie_hash", "SEMAPHORE_COOKIE_HASH"),
    ("cookie_encryption", "SEMAPHORE_COOKIE_ENCRYPTION"),
    ("access_key_encryption", "SEMAPHORE_ACCESS_KEY_ENCRYPTION"),
    ("email_alert", "SEMAPHORE_EMAIL_ALERT"),
    ("email_sender", "SEMAPHORE_EMAIL_SENDER"),
    ("email_host", "SEMAPHORE_EMAIL_HOST"),
    ("email_port", "SEMAPHORE_EMAIL_PORT"),
    ("email_username", "SEMAPHORE_EMAIL_USER"),
    ("email_password", "SEMAPHORE_EMAIL_PASSWORD"),
    ("email_secure", "SEMAPHORE_EMAIL_SECURE"),
    ("ldap_enable", "SEMAPHORE_LDAP_ACTIVATED"),
    ("ldap_bind_dn", "SEMAPHORE_LDAP_DN_BIND"),
    ("ldap_bind_password", "SEMAPHORE_LDAP_PASSWORD"),
    ("ldap_server", "SEMAPHORE_LDAP_HOST"),
    ("ldap_search_dn", "SEMAPHORE_LDAP_DN_SEARCH"),
    ("ldap_search_filter", "SEMAPHORE_LDAP_SEARCH_FILTER"),
    ("ldap_mappings.dn", "SEMAPHORE_LDAP_MAPPING_DN"),
    ("ldap_mappings.uid", "SEMAPHORE_LDAP_MAPPING_USERNAME"),
    ("ldap_mappings.cn", "SEMAPHORE_LDAP_MAPPING_FULLNAME"),
    ("ldap_mappings.mail", "SEMAPHORE_LDAP_MAPPING_EMAIL"),
    ("ldap_need_tls", "SEMAPHORE_LDAP_NEEDTLS"),
    ("telegram_alert", "SEMAPHORE_TELEGRAM_ALERT"),
    ("telegram_chat", "SEMAPHORE_TELEGRAM_CHAT"),
    ("telegram_token", "SEMAPHORE_TELEGRAM_TOKEN"),
    ("slack_alert", "SEMAPHORE_SLACK_ALERT"),
    ("slack_url", "SEMAPHORE_SLACK_URL"),
    ("max_parallel_tasks", "SEMAPHORE_MAX_PARALLEL_TASKS"),
)

DEFAULTS: Final[tuple[tuple[str, object], ...]] = (
    ("port", ":3000"),
    ("tmp_path", "/tmp/semaphore"),
    ("git_client", "go_git"),
)

_BASE64_KEY: Final[str] = r"[-A-Za-z0-9+=/]{40,}"

# Whole-string patterns. Some accept values that are still invalid (e.g. port 99999).
VALIDATION_PATTERNS: Final[tuple[tuple[str, str], ...]] = (
    ("dialect", r"|mysql|bolt|postgres"),
    ("port", r":[0-9]{1,5}"),
    ("git_client", r"go_git|cmd_git"),
    ("cookie_hash", _BASE64_KEY),
    ("cookie_encryption", _BASE64_KEY),
    ("access_key_encryption", _BASE64_KEY),
    ("email_port", r"|[0-9]{1,5}"),
    ("max_parallel_tasks", r"[0-9]{1,10}"),
)

# Read-time overrides for the active storage group, independent of the layered stages.
DB_HOST_ENV: Final[str] = "SEMAPHORE_DB_HOST"
DB_USER_ENV: Final[str] = "SEMAPHORE_DB_USER"
DB_PASS_ENV: Final[str] = "SEMAPHORE_DB_PASS"
DB_NAME_ENV: Final[str] = "SEMAPHORE_DB_NAME"

STORAGE_GROUPS: Final[tuple[str, ...]] = ("mysql", "bolt", "postgres")

KEY_MATERIAL_PATHS: Final[tuple[str, ...]] = (
    "cookie_hash",
    "cookie_encryption",
    "access_key_encryption",
)


def all_table_paths() -> tuple[str, ...]:
    """Every path referenced by the tables above, for the startup self-test."""

    paths: list[str] = [path for path, _ in ENVIRONMENT_VARIABLES]
    paths.extend(path for path, _ in DEFAULTS)
    paths.extend(path for path, _ in VALIDATION_PATTERNS)
    return tuple(dict.fromkeys(paths))


__all__ = [
    "CONFIG_PATH_ENV",
    "DB_HOST_ENV",
    "DB_NAME_ENV",
    "DB_PASS_ENV",
    "DB_USER_ENV",
    "DEFAULTS",
    "DEFAULT_CONFIG_FILENAME",
    "ENVIRONMENT_VARIABLES",
    "KEY_MATERIAL_PATHS",
    "STORAGE_GROUPS",
    "SYSTEM_CONFIG_PATH",
    "VALIDATION_PATTERNS",
    "all_table_paths",
]
