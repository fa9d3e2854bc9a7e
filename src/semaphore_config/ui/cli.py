"""Command-line interface router for semaphore-config."""

from __future__ import annotations

import argparse
import json
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from semaphore_config.config import (
    ServerConfig,
    apply_defaults,
    check_config,
    connection_string,
    database_settings,
    describe_database,
    generate_secrets,
    load_config,
    render_config,
)
from semaphore_config.config.accessor import set_value
from semaphore_config.config.dialect import Dialect
from semaphore_config.config.tables import DEFAULT_CONFIG_FILENAME, ENVIRONMENT_VARIABLES
from semaphore_config.config.validation import ErrorCollector
from semaphore_config.observability import (
    default_log_redactor,
    setup_logging,
    shutdown_logging,
)
from semaphore_config.ui.render import CLIRenderer, create_renderer

DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router for all supported CLI workflows."""

    parser = argparse.ArgumentParser(
        prog="semaphore-config",
        description=(
            "Resolve, validate and inspect the server configuration.\n\n"
            "Common workflows:\n"
            "  semaphore-config setup --dialect bolt --db-host /var/lib/semaphore/db.bolt\n"
            "  semaphore-config validate --config config.json\n"
            "  semaphore-config show --redact\n"
            "  semaphore-config dsn\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help=(
            "Path to the JSON config file (default: $SEMAPHORE_CONFIG_PATH, "
            "./config.json, then /usr/local/etc/semaphore/config.json)."
        ),
    )
    common.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help=f"Structured log level written to stderr (default: {DEFAULT_LOG_LEVEL}).",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored output (also respects NO_COLOR env var).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser(
        "show", parents=[common], help="Print the resolved configuration as JSON"
    )
    show_parser.add_argument(
        "--redact", action="store_true", help="Replace secret-bearing values before printing"
    )
    show_parser.set_defaults(handler=_cmd_show)

    validate_parser = subparsers.add_parser(
        "validate", parents=[common], help="Resolve the configuration and report every problem"
    )
    validate_parser.set_defaults(handler=_cmd_validate)

    db_info_parser = subparsers.add_parser(
        "db-info", parents=[common], help="Describe the active storage backend"
    )
    db_info_parser.set_defaults(handler=_cmd_db_info)

    dsn_parser = subparsers.add_parser(
        "dsn", parents=[common], help="Print the connection string of the active backend"
    )
    dsn_parser.add_argument(
        "--no-db-name", action="store_true", help="Omit the database name from the descriptor"
    )
    dsn_parser.set_defaults(handler=_cmd_dsn)

    setup_parser = subparsers.add_parser(
        "setup",
        parents=[common],
        help="Write a new config file with freshly generated secrets",
        description=(
            "Create a config file with new cookie and access-key secrets.\n\n"
            "Examples:\n"
            "  semaphore-config setup --dialect mysql --db-host 127.0.0.1:3306 --db-user root\n"
            "  semaphore-config setup --output /etc/semaphore/config.json --force\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    setup_parser.add_argument(
        "--output",
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Destination file (default: ./{DEFAULT_CONFIG_FILENAME})",
    )
    setup_parser.add_argument(
        "--dialect", choices=tuple(item.value for item in Dialect), default=Dialect.BOLT.value
    )
    setup_parser.add_argument("--db-host", default="", help="Hostname, or file path for bolt")
    setup_parser.add_argument("--db-user", default="")
    setup_parser.add_argument("--db-pass", default="")
    setup_parser.add_argument("--db-name", default="")
    setup_parser.add_argument("--port", default="", help="Listen port (default: :3000)")
    setup_parser.add_argument("--web-host", default="", help="Public web root URL")
    setup_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing config file"
    )
    setup_parser.set_defaults(handler=_cmd_setup)

    env_parser = subparsers.add_parser(
        "env", parents=[common], help="List the environment variables that override settings"
    )
    env_parser.set_defaults(handler=_cmd_env)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, configure logging and dispatch to a command handler."""

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    renderer = create_renderer(no_color=args.no_color)
    setup_logging(args.log_level)
    try:
        return int(args.handler(args, renderer))
    except CLIError as exc:
        renderer.error(f"error: {exc}")
        return exc.exit_code
    finally:
        shutdown_logging()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_show(args: argparse.Namespace, renderer: CLIRenderer) -> int:
    config = load_config(args.config_path)
    rendered = render_config(config)
    if args.redact:
        redacted = default_log_redactor(json.loads(rendered))
        rendered = json.dumps(redacted, indent=2, ensure_ascii=False)
    renderer.json(rendered)
    return 0


def _cmd_validate(args: argparse.Namespace, renderer: CLIRenderer) -> int:
    collector = ErrorCollector()
    load_config(args.config_path, on_error=collector)
    if not collector.messages:
        renderer.ok("configuration is valid")
        return 0
    for message in collector.messages:
        renderer.fail(message)
    return 1


def _cmd_db_info(args: argparse.Namespace, renderer: CLIRenderer) -> int:
    config = load_config(args.config_path)
    renderer.text(describe_database(database_settings(config)))
    return 0


def _cmd_dsn(args: argparse.Namespace, renderer: CLIRenderer) -> int:
    config = load_config(args.config_path)
    settings = database_settings(config)
    renderer.text(connection_string(settings, include_db_name=not args.no_db_name))
    return 0


def _cmd_setup(args: argparse.Namespace, renderer: CLIRenderer) -> int:
    output = Path(args.output).expanduser()
    if output.exists() and not args.force:
        raise CLIError(f"refusing to overwrite existing config file {output} (use --force)")

    config = build_setup_config(
        dialect=Dialect(args.dialect),
        values={
            "hostname": args.db_host,
            "username": args.db_user,
            "password": args.db_pass,
            "db_name": args.db_name,
        },
        port=args.port,
        web_host=args.web_host,
    )

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_config(config) + "\n", encoding="utf-8")
    renderer.ok(f"wrote {output}")
    return 0


def _cmd_env(args: argparse.Namespace, renderer: CLIRenderer) -> int:
    rows = [
        (path, variable, "set" if os.environ.get(variable) else "-")
        for path, variable in ENVIRONMENT_VARIABLES
    ]
    renderer.table(("setting", "variable", "status"), rows)
    return 0


def build_setup_config(
    *,
    dialect: Dialect,
    values: Mapping[str, str],
    port: str = "",
    web_host: str = "",
) -> ServerConfig:
    """Assemble and validate a fresh record for ``setup``; it is not frozen."""

    config = ServerConfig(dialect=dialect.value, port=port, web_host=web_host)
    for field_name, value in values.items():
        if value:
            set_value(config, f"{dialect.value}.{field_name}", value)
    generate_secrets(config)
    apply_defaults(config)
    check_config(config)
    return config


__all__ = ["CLIError", "build_parser", "build_setup_config", "run_cli"]
