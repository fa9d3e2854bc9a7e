"""UI package exports for the CLI router and output rendering."""

from semaphore_config.ui.cli import CLIError, build_parser, run_cli
from semaphore_config.ui.render import CLIRenderer, create_renderer

__all__ = ["CLIError", "CLIRenderer", "build_parser", "create_renderer", "run_cli"]
