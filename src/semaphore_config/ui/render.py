"""Output rendering abstraction for the semaphore-config CLI.

File: src/semaphore_config/ui/render.py
Last updated: 2026-10-17

Purpose
- Provide a thin rendering layer over ``rich`` for CLI output.
- Respect NO_COLOR environment variable and --no-color CLI flag.

Functional requirements
- Output stays plain and parseable when stdout is not a terminal.
- Markup in rendered values is never interpreted.
"""

from __future__ import annotations

import os
import sys
from typing import IO, TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence


def _color_allowed(no_color_flag: bool) -> bool:
    """Check whether color output should be attempted."""

    if no_color_flag:
        return False
    if os.environ.get("NO_COLOR", ""):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


class CLIRenderer:
    """Thin CLI output renderer backed by a ``rich`` console."""

    def __init__(
        self,
        *,
        no_color: bool = False,
        verbose: bool = False,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        self.verbose = verbose
        self._color = _color_allowed(no_color)
        color_system = "auto" if self._color else None
        self._out = Console(
            file=stdout,
            color_system=color_system,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        self._err = Console(
            file=stderr,
            stderr=stderr is None,
            color_system=color_system,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def text(self, line: str) -> None:
        """Print a plain text line."""

        self._out.print(line, markup=False)

    def kv(self, key: str, value: object) -> None:
        self._out.print(f"{key}: {value}", markup=False)

    def section(self, title: str) -> None:
        self._out.print()
        self._out.print(title, style="bold", markup=False)

    def json(self, payload: str) -> None:
        """Print a JSON document, syntax highlighted when color is enabled."""

        if self._color:
            self._out.print_json(payload)
        else:
            self._out.print(payload, markup=False)

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: str | None = None,
    ) -> None:
        if not rows:
            return
        table = Table(title=title, show_edge=False, box=None, pad_edge=False)
        for header in headers:
            table.add_column(header, no_wrap=True)
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        self._out.print(table)

    def ok(self, label: str) -> None:
        self._out.print(f"  OK  {label}", style="green", markup=False)

    def fail(self, label: str) -> None:
        self._out.print(f"  FAIL  {label}", style="red", markup=False)

    def error(self, message: str) -> None:
        """Print an error message to stderr."""

        self._err.print(message, style="red", markup=False)


def create_renderer(*, no_color: bool = False, verbose: bool = False) -> CLIRenderer:
    """Create a CLI renderer with the given settings."""

    return CLIRenderer(no_color=no_color, verbose=verbose)


__all__ = ["CLIRenderer", "create_renderer"]
