"""Output rendering abstraction for the command-order CLI.

File: src/command_order/ui/render.py

Purpose
- Provide a thin rendering layer for plain-text CLI output.
- Respect the NO_COLOR environment variable and --no-color CLI flag.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

_BOLD = "\033[1m"
_RESET = "\033[0m"


def _color_allowed(no_color_flag: bool) -> bool:
    """Check whether color output should be attempted."""

    if no_color_flag:
        return False
    if os.environ.get("NO_COLOR", ""):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


class CLIRenderer:
    """Thin CLI output renderer producing deterministic plain text."""

    def __init__(self, *, no_color: bool = False) -> None:
        self._color = _color_allowed(no_color)

    def heading(self, text: str) -> None:
        print(f"{_BOLD}{text}{_RESET}" if self._color else text)

    def text(self, line: str) -> None:
        print(line)

    def warning(self, text: str) -> None:
        print(f"  Warning: {text}")

    def numbered(self, entries: Sequence[str]) -> None:
        """Print a 1-based numbered list."""

        width = len(str(len(entries)))
        for index, entry in enumerate(entries, start=1):
            print(f"  {str(index).rjust(width)}. {entry}")


def create_renderer(*, no_color: bool = False) -> CLIRenderer:
    return CLIRenderer(no_color=no_color)


__all__ = ["CLIRenderer", "create_renderer"]
