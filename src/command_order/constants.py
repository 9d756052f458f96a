"""Stable constants shared across the ordering and workflow layers."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Final

# Declaration file location, relative to a workflow directory.
DEFAULT_COMMANDS_DIR: Final[PurePosixPath] = PurePosixPath(".claude/commands")
DEFAULT_ORDER_FILE: Final[str] = "_order.yaml"
DEFAULT_ORDER_FIELD: Final[str] = "commands"

# Command files discovered inside the commands directory.
COMMAND_FILE_SUFFIX: Final[str] = ".md"
SLASH_COMMAND_PREFIX: Final[str] = "/"

__all__ = [
    "COMMAND_FILE_SUFFIX",
    "DEFAULT_COMMANDS_DIR",
    "DEFAULT_ORDER_FIELD",
    "DEFAULT_ORDER_FILE",
    "SLASH_COMMAND_PREFIX",
]
