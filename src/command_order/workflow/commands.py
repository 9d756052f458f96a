"""
command-order — workflow command discovery.

File: src/command_order/workflow/commands.py

Purpose
- Build the keyed set of commands for a workflow from its ``*.md`` command files.

Functional requirements
- The command id is the file stem; the order declaration and non-markdown files are skipped.
- Optional YAML front matter supplies ``displayName`` and ``description``.
- A file with unreadable front matter is still listed, with defaulted metadata.
- Files resolving outside the workflow directory are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any, Final

import structlog
import yaml

from command_order.constants import (
    COMMAND_FILE_SUFFIX,
    DEFAULT_COMMANDS_DIR,
    DEFAULT_ORDER_FILE,
    SLASH_COMMAND_PREFIX,
)
from command_order.utils.fs import PathLike, is_within, validate_relative_subpath

_logger = structlog.get_logger(__name__)

_FRONT_MATTER_FENCE: Final[str] = "---"
_RESERVED_FIELDS: Final[frozenset[str]] = frozenset(
    {"id", "name", "description", "slashCommand", "displayName"}
)

CommandRecord = dict[str, Any]


def discover_commands(
    workflow_dir: PathLike,
    *,
    commands_dir: str | PurePosixPath = DEFAULT_COMMANDS_DIR,
    order_file: str = DEFAULT_ORDER_FILE,
    logger: Any | None = None,
) -> dict[str, CommandRecord]:
    """Return command records keyed by id. The mapping carries no display order."""

    log = logger if logger is not None else _logger
    relative_dir = validate_relative_subpath(commands_dir)
    root = Path(workflow_dir) / Path(*relative_dir.parts)
    if not root.is_dir() or not is_within(root, workflow_dir):
        return {}

    commands: dict[str, CommandRecord] = {}
    for path in sorted(root.iterdir()):
        if path.name == order_file or path.name.startswith("."):
            continue
        if path.suffix != COMMAND_FILE_SUFFIX or not path.is_file():
            continue
        if not is_within(path, workflow_dir):
            log.warning("command_order_command_outside_workflow", path=path.as_posix())
            continue
        command_id = path.stem
        commands[command_id] = build_command_record(
            command_id, _read_front_matter(path, logger=log)
        )
    return commands


def build_command_record(command_id: str, front_matter: Mapping[str, object]) -> CommandRecord:
    """Shape a command record the way workflow metadata responses expect it."""

    display_name = front_matter.get("displayName")
    description = front_matter.get("description")
    record: CommandRecord = {
        "id": command_id,
        "name": display_name if isinstance(display_name, str) and display_name else command_id,
        "description": description if isinstance(description, str) else "",
        "slashCommand": f"{SLASH_COMMAND_PREFIX}{command_id}",
    }
    for key in sorted(front_matter):
        if key not in _RESERVED_FIELDS:
            record[key] = front_matter[key]
    return record


def parse_front_matter(text: str) -> dict[str, Any]:
    """Return the YAML front matter mapping of ``text``, or ``{}`` when there is none.

    Raises ``yaml.YAMLError`` for invalid YAML and ``ValueError`` for a
    non-mapping block.
    """

    lines = text.splitlines()
    if not lines or lines[0].strip() != _FRONT_MATTER_FENCE:
        return {}
    for index in range(1, len(lines)):
        if lines[index].strip() == _FRONT_MATTER_FENCE:
            block = "\n".join(lines[1:index])
            break
    else:
        return {}

    payload = yaml.safe_load(block)
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"front matter must be a mapping, got {type(payload).__name__}")
    return {str(key): value for key, value in payload.items()}


def _read_front_matter(path: Path, *, logger: Any) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("command_order_command_unreadable", path=path.as_posix(), error=str(exc))
        return {}
    try:
        return parse_front_matter(text)
    except (yaml.YAMLError, ValueError) as exc:
        logger.warning(
            "command_order_front_matter_invalid", path=path.as_posix(), error=str(exc)
        )
        return {}


__all__ = [
    "CommandRecord",
    "build_command_record",
    "discover_commands",
    "parse_front_matter",
]
