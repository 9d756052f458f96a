"""
command-order — order declaration loader.

File: src/command_order/ordering/spec_loader.py

Purpose
- Locate and parse the optional ``_order.yaml`` declaration of a workflow.

What should be included in this file
- YAML loading with a safe loader that keeps non-null scalars as their source text.
- Shape validation of the ``commands`` field.
- Containment check keeping the read inside the workflow directory.

Functional requirements
- A missing declaration is the absent state (``None``), never an error.
- A missing, null, or empty ``commands`` field yields ``[]``.
- Declaration order and duplicates are preserved; deduplication happens in the resolver.
- Syntax errors and wrong shapes raise ``MalformedOrderSpecError`` with the file path.

Non-functional requirements
- Exactly one file read per call, no caching, no shared state.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path, PurePosixPath
from typing import Any

import structlog
import yaml

from command_order.constants import DEFAULT_COMMANDS_DIR, DEFAULT_ORDER_FIELD, DEFAULT_ORDER_FILE
from command_order.ordering.diagnostics import (
    DiagnosticKind,
    DiagnosticSink,
    OrderDiagnostic,
    emit_diagnostic,
)
from command_order.ordering.errors import (
    MalformedOrderSpecError,
    OrderSpecError,
    OrderSpecReadError,
)
from command_order.utils.fs import PathLike, is_within, validate_relative_subpath

_logger = structlog.get_logger(__name__)


class _LiteralScalarLoader(yaml.SafeLoader):
    """Safe loader that reads bools, numbers and timestamps back as plain strings.

    Command ids such as ``2024`` or ``on`` are file stems, not typed values.
    Nulls still resolve to ``None`` so an empty ``commands:`` stays empty.
    """


def _construct_literal(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


for _tag in (
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
):
    _LiteralScalarLoader.add_constructor(_tag, _construct_literal)


def order_file_path(
    base_dir: PathLike,
    *,
    commands_dir: str | PurePosixPath = DEFAULT_COMMANDS_DIR,
    order_file: str = DEFAULT_ORDER_FILE,
) -> Path:
    """Return the declaration path for ``base_dir`` without touching the filesystem."""

    relative_dir = validate_relative_subpath(commands_dir)
    file_name = validate_relative_subpath(order_file)
    if len(file_name.parts) != 1:
        raise ValueError(f"order file must be a bare file name: {order_file!r}")
    return Path(base_dir) / Path(*relative_dir.parts) / file_name.name


def load_command_order(
    base_dir: PathLike,
    *,
    commands_dir: str | PurePosixPath = DEFAULT_COMMANDS_DIR,
    order_file: str = DEFAULT_ORDER_FILE,
    order_field: str = DEFAULT_ORDER_FIELD,
    on_diagnostic: DiagnosticSink | None = None,
    logger: Any | None = None,
) -> list[str] | None:
    """
    Load the declared command order for the workflow rooted at ``base_dir``.

    Returns ``None`` when no declaration exists, otherwise the declared ids in
    file order. Raises ``MalformedOrderSpecError`` when the declaration cannot
    be parsed into a mapping with a list of strings under ``order_field``.
    """

    log = logger if logger is not None else _logger
    path = order_file_path(base_dir, commands_dir=commands_dir, order_file=order_file)

    try:
        if not path.exists():
            return None
        contained = is_within(path, base_dir)
    except OSError as exc:
        raise OrderSpecReadError(path, f"unable to inspect declaration ({exc})") from exc
    if not contained:
        emit_diagnostic(
            OrderDiagnostic(kind=DiagnosticKind.PATH_ESCAPE, path=path.as_posix()),
            sink=on_diagnostic,
            logger=log,
        )
        return None

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle, Loader=_LiteralScalarLoader)  # noqa: S506
    except FileNotFoundError:
        return None
    except yaml.YAMLError as exc:
        raise MalformedOrderSpecError(path, f"invalid YAML ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise MalformedOrderSpecError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise OrderSpecReadError(path, f"unable to read declaration ({exc})") from exc

    return _coerce_order_payload(payload, path=path, order_field=order_field)


def try_load_command_order(
    base_dir: PathLike,
    *,
    commands_dir: str | PurePosixPath = DEFAULT_COMMANDS_DIR,
    order_file: str = DEFAULT_ORDER_FILE,
    order_field: str = DEFAULT_ORDER_FIELD,
    on_diagnostic: DiagnosticSink | None = None,
    logger: Any | None = None,
) -> tuple[list[str] | None, OrderSpecError | None]:
    """Return ``(order, error)``; ``error`` is set only for unusable declarations."""

    try:
        order = load_command_order(
            base_dir,
            commands_dir=commands_dir,
            order_file=order_file,
            order_field=order_field,
            on_diagnostic=on_diagnostic,
            logger=logger,
        )
    except OrderSpecError as exc:
        return None, exc
    return order, None


def _coerce_order_payload(payload: object, *, path: Path, order_field: str) -> list[str]:
    if payload is None:
        return []
    if not isinstance(payload, Mapping):
        raise MalformedOrderSpecError(
            path, f"expected top-level mapping, got {type(payload).__name__}"
        )

    raw = payload.get(order_field)
    if raw is None:
        return []
    return coerce_id_list(raw, path=path, location=order_field)


def coerce_id_list(value: object, *, path: Path, location: str) -> list[str]:
    """Validate a YAML sequence of command ids, keeping order and duplicates."""

    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise MalformedOrderSpecError(
            path, f"'{location}' must be a list of strings, got {type(value).__name__}"
        )

    ids: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise MalformedOrderSpecError(
                path, f"'{location}[{index}]' must be a string, got {type(item).__name__}"
            )
        ids.append(item)
    return ids


__all__ = [
    "coerce_id_list",
    "load_command_order",
    "order_file_path",
    "try_load_command_order",
]
