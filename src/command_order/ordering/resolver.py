"""
Merge a declared command order against the full set of workflow commands.

The merge is a stable two-phase walk:
- declared ids come first, in first-occurrence order, when they name a known command
- every remaining command follows, sorted by id in codepoint order

Unknown and repeated ids are skipped and reported through the diagnostic side
channel. The result never depends on the iteration order of the command mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from command_order.ordering.diagnostics import (
    DiagnosticKind,
    DiagnosticSink,
    OrderDiagnostic,
    emit_diagnostic,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

_logger = structlog.get_logger(__name__)

T = TypeVar("T")


def sort_commands_by_order(
    commands: Mapping[str, T],
    order: Sequence[str] | None,
    *,
    on_diagnostic: DiagnosticSink | None = None,
    logger: Any | None = None,
) -> list[T]:
    """Return every command exactly once: declared ids first, the rest alphabetically."""

    log = logger if logger is not None else _logger
    ordered: list[T] = []
    consumed: set[str] = set()

    for position, command_id in enumerate(order or ()):
        if command_id in consumed:
            emit_diagnostic(
                OrderDiagnostic(
                    kind=DiagnosticKind.DUPLICATE_ID, command_id=command_id, position=position
                ),
                sink=on_diagnostic,
                logger=log,
            )
            continue
        if command_id not in commands:
            emit_diagnostic(
                OrderDiagnostic(
                    kind=DiagnosticKind.UNKNOWN_ID, command_id=command_id, position=position
                ),
                sink=on_diagnostic,
                logger=log,
            )
            continue
        consumed.add(command_id)
        ordered.append(commands[command_id])

    remaining = sorted(command_id for command_id in commands if command_id not in consumed)
    ordered.extend(commands[command_id] for command_id in remaining)
    return ordered


def resolve_order_ids(
    command_ids: Iterable[str],
    order: Sequence[str] | None,
    *,
    on_diagnostic: DiagnosticSink | None = None,
    logger: Any | None = None,
) -> list[str]:
    """Apply :func:`sort_commands_by_order` to bare ids."""

    return sort_commands_by_order(
        {command_id: command_id for command_id in command_ids},
        order,
        on_diagnostic=on_diagnostic,
        logger=logger,
    )


__all__ = ["resolve_order_ids", "sort_commands_by_order"]
