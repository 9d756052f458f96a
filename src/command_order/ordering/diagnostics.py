"""
command-order — ordering diagnostics side channel.

File: src/command_order/ordering/diagnostics.py

Purpose
- Describe irregularities found while loading or applying an order declaration.
- Deliver them to an optional caller sink and to the module logger.

Functional requirements
- Diagnostics never change the result of a resolution.
- A failing sink must not abort the resolution that reported to it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DiagnosticKind(StrEnum):
    """Kinds of irregularity the ordering core tolerates."""

    UNKNOWN_ID = "unknown_id"
    DUPLICATE_ID = "duplicate_id"
    PATH_ESCAPE = "path_escape"


@dataclass(frozen=True, slots=True)
class OrderDiagnostic:
    """One tolerated irregularity, reported out of band."""

    kind: DiagnosticKind
    command_id: str | None = None
    position: int | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "command_id": self.command_id,
            "position": self.position,
            "path": self.path,
        }


DiagnosticSink = Callable[[OrderDiagnostic], None]

_WARNING_KINDS = frozenset({DiagnosticKind.UNKNOWN_ID, DiagnosticKind.PATH_ESCAPE})


def emit_diagnostic(
    diagnostic: OrderDiagnostic,
    *,
    sink: DiagnosticSink | None,
    logger: Any,
) -> None:
    """Log ``diagnostic`` and hand it to ``sink`` when one is registered."""

    event = f"command_order_{diagnostic.kind.value}"
    fields = {key: value for key, value in diagnostic.to_dict().items() if value is not None}
    fields.pop("kind", None)
    if diagnostic.kind in _WARNING_KINDS:
        logger.warning(event, **fields)
    else:
        logger.debug(event, **fields)

    if sink is None:
        return
    try:
        sink(diagnostic)
    except Exception:  # noqa: BLE001 - observability must not fail the resolution.
        logger.exception("command_order_diagnostic_sink_failed", kind=diagnostic.kind.value)


__all__ = ["DiagnosticKind", "DiagnosticSink", "OrderDiagnostic", "emit_diagnostic"]
