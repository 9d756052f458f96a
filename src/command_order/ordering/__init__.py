"""Public ordering primitives: declaration loading, diagnostics, and order resolution."""

from command_order.ordering.diagnostics import (
    DiagnosticKind,
    DiagnosticSink,
    OrderDiagnostic,
)
from command_order.ordering.errors import (
    MalformedOrderSpecError,
    OrderSpecError,
    OrderSpecReadError,
)
from command_order.ordering.resolver import resolve_order_ids, sort_commands_by_order
from command_order.ordering.spec_loader import (
    load_command_order,
    order_file_path,
    try_load_command_order,
)

__all__ = [
    "DiagnosticKind",
    "DiagnosticSink",
    "MalformedOrderSpecError",
    "OrderDiagnostic",
    "OrderSpecError",
    "OrderSpecReadError",
    "load_command_order",
    "order_file_path",
    "resolve_order_ids",
    "sort_commands_by_order",
    "try_load_command_order",
]
