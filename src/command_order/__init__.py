"""
command-order — deterministic command ordering for workflows.

File: src/command_order/__init__.py

Purpose
- Package root. Exposes the ordering core: declaration loading and order resolution.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from command_order.ordering import (
    MalformedOrderSpecError,
    OrderDiagnostic,
    OrderSpecError,
    load_command_order,
    resolve_order_ids,
    sort_commands_by_order,
    try_load_command_order,
)

__version__ = "0.1.0"

__all__ = [
    "MalformedOrderSpecError",
    "OrderDiagnostic",
    "OrderSpecError",
    "__version__",
    "load_command_order",
    "resolve_order_ids",
    "sort_commands_by_order",
    "try_load_command_order",
]
