"""Public observability primitives: structured logging setup."""

from command_order.observability.logging import (
    ConsoleFormatter,
    JsonLineFormatter,
    reset_logging,
    setup_logging,
)

__all__ = [
    "ConsoleFormatter",
    "JsonLineFormatter",
    "reset_logging",
    "setup_logging",
]
