"""Assemble workflow metadata with commands in their resolved display order."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

import structlog

from command_order.config.schema import default_config
from command_order.ordering.diagnostics import DiagnosticSink
from command_order.ordering.resolver import sort_commands_by_order
from command_order.ordering.spec_loader import try_load_command_order
from command_order.utils.fs import PathLike
from command_order.workflow.commands import discover_commands

_logger = structlog.get_logger(__name__)

ORDER_SOURCE_DECLARED: Final[str] = "declared"
ORDER_SOURCE_ALPHABETICAL: Final[str] = "alphabetical"


def build_workflow_metadata(
    workflow_dir: PathLike,
    *,
    config: Mapping[str, Any] | None = None,
    on_diagnostic: DiagnosticSink | None = None,
    logger: Any | None = None,
) -> dict[str, Any]:
    """
    Discover the workflow's commands and return them in display order.

    A malformed order declaration is logged and treated as absent, so this
    never fails because of the declaration.
    """

    log = logger if logger is not None else _logger
    ordering = (config if config is not None else default_config())["ordering"]

    commands = discover_commands(
        workflow_dir,
        commands_dir=ordering["commands_dir"],
        order_file=ordering["order_file"],
        logger=log,
    )
    order, error = try_load_command_order(
        workflow_dir,
        commands_dir=ordering["commands_dir"],
        order_file=ordering["order_file"],
        order_field=ordering["order_field"],
        on_diagnostic=on_diagnostic,
        logger=log,
    )
    if error is not None:
        log.warning(
            "command_order_declaration_unusable",
            path=error.path.as_posix(),
            reason=error.reason,
        )

    resolved = sort_commands_by_order(commands, order, on_diagnostic=on_diagnostic, logger=log)
    return {
        "commands": resolved,
        "orderSource": ORDER_SOURCE_DECLARED if order else ORDER_SOURCE_ALPHABETICAL,
    }


__all__ = [
    "ORDER_SOURCE_ALPHABETICAL",
    "ORDER_SOURCE_DECLARED",
    "build_workflow_metadata",
]
