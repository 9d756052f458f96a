"""Workflow command discovery and metadata assembly."""

from command_order.workflow.commands import (
    CommandRecord,
    build_command_record,
    discover_commands,
    parse_front_matter,
)
from command_order.workflow.metadata import (
    ORDER_SOURCE_ALPHABETICAL,
    ORDER_SOURCE_DECLARED,
    build_workflow_metadata,
)

__all__ = [
    "ORDER_SOURCE_ALPHABETICAL",
    "ORDER_SOURCE_DECLARED",
    "CommandRecord",
    "build_command_record",
    "build_workflow_metadata",
    "discover_commands",
    "parse_front_matter",
]
