"""Command-line interface router for command-order."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from command_order.config import LOG_FORMATS, LOG_LEVELS, effective_config, load_config
from command_order.observability import setup_logging
from command_order.ordering import OrderDiagnostic
from command_order.ui.render import CLIRenderer, create_renderer
from command_order.workflow import ORDER_SOURCE_DECLARED, build_workflow_metadata


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 1

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="command-order",
        description=(
            "command-order — resolve the display order of workflow commands.\n\n"
            "Common workflows:\n"
            "  command-order resolve path/to/workflow     Show commands in display order\n"
            "  command-order config --json                Show effective configuration\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to command_order.toml (default: ./command_order.toml if present).",
    )
    common.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        help="Override observability.log_level.",
    )
    common.add_argument(
        "--log-format",
        default=None,
        choices=LOG_FORMATS,
        help="Override observability.log_format.",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored output.",
    )

    subparsers = parser.add_subparsers(dest="command")

    resolve_parser = subparsers.add_parser(
        "resolve",
        parents=[common],
        help="Print a workflow's commands in resolved display order",
    )
    resolve_parser.add_argument("workflow_dir", help="Workflow directory containing .claude/")
    resolve_parser.add_argument(
        "--json", action="store_true", help="Emit deterministic JSON output"
    )
    resolve_parser.set_defaults(handler=_cmd_resolve)

    config_parser = subparsers.add_parser(
        "config",
        parents=[common],
        help="Print the effective configuration",
    )
    config_parser.add_argument("--json", action="store_true", help="Emit JSON output")
    config_parser.set_defaults(handler=_cmd_config)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return 2

    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_resolve(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    workflow_dir = Path(args.workflow_dir)
    if not workflow_dir.is_dir():
        raise CLIError(f"workflow directory not found: {workflow_dir}", exit_code=2)

    diagnostics: list[OrderDiagnostic] = []
    metadata = build_workflow_metadata(
        workflow_dir, config=config, on_diagnostic=diagnostics.append
    )
    commands: list[Mapping[str, Any]] = metadata["commands"]

    if _flag(args, "json"):
        _emit_json(
            {
                "command": "resolve",
                "workflow_dir": workflow_dir.as_posix(),
                "orderSource": metadata["orderSource"],
                "commands": commands,
                "diagnostics": [item.to_dict() for item in diagnostics],
            }
        )
        return 0

    renderer = _get_renderer(args)
    declared = metadata["orderSource"] == ORDER_SOURCE_DECLARED
    source = "declared order" if declared else "alphabetical"
    renderer.heading(f"Commands ({source}):")
    if not commands:
        renderer.text("  (no commands found)")
    renderer.numbered([f"{command['slashCommand']}  {command['name']}" for command in commands])
    for diagnostic in diagnostics:
        renderer.warning(_describe_diagnostic(diagnostic))
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    payload = effective_config(config)

    if _flag(args, "json"):
        _emit_json({"command": "config", "config": payload})
        return 0

    renderer = _get_renderer(args)
    renderer.text(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_effective_config(args: argparse.Namespace) -> dict[str, Any]:
    config = load_config(
        getattr(args, "config_path", None),
        cli_overrides={
            "observability.log_level": getattr(args, "log_level", None),
            "observability.log_format": getattr(args, "log_format", None),
        },
    )
    observability = config["observability"]
    setup_logging(observability["log_level"], fmt=observability["log_format"])
    return config


def _describe_diagnostic(diagnostic: OrderDiagnostic) -> str:
    if diagnostic.path is not None:
        return f"{diagnostic.kind.value}: {diagnostic.path}"
    return f"{diagnostic.kind.value}: {diagnostic.command_id} (position {diagnostic.position})"


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(
        json.dumps(
            payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
        )
    )


def _get_renderer(args: argparse.Namespace) -> CLIRenderer:
    return create_renderer(no_color=_flag(args, "no_color"))


def _flag(args: argparse.Namespace, name: str) -> bool:
    return bool(getattr(args, name, False))


__all__ = ["CLIError", "build_parser", "run_cli"]
