"""Executable CLI entrypoint for ``command_order``."""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING

from command_order.config import ConfigLoadError, ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence


class ExitCode(IntEnum):
    """Deterministic process exit-code contract."""

    SUCCESS = 0
    FAILURE = 1
    CONFIG_ERROR = 2
    INTERNAL_ERROR = 4


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Entrypoint used by ``python -m command_order`` and the console script."""

    try:
        from command_order.ui.cli import run_cli

        return _normalize_exit_code(run_cli(argv))
    except SystemExit as exc:
        return _normalize_exit_code(exc.code)
    except (ConfigLoadError, ConfigValidationError) as exc:
        _write_stderr(str(exc).strip() or exc.__class__.__name__)
        return int(ExitCode.CONFIG_ERROR)
    except Exception as exc:  # noqa: BLE001 - CLI boundary normalization.
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        return int(ExitCode.INTERNAL_ERROR)


def console_main() -> None:
    """Console-script entrypoint."""

    raise SystemExit(cli_entrypoint())


def _normalize_exit_code(raw_code: object) -> int:
    if isinstance(raw_code, int) and raw_code in {code.value for code in ExitCode}:
        return raw_code
    if raw_code is None:
        return int(ExitCode.SUCCESS)
    if isinstance(raw_code, str) and raw_code.strip():
        _write_stderr(raw_code.strip())
    return int(ExitCode.INTERNAL_ERROR)


def _write_stderr(message: str) -> None:
    sys.stderr.write(message.rstrip("\n") + "\n")


__all__ = ["ExitCode", "cli_entrypoint", "console_main"]
