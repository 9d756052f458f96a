"""Structured logging setup with JSON-lines output routed through structlog."""

from __future__ import annotations

import json
import logging
import math
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

import structlog

if TYPE_CHECKING:
    from typing import TextIO

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_DEFAULT_LOGGER_NAME: Final[str] = "command_order"
_HANDLER_MARKER: Final[str] = "_command_order_handler"

_STANDARD_LOG_RECORD_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
    }
)


class JsonLineFormatter(logging.Formatter):
    """Formatter that emits canonical JSON objects per log line."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = extras

        if record.exc_info is not None:
            event["exception"] = self.formatException(record.exc_info)

        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Human-readable ``LEVEL logger: message key=value`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname} {record.name}: {record.getMessage()}"
        extras = _extract_extra_fields(record)
        if extras:
            rendered = " ".join(
                f"{key}={json.dumps(value, ensure_ascii=False)}" for key, value in extras.items()
            )
            line = f"{line} {rendered}"
        if record.exc_info is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    level: int | str = "WARNING",
    *,
    fmt: str = "json",
    stream: TextIO | None = None,
    logger_name: str = _DEFAULT_LOGGER_NAME,
) -> logging.Logger:
    """Configure ``logger_name`` and route structlog loggers into it.

    Parameters
    ----------
    level:
        Log level name or number.
    fmt:
        ``"json"`` for JSON lines, ``"console"`` for plain text.
    stream:
        Output stream; defaults to ``sys.stderr`` so stdout stays free for command output.
    logger_name:
        Logger name to configure.

    Repeated calls replace the previously installed handler.
    """

    if fmt not in {"json", "console"}:
        raise ValueError(f"unsupported log format: {fmt!r}")

    logger = logging.getLogger(logger_name)
    logger.setLevel(_parse_log_level(level))
    logger.propagate = False
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)
            existing.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonLineFormatter() if fmt == "json" else ConsoleFormatter())
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    return logger


def reset_logging(logger_name: str = _DEFAULT_LOGGER_NAME) -> None:
    """Remove installed handlers and restore structlog defaults."""

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)
            existing.close()
    logger.propagate = True
    structlog.reset_defaults()


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    normalized = value.strip().upper()
    resolved = logging.getLevelName(normalized)
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {value!r}")
    return resolved


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    moment = datetime.fromtimestamp(epoch_seconds, tz=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, JSONValue]:
    extras: dict[str, JSONValue] = {}
    for key in sorted(record.__dict__):
        if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_"):
            continue
        extras[key] = _normalize_json_value(record.__dict__[key])
    return extras


def _normalize_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {str(key): _normalize_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value, key=repr) if isinstance(value, (set, frozenset)) else value
        return [_normalize_json_value(item) for item in items]
    return str(value)


__all__ = [
    "ConsoleFormatter",
    "JsonLineFormatter",
    "reset_logging",
    "setup_logging",
]
