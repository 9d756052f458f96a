"""
command-order — config schema, defaults, and validation.

File: src/command_order/config/schema.py

Purpose
- Define the config shape, its defaults, and strict validation with structured issues.

Functional requirements
- Unknown sections and fields are rejected with deterministic dotted paths.
- ``ordering.commands_dir`` must stay relative to the workflow directory.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, TypedDict, cast

from command_order.constants import DEFAULT_COMMANDS_DIR, DEFAULT_ORDER_FIELD, DEFAULT_ORDER_FILE
from command_order.utils.fs import validate_relative_subpath

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "console")


class OrderingConfig(TypedDict):
    commands_dir: str
    order_file: str
    order_field: str


class ObservabilityConfig(TypedDict):
    log_level: str
    log_format: str


class CommandOrderConfig(TypedDict):
    ordering: OrderingConfig
    observability: ObservabilityConfig


DEFAULT_CONFIG: Final[CommandOrderConfig] = {
    "ordering": {
        "commands_dir": DEFAULT_COMMANDS_DIR.as_posix(),
        "order_file": DEFAULT_ORDER_FILE,
        "order_field": DEFAULT_ORDER_FIELD,
    },
    "observability": {
        "log_level": "WARNING",
        "log_format": "json",
    },
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


class ConfigValidationError(ValueError):
    """Raised when strict config validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)


def default_config() -> dict[str, Any]:
    """Return a fresh mutable copy of the defaults."""

    return _deep_copy_mapping(DEFAULT_CONFIG)


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``."""

    merged = _deep_copy_mapping(base)
    _merge_into(merged, overlay)
    return merged


def validate_config(config: Mapping[str, object] | object) -> tuple[ConfigValidationIssue, ...]:
    """Return every validation issue found in ``config`` (empty when valid)."""

    issues = _IssueCollector()
    if not isinstance(config, Mapping):
        issues.add("<root>", f"expected object, got {type(config).__name__}")
        return issues.items()

    _reject_unknown_keys(config, {"ordering", "observability"}, "", issues)

    ordering = _section(config, "ordering", issues)
    if ordering is not None:
        _reject_unknown_keys(ordering, set(DEFAULT_CONFIG["ordering"]), "ordering", issues)
        commands_dir = _as_str(ordering.get("commands_dir"), "ordering.commands_dir", issues)
        if commands_dir is not None:
            try:
                validate_relative_subpath(commands_dir)
            except ValueError as exc:
                issues.add("ordering.commands_dir", str(exc))
        order_file = _as_str(ordering.get("order_file"), "ordering.order_file", issues)
        if order_file is not None:
            try:
                file_name = validate_relative_subpath(order_file)
            except ValueError as exc:
                issues.add("ordering.order_file", str(exc))
            else:
                if len(file_name.parts) != 1:
                    issues.add("ordering.order_file", "must be a bare file name")
        _as_str(ordering.get("order_field"), "ordering.order_field", issues)

    observability = _section(config, "observability", issues)
    if observability is not None:
        _reject_unknown_keys(
            observability, set(DEFAULT_CONFIG["observability"]), "observability", issues
        )
        _as_enum(
            observability.get("log_level"),
            "observability.log_level",
            issues,
            allowed_values=LOG_LEVELS,
        )
        _as_enum(
            observability.get("log_format"),
            "observability.log_format",
            issues,
            allowed_values=LOG_FORMATS,
        )

    return issues.items()


def assert_valid_config(config: Mapping[str, object] | object) -> dict[str, Any]:
    """Validate config and return a copy holding the stripped values that were validated."""

    issues = validate_config(config)
    if issues:
        raise ConfigValidationError(issues)
    validated = _deep_copy_mapping(cast("Mapping[str, object]", config))
    for section in validated.values():
        for key, value in section.items():
            if isinstance(value, str):
                section[key] = value.strip()
    return validated


def _section(
    config: Mapping[str, object], name: str, issues: _IssueCollector
) -> Mapping[str, object] | None:
    value = config.get(name)
    if not isinstance(value, Mapping):
        issues.add(name, f"expected object, got {type(value).__name__}")
        return None
    return value


def _as_str(value: object, path: str, issues: _IssueCollector) -> str | None:
    if not isinstance(value, str):
        issues.add(path, f"expected string, got {type(value).__name__}")
        return None
    parsed = value.strip()
    if not parsed:
        issues.add(path, "must not be empty")
        return None
    return parsed


def _as_enum(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    allowed_values: tuple[str, ...],
) -> str | None:
    parsed = _as_str(value, path, issues)
    if parsed is None:
        return None
    if parsed not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        issues.add(path, f"invalid value {parsed!r}; expected one of: {expected}")
        return None
    return parsed


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(payload):
        if key not in allowed:
            issues.add(f"{path}.{key}" if path else key, "unknown field")


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        if isinstance(value, Mapping):
            existing = target.get(key)
            if isinstance(existing, dict):
                _merge_into(existing, value)
            else:
                nested: dict[str, Any] = {}
                _merge_into(nested, value)
                target[key] = nested
        else:
            target[key] = copy.deepcopy(value)


def _deep_copy_mapping(value: Mapping[str, object]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in sorted(value):
        item = value[key]
        out[key] = _deep_copy_mapping(item) if isinstance(item, Mapping) else copy.deepcopy(item)
    return out


__all__ = [
    "DEFAULT_CONFIG",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "CommandOrderConfig",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ObservabilityConfig",
    "OrderingConfig",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "validate_config",
]
