"""
command-order config package public API.

File: src/command_order/config/__init__.py

Purpose
- Export config loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``command_order.toml`` + ``COMMAND_ORDER_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from command_order.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    ConfigLoadError,
    dump_effective_config,
    effective_config,
    load_config,
)
from command_order.config.schema import (
    DEFAULT_CONFIG,
    LOG_FORMATS,
    LOG_LEVELS,
    CommandOrderConfig,
    ConfigValidationError,
    ConfigValidationIssue,
    assert_valid_config,
    default_config,
    merge_config,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "CommandOrderConfig",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "assert_valid_config",
    "default_config",
    "dump_effective_config",
    "effective_config",
    "load_config",
    "merge_config",
    "validate_config",
]
