"""Utility exports for filesystem containment helpers."""

from command_order.utils.fs import is_within, validate_relative_subpath

__all__ = ["is_within", "validate_relative_subpath"]
