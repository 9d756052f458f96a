"""
command-order — filesystem containment helpers.

File: src/command_order/utils/fs.py

Purpose
- Keep declaration reads inside the caller-supplied workflow directory.

Functional requirements
- Containment is checked on fully resolved paths, so symlinks pointing outside
  the base directory are rejected.
- Configured subdirectories must be relative and free of ``..`` segments.

Non-functional requirements
- Standard library only and cross-platform behavior where feasible.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

PathLike = str | os.PathLike[str]

__all__ = [
    "PathLike",
    "is_within",
    "validate_relative_subpath",
]


def is_within(child: PathLike, parent: PathLike) -> bool:
    """Return ``True`` if resolved ``child`` is within resolved ``parent``."""

    try:
        resolved_parent = Path(parent).resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError):
        return False
    if not resolved_parent.is_dir():
        return False

    try:
        resolved_child = Path(child).resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError):
        return False

    return _is_relative_to(resolved_child, resolved_parent)


def validate_relative_subpath(value: str | PurePosixPath) -> PurePosixPath:
    """
    Return ``value`` as a relative POSIX path, rejecting traversal.

    Raises ``ValueError`` for empty, absolute, or ``..``-containing values.
    """

    text = str(value).strip().replace("\\", "/")
    if not text:
        raise ValueError("path must be a non-empty relative path")
    candidate = PurePosixPath(text)
    if candidate.is_absolute() or (len(text) > 1 and text[1] == ":"):
        raise ValueError(f"path must be relative: {text!r}")
    if any(part == ".." for part in candidate.parts):
        raise ValueError(f"path must not contain '..' segments: {text!r}")
    return candidate


def _is_relative_to(child: Path, parent: Path) -> bool:
    try:
        child.relative_to(parent)
    except ValueError:
        return False
    return True
