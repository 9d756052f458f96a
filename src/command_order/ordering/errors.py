"""Error types raised while loading a command order declaration."""

from __future__ import annotations

from pathlib import Path


class OrderSpecError(ValueError):
    """Base error for an order declaration that exists but cannot be used."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path.as_posix()}: {reason}")


class MalformedOrderSpecError(OrderSpecError):
    """Raised when the declaration does not parse into the expected shape."""


class OrderSpecReadError(OrderSpecError):
    """Raised when the declaration exists but cannot be read."""


__all__ = ["MalformedOrderSpecError", "OrderSpecError", "OrderSpecReadError"]
