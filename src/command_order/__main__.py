"""Module entrypoint for ``python -m command_order``."""

from __future__ import annotations

from command_order.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
