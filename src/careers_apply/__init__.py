"""Interactive careers application client."""

from __future__ import annotations

from typing import Optional

__all__ = ["run_cli"]


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Proxy to :mod:`careers_apply.cli.run_cli` for convenience."""

    from .cli import run_cli as _run_cli_impl

    return _run_cli_impl(argv)
