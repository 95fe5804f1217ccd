"""Module executed when running ``python -m careers_apply``."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover - runtime hook
    main()
