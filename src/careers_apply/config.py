"""Configuration helpers for the careers application client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import import_module

DEFAULT_SECRET_URL = "https://au.mitimes.com/careers/apply/secret"
DEFAULT_APPLY_URL = "https://au.mitimes.com/careers/apply"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MAX_EXTRA_FIELDS = 5


@dataclass(slots=True)
class AppSettings:
    """Top-level application settings loaded from environment variables."""

    secret_url: str = DEFAULT_SECRET_URL
    apply_url: str = DEFAULT_APPLY_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    max_extra_fields: int = DEFAULT_MAX_EXTRA_FIELDS
    use_color: bool = True
    log_level: str = "WARNING"

    @classmethod
    def load(cls) -> "AppSettings":
        """Load settings from the environment or .env file."""
        _ensure_dotenv()
        secret_url = _url_from_env("CAREERS_SECRET_URL", DEFAULT_SECRET_URL)
        apply_url = _url_from_env("CAREERS_APPLY_URL", DEFAULT_APPLY_URL)

        timeout_raw = os.getenv("CAREERS_REQUEST_TIMEOUT", "10")
        try:
            request_timeout = float(timeout_raw)
        except ValueError as exc:
            raise RuntimeError(
                "CAREERS_REQUEST_TIMEOUT must be a number of seconds"
            ) from exc
        if request_timeout <= 0:
            raise RuntimeError("CAREERS_REQUEST_TIMEOUT must be positive")

        attempts_raw = os.getenv("CAREERS_MAX_ATTEMPTS", "3")
        try:
            max_attempts = int(attempts_raw)
        except ValueError as exc:
            raise RuntimeError(
                "CAREERS_MAX_ATTEMPTS must be an integer"
            ) from exc
        if max_attempts < 1:
            raise RuntimeError("CAREERS_MAX_ATTEMPTS must be at least 1")

        fields_raw = os.getenv("CAREERS_MAX_EXTRA_FIELDS", "5")
        try:
            max_extra_fields = int(fields_raw)
        except ValueError as exc:
            raise RuntimeError(
                "CAREERS_MAX_EXTRA_FIELDS must be an integer"
            ) from exc
        if max_extra_fields < 0:
            raise RuntimeError(
                "CAREERS_MAX_EXTRA_FIELDS must not be negative"
            )

        log_level = os.getenv("CAREERS_LOG_LEVEL", "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise RuntimeError(
                f"Unsupported CAREERS_LOG_LEVEL: {log_level}"
            )

        return cls(
            secret_url=secret_url,
            apply_url=apply_url,
            request_timeout=request_timeout,
            max_attempts=max_attempts,
            max_extra_fields=max_extra_fields,
            use_color=not os.getenv("NO_COLOR"),
            log_level=log_level,
        )


def _url_from_env(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


def _ensure_dotenv() -> None:
    """Load dotenv variables and provide a helpful error if missing."""

    try:
        dotenv_module = import_module("dotenv")
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dep
        raise RuntimeError(
            "python-dotenv is required. Install with `pip install "
            "python-dotenv`."
        ) from exc

    load_dotenv = getattr(dotenv_module, "load_dotenv")
    load_dotenv()
