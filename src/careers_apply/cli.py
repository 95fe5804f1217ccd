"""Command line entry-point for the careers application client."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional

import requests

from .config import AppSettings
from .console import Console
from .prompts import ExhaustedAttemptsError
from .submission import SubmissionSession

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="careers-apply",
        description=(
            "Collect applicant details interactively and submit them to the "
            "careers endpoint"
        ),
    )
    parser.add_argument(
        "--secret-url",
        help="Token endpoint URL. Overrides CAREERS_SECRET_URL.",
    )
    parser.add_argument(
        "--apply-url",
        help="Application endpoint URL. Overrides CAREERS_APPLY_URL.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help=(
            "Timeout in seconds for each HTTP request. "
            "Overrides CAREERS_REQUEST_TIMEOUT."
        ),
    )
    parser.add_argument(
        "--max-extra-fields",
        type=int,
        help=(
            "Maximum number of custom fields per submission. "
            "Overrides CAREERS_MAX_EXTRA_FIELDS."
        ),
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in the console output.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: CAREERS_LOG_LEVEL or WARNING).",
    )
    return parser.parse_args(argv)


def _apply_overrides(
    settings: AppSettings, args: argparse.Namespace
) -> AppSettings:
    if args.secret_url:
        settings = replace(settings, secret_url=args.secret_url)
    if args.apply_url:
        settings = replace(settings, apply_url=args.apply_url)
    if args.timeout is not None:
        if args.timeout <= 0:
            raise SystemExit("--timeout must be > 0")
        settings = replace(settings, request_timeout=args.timeout)
    if args.max_extra_fields is not None:
        if args.max_extra_fields < 0:
            raise SystemExit("--max-extra-fields must be >= 0")
        settings = replace(settings, max_extra_fields=args.max_extra_fields)
    if args.no_color:
        settings = replace(settings, use_color=False)
    if args.log_level:
        settings = replace(settings, log_level=args.log_level)
    return settings


def run_cli(
    argv: Optional[list[str]] = None,
    *,
    console: Optional[Console] = None,
    http: Optional[requests.Session] = None,
) -> int:
    """Run the interactive submission loop and return the exit status."""

    args = _parse_args(argv)
    settings = _apply_overrides(AppSettings.load(), args)
    logging.basicConfig(level=settings.log_level)
    if console is None:
        console = Console(use_color=settings.use_color)

    owns_http = http is None
    client = requests.Session() if http is None else http
    session = SubmissionSession(settings=settings, console=console, http=client)
    try:
        session.run()
    except ExhaustedAttemptsError as exc:
        logger.info("Aborting after exhausted attempts (%s)", exc.field_kind)
        console.error(exc.message)
        return 1
    except KeyboardInterrupt:
        console.error("\nInterrupted.")
        return 130
    finally:
        if owns_http:
            client.close()
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":  # pragma: no cover - manual execution hook
    main()
