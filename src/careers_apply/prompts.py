"""Bounded-retry prompts and the field validators built on top of them.

Every prompt owns a fresh attempt counter. A rejected answer costs one
attempt and triggers a retry hint; an accepted answer returns immediately.
When the counter reaches zero an :class:`ExhaustedAttemptsError` is raised,
which ends the whole session.
"""

from __future__ import annotations

import re
from typing import Callable, TypeVar

from .config import DEFAULT_MAX_ATTEMPTS
from .console import Console

T = TypeVar("T")

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
JSON_KEY_PATTERN = re.compile(r'[^\x00-\x1F"]+')

REQUIRED_FIELD_KIND = "required field"
EMAIL_KIND = "email"
YES_NO_KIND = "y/n"
JSON_KEY_KIND = "JSON key"

_ABORT_MESSAGES = {
    REQUIRED_FIELD_KIND: "Too many invalid attempts for required field. Aborting.",
    EMAIL_KIND: "Too many invalid email attempts. Aborting.",
    YES_NO_KIND: "Too many invalid y/n attempts. Aborting.",
    JSON_KEY_KIND: "Too many invalid attempts for JSON key. Aborting.",
}


class ValidationRejection(Exception):
    """Raised by a validator when an answer is not acceptable."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ExhaustedAttemptsError(RuntimeError):
    """Raised when a prompt runs out of attempts."""

    def __init__(self, field_kind: str) -> None:
        message = _ABORT_MESSAGES.get(
            field_kind,
            f"Too many invalid attempts for {field_kind}. Aborting.",
        )
        super().__init__(message)
        self.field_kind = field_kind
        self.message = message


def validate_nonempty(raw: str) -> str:
    value = raw.strip()
    if not value:
        raise ValidationRejection("Cannot be empty.")
    return value


def validate_email(raw: str) -> str:
    value = raw.strip()
    if not EMAIL_PATTERN.fullmatch(value):
        raise ValidationRejection("Invalid email format.")
    return value


def validate_yes_no(raw: str) -> bool:
    answer = raw.strip().lower()
    if answer == "y":
        return True
    if answer == "n":
        return False
    raise ValidationRejection('Please type "y" or "n".')


def validate_json_key(raw: str) -> str:
    """Accept keys that can be embedded in a JSON object without escaping."""

    value = raw.strip()
    if not value:
        raise ValidationRejection("Key cannot be empty.")
    if not JSON_KEY_PATTERN.fullmatch(value):
        raise ValidationRejection(
            "Invalid key. Must not contain control chars or double‐quotes."
        )
    return value


def prompt_with_retry(
    console: Console,
    prompt_text: str,
    validate: Callable[[str], T],
    *,
    field_kind: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    indent: str = "  ",
) -> T:
    """Ask ``prompt_text`` until ``validate`` accepts the answer.

    Only rejected answers consume attempts. The retry hint reports the
    attempts that remain after the rejection.
    """

    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    attempts_left = max_attempts
    while attempts_left > 0:
        answer = console.ask(prompt_text)
        try:
            return validate(answer)
        except ValidationRejection as rejection:
            attempts_left -= 1
            console.warning(
                f"{indent}→ {rejection.message} "
                f"You have {attempts_left} attempt(s) left."
            )
    raise ExhaustedAttemptsError(field_kind)


def prompt_nonempty(
    console: Console,
    prompt_text: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    return prompt_with_retry(
        console,
        prompt_text,
        validate_nonempty,
        field_kind=REQUIRED_FIELD_KIND,
        max_attempts=max_attempts,
    )


def prompt_email(
    console: Console,
    prompt_text: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    return prompt_with_retry(
        console,
        prompt_text,
        validate_email,
        field_kind=EMAIL_KIND,
        max_attempts=max_attempts,
    )


def prompt_yes_no(
    console: Console,
    prompt_text: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> bool:
    """Strict y/n question; returns ``True`` for "y" and ``False`` for "n"."""

    return prompt_with_retry(
        console,
        prompt_text,
        validate_yes_no,
        field_kind=YES_NO_KIND,
        max_attempts=max_attempts,
    )


def prompt_json_key(
    console: Console,
    prompt_text: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    return prompt_with_retry(
        console,
        prompt_text,
        validate_json_key,
        field_kind=JSON_KEY_KIND,
        max_attempts=max_attempts,
        indent="    ",
    )
