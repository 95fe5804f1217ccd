"""Collects the optional key/value pairs sent as ``extra_information``."""

from __future__ import annotations

import logging
from typing import Dict

from .config import DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_EXTRA_FIELDS
from .console import Console
from .prompts import prompt_json_key, prompt_nonempty, prompt_yes_no

ADD_FIELD_PROMPT = "Would you like to add an extra field? (y/n): "
FIELD_NAME_PROMPT = "  Enter field name (no quotes or control chars): "

logger = logging.getLogger(__name__)


def collect_extra_fields(
    console: Console,
    max_fields: int = DEFAULT_MAX_EXTRA_FIELDS,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Dict[str, str]:
    """Offer to add custom fields until the user declines or the budget runs out.

    The add-field question is not asked once ``max_fields`` pairs were
    accepted. Re-entering a key replaces its earlier value.
    """

    extra_information: Dict[str, str] = {}
    remaining = max_fields
    while remaining > 0:
        if not prompt_yes_no(
            console, ADD_FIELD_PROMPT, max_attempts=max_attempts
        ):
            break
        key = prompt_json_key(
            console, FIELD_NAME_PROMPT, max_attempts=max_attempts
        )
        value = prompt_nonempty(
            console, f"  Enter value for {key}: ", max_attempts=max_attempts
        )
        remaining -= 1
        if key in extra_information:
            logger.debug("Extra field %r overwritten", key)
        extra_information[key] = value
    return extra_information
