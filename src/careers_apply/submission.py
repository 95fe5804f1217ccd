"""Submission loop: collect the application, resolve the token, POST it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field

from .config import AppSettings
from .console import Console
from .extra_fields import collect_extra_fields
from .prompts import prompt_email, prompt_nonempty, prompt_yes_no
from .token_cache import TokenCache, TokenFetchError, resolve_token

NAME_PROMPT = "Enter your full name: "
EMAIL_PROMPT = "Enter your email address: "
JOB_TITLE_PROMPT = "Enter the job title you are applying for: "
FINAL_ATTEMPT_PROMPT = "Is this your final attempt? (y/n): "
REPEAT_PROMPT = "Would you like to submit another application? (y/n): "

logger = logging.getLogger(__name__)


class ApplicationPayload(BaseModel):
    """JSON document accepted by the careers apply endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    job_title: str
    final_attempt: bool
    extra_information: Dict[str, str] = Field(default_factory=dict)


@dataclass(slots=True)
class SubmissionOutcome:
    """Result of one submission attempt, successful or not."""

    status_code: Optional[int] = None
    body: str = ""
    error: Optional[str] = None
    token_error: Optional[TokenFetchError] = None


@dataclass(slots=True)
class SubmissionSession:
    """Owns the token cache for one interactive run and drives the loop."""

    settings: AppSettings
    console: Console
    http: requests.Session
    token_cache: TokenCache = field(default_factory=TokenCache)
    iterations: int = 0

    def run(self) -> int:
        """Loop until the user declines another submission.

        Returns the number of submission iterations performed.
        """

        while True:
            self.run_once()
            self.console.blank()
            if not prompt_yes_no(
                self.console,
                REPEAT_PROMPT,
                max_attempts=self.settings.max_attempts,
            ):
                self.console.info("\nGoodbye!")
                return self.iterations
            self.console.notice("\n=== Starting next submission ===\n")

    def run_once(self) -> SubmissionOutcome:
        payload = self.collect_application()
        outcome = self.submit(payload)
        self.report(outcome)
        self.iterations += 1
        return outcome

    def collect_application(self) -> ApplicationPayload:
        attempts = self.settings.max_attempts
        name = prompt_nonempty(
            self.console, NAME_PROMPT, max_attempts=attempts
        )
        email = prompt_email(self.console, EMAIL_PROMPT, max_attempts=attempts)
        job_title = prompt_nonempty(
            self.console, JOB_TITLE_PROMPT, max_attempts=attempts
        )
        final_attempt = prompt_yes_no(
            self.console, FINAL_ATTEMPT_PROMPT, max_attempts=attempts
        )

        max_fields = self.settings.max_extra_fields
        self.console.notice(
            f"\nNow you may add up to {max_fields} custom fields under "
            '"extra_information".'
        )
        extra_information = collect_extra_fields(
            self.console, max_fields, max_attempts=attempts
        )
        return ApplicationPayload(
            name=name,
            email=email,
            job_title=job_title,
            final_attempt=final_attempt,
            extra_information=extra_information,
        )

    def submit(self, payload: ApplicationPayload) -> SubmissionOutcome:
        """Resolve the token and POST ``payload``; never raises on HTTP errors."""

        try:
            token = resolve_token(
                self.token_cache,
                http=self.http,
                url=self.settings.secret_url,
                timeout=self.settings.request_timeout,
                console=self.console,
            )
        except TokenFetchError as exc:
            return SubmissionOutcome(token_error=exc)

        self.console.info(f"\n→ Using token: {token}")
        apply_url = self.settings.apply_url
        self.console.info(f"\nSubmitting application to {apply_url} ...")
        try:
            headers = {
                "Content-Type": "application/json",
                "Authorization": token,
            }
            response = self.http.post(
                apply_url,
                data=payload.model_dump_json().encode("utf-8"),
                headers=headers,
                timeout=self.settings.request_timeout,
            )
        except (requests.RequestException, ValueError) as exc:
            # ValueError covers headers the token cannot be encoded into.
            logger.info("Application POST failed: %s", exc)
            return SubmissionOutcome(error=repr(exc))

        logger.info("Application POST returned %s", response.status_code)
        return SubmissionOutcome(
            status_code=response.status_code,
            body=response.text,
        )

    def report(self, outcome: SubmissionOutcome) -> None:
        token_error = outcome.token_error
        if token_error is not None:
            if token_error.reason is not None:
                self.console.error(f"HTTP GET error: {token_error.reason}")
            else:
                self.console.error(
                    "Failed to fetch token. HTTP status: "
                    f"{token_error.status_code}\nBody:\n{token_error.body}"
                )
            return
        if outcome.error is not None:
            self.console.error(f"Error while POSTing: {outcome.error}")
            return
        self.console.success(f"→ POST returned status: {outcome.status_code}")
        self.console.success("→ Response body:")
        self.console.plain(outcome.body)
