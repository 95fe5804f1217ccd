"""Fetch-once authorization token handling."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from .config import DEFAULT_REQUEST_TIMEOUT
from .console import Console

MISSING_TOKEN_WARNING = (
    'Warning: /secret returned JSON without a "token" key. Using raw body.'
)

logger = logging.getLogger(__name__)


class TokenFetchError(RuntimeError):
    """Raised when the token endpoint cannot provide a token.

    Either ``status_code`` and ``body`` are set (non-200 reply) or
    ``reason`` describes the transport failure.
    """

    def __init__(
        self,
        *,
        status_code: Optional[int] = None,
        body: str = "",
        reason: Optional[str] = None,
    ) -> None:
        if reason is not None:
            message = f"HTTP GET error: {reason}"
        else:
            message = f"Failed to fetch token. HTTP status: {status_code}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.reason = reason


class TokenCache:
    """Single-slot holder for the token of the current run."""

    def __init__(self) -> None:
        self._token: Optional[str] = None

    def get(self) -> Optional[str]:
        return self._token

    def store(self, token: str) -> None:
        if self._token is not None:
            raise RuntimeError("Token cache is already populated.")
        self._token = token

    def __bool__(self) -> bool:
        return self._token is not None


def extract_token(body: str, *, console: Optional[Console] = None) -> str:
    """Pull the token out of a ``/secret`` response body.

    ``{"token": ...}`` yields the token value, a JSON string is decoded and
    trimmed, and anything else falls back to the trimmed raw body.
    """

    try:
        decoded: Any = json.loads(body)
    except ValueError:
        return body.strip()

    if isinstance(decoded, dict) and "token" in decoded:
        token = decoded["token"]
        return token if isinstance(token, str) else str(token)
    if isinstance(decoded, str):
        return decoded.strip()

    logger.info("Token endpoint returned JSON without a token key")
    if console is not None:
        console.error(MISSING_TOKEN_WARNING)
    return body.strip()


def resolve_token(
    cache: TokenCache,
    *,
    http: requests.Session,
    url: str,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    console: Optional[Console] = None,
) -> str:
    """Return the cached token, fetching it first when the cache is empty.

    The cache is written only after a 200 reply, so a failed fetch is
    retried on the next call.
    """

    cached = cache.get()
    if cached is not None:
        logger.debug("Reusing cached token")
        return cached

    if console is not None:
        console.info(f"\nFetching Authorization token from {url} ...")
    logger.info("Fetching token from %s", url)
    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as exc:
        logger.info("Token request failed: %s", exc)
        raise TokenFetchError(reason=repr(exc)) from exc

    if response.status_code != 200:
        logger.info(
            "Token endpoint answered with status %s", response.status_code
        )
        raise TokenFetchError(
            status_code=response.status_code,
            body=response.text,
        )

    token = extract_token(response.text, console=console)
    cache.store(token)
    return token
