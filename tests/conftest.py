"""Shared pytest fixtures for the careers application client."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from careers_apply import config
from careers_apply.console import Console


@dataclass
class FakeResponse:
    status_code: int
    text: str = ""


Reply = Union[FakeResponse, Exception]


@dataclass
class FakeHTTP:
    """Stands in for ``requests.Session`` and records every call."""

    get_replies: List[Reply] = field(default_factory=list)
    post_replies: List[Reply] = field(default_factory=list)
    gets: List[Dict[str, Any]] = field(default_factory=list)
    posts: List[Dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.gets.append({"url": url, **kwargs})
        return self._next(self.get_replies)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        # http.client sends header values as latin-1.
        for value in (kwargs.get("headers") or {}).values():
            value.encode("latin-1")
        self.posts.append({"url": url, **kwargs})
        return self._next(self.post_replies)

    def close(self) -> None:
        self.closed = True

    @staticmethod
    def _next(replies: List[Reply]) -> FakeResponse:
        if not replies:
            raise AssertionError("Unexpected HTTP call")
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@dataclass
class ConsoleHarness:
    console: Console
    stdout: io.StringIO
    stderr: io.StringIO

    @property
    def out(self) -> str:
        return self.stdout.getvalue()

    @property
    def err(self) -> str:
        return self.stderr.getvalue()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch):
    """Keep developer .env files and CAREERS_* variables out of the tests."""
    for name in (
        "CAREERS_SECRET_URL",
        "CAREERS_APPLY_URL",
        "CAREERS_REQUEST_TIMEOUT",
        "CAREERS_MAX_ATTEMPTS",
        "CAREERS_MAX_EXTRA_FIELDS",
        "CAREERS_LOG_LEVEL",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_ensure_dotenv", lambda: None)


@pytest.fixture
def make_console() -> Callable[..., ConsoleHarness]:
    """Build a colorless console fed with scripted input lines."""

    def _factory(lines: Optional[List[str]] = None) -> ConsoleHarness:
        script = "".join(f"{line}\n" for line in (lines or []))
        stdout = io.StringIO()
        stderr = io.StringIO()
        console = Console(
            stdin=io.StringIO(script),
            stdout=stdout,
            stderr=stderr,
            use_color=False,
        )
        return ConsoleHarness(console=console, stdout=stdout, stderr=stderr)

    return _factory
