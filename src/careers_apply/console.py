"""Terminal input and colored output for the interactive workflow."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ANSI_RED = "\033[31m"
ANSI_GREEN = "\033[32m"
ANSI_YELLOW = "\033[33m"
ANSI_CYAN = "\033[36m"
ANSI_RESET = "\033[0m"

logger = logging.getLogger(__name__)


class Console:
    """Reads one line per prompt and renders status messages."""

    def __init__(
        self,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        use_color: bool = True,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._stderr = stderr if stderr is not None else sys.stderr
        self._use_color = use_color

    def _paint(self, color: str, text: str) -> str:
        if not self._use_color:
            return text
        return f"{color}{text}{ANSI_RESET}"

    def ask(self, prompt: str) -> str:
        """Show ``prompt`` and return the next line with whitespace trimmed.

        End of input and undecodable bytes are treated as an empty answer so
        the caller's retry budget decides what happens next.
        """

        self._stdout.write(self._paint(ANSI_YELLOW, prompt))
        self._stdout.flush()
        try:
            line = self._stdin.readline()
        except UnicodeDecodeError as exc:
            logger.debug("Discarding undecodable input: %s", exc)
            return ""
        return line.strip()

    def plain(self, text: str) -> None:
        print(text, file=self._stdout)

    def blank(self) -> None:
        print(file=self._stdout)

    def info(self, text: str) -> None:
        print(self._paint(ANSI_CYAN, text), file=self._stdout)

    def notice(self, text: str) -> None:
        print(self._paint(ANSI_YELLOW, text), file=self._stdout)

    def success(self, text: str) -> None:
        print(self._paint(ANSI_GREEN, text), file=self._stdout)

    def warning(self, text: str) -> None:
        """Retry hints stay on stdout next to the prompt they refer to."""
        print(self._paint(ANSI_RED, text), file=self._stdout)

    def error(self, text: str) -> None:
        print(self._paint(ANSI_RED, text), file=self._stderr)
