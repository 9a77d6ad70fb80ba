"""Scoped raw-mode terminal: one-character reads with guaranteed restore.

Entering the context captures the current termios attributes and turns off
``ECHO`` and ``ICANON`` so reads return after every keystroke. Leaving it
restores the captured attributes on every exit path, including exceptions.
Signal generation (``ISIG``) and output processing stay on, so Ctrl-C still
raises ``KeyboardInterrupt`` and ``\\n`` still returns the carriage.

Both streams use ``surrogateescape`` so bytes that are not valid UTF-8 reach
the screen and the keymap unchanged instead of raising.
"""

from __future__ import annotations

import os
import sys
import termios
from contextlib import AbstractContextManager
from typing import Optional, TextIO

from rawedit.runtime import telemetry

DEFAULT_SIZE = (80, 24)
STREAM_ERRORS = "surrogateescape"


class RawTerminal(AbstractContextManager["RawTerminal"]):
    """Concrete terminal backed by ``sys.stdin``/``sys.stdout``."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.stdin = _tolerant(stdin or sys.stdin)
        self.stdout = _tolerant(stdout or sys.stdout)
        self._original_termios: list | None = None
        self.was_raw = False

    @property
    def active(self) -> bool:
        return self._original_termios is not None

    # -- size ----------------------------------------------------------------

    @property
    def columns(self) -> int:
        return self.size()[0]

    @property
    def rows(self) -> int:
        return self.size()[1]

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``, falling back to 80x24 off a TTY."""

        try:
            size = os.get_terminal_size(self.stdout.fileno())
        except (ValueError, OSError):
            return DEFAULT_SIZE
        return size.columns, size.lines

    # -- enter / exit --------------------------------------------------------

    def __enter__(self) -> "RawTerminal":
        fd = self._stdin_fd()
        if fd is None or not os.isatty(fd):
            telemetry.record_event("terminal.not_a_tty", level="warning")
            return self

        self._original_termios = termios.tcgetattr(fd)
        self.was_raw = is_raw_mode(fd)
        attrs = termios.tcgetattr(fd)
        attrs[3] &= ~(termios.ECHO | termios.ICANON)  # c_lflag
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
        telemetry.record_event(
            "terminal.raw_enabled", data={"fd": fd, "was_raw": self.was_raw}
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False

    def restore(self) -> None:
        if self._original_termios is None:
            return
        fd = self._stdin_fd()
        if fd is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
        self._original_termios = None
        telemetry.record_event("terminal.restored")

    # -- I/O -----------------------------------------------------------------

    def read_key(self) -> str:
        """Block for one character; returns ``""`` at end of input."""

        return self.stdin.read(1)

    def write(self, data: str) -> None:
        self.stdout.write(data)

    def flush(self) -> None:
        self.stdout.flush()

    def _stdin_fd(self) -> int | None:
        try:
            return self.stdin.fileno()
        except (AttributeError, ValueError, OSError):
            return None


def _tolerant(stream: TextIO) -> TextIO:
    """Let undecodable bytes pass through as lone surrogates, like file I/O does."""

    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors=STREAM_ERRORS)
    return stream


def is_raw_mode(fd: int) -> bool:
    """Whether ``fd`` currently has both ICANON and ECHO turned off."""

    try:
        lflag = termios.tcgetattr(fd)[3]
    except termios.error:
        return False
    return not bool(lflag & (termios.ICANON | termios.ECHO))


__all__ = ["RawTerminal", "DEFAULT_SIZE", "STREAM_ERRORS", "is_raw_mode"]
