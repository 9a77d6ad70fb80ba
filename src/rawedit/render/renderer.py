"""Incremental viewport renderer with a back-buffer of the last drawn frame.

``repaint`` rewrites every visible row from the top, padding a row with
spaces only when the text previously drawn there was longer. Rows that the
previous frame had beyond the new row count are left alone, so structural
changes (scroll, inserted or removed lines) must go through ``full_clear``
first. Always calling ``full_clear`` before ``repaint`` is correct too, just
noisier on large viewports.

Rows are cut to ``width`` before they are drawn so a long line never wraps
onto the next terminal row; there is no horizontal scrolling.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from rawedit.runtime import telemetry

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CURSOR_POSITION_FMT = "\x1b[{row};{col}H"
_ROW_END = "\r\n"


class OutputStream(Protocol):
    def write(self, data: str) -> object: ...

    def flush(self) -> None: ...


def cursor_position(col: int, row: int) -> str:
    """Escape sequence for an absolute, 1-indexed cursor move."""

    return _CURSOR_POSITION_FMT.format(row=max(1, row), col=max(1, col))


def row_padding(previous: Optional[str], current: str) -> int:
    """Spaces needed after ``current`` to cover what ``previous`` left on the row."""

    if previous is None:
        return 0
    return max(0, len(previous) - len(current))


class Renderer:
    """Writes buffer slices to a terminal stream and remembers what it drew."""

    def __init__(
        self,
        stream: OutputStream,
        *,
        width: int,
        height: int,
        logger_name: str | None = None,
    ) -> None:
        self._stream = stream
        self.width = max(1, width)
        self.height = max(1, height)
        self._logger_name = logger_name
        self._last_frame: List[str] = []

    @property
    def last_frame(self) -> tuple[str, ...]:
        return tuple(self._last_frame)

    def resize(self, *, width: int, height: int) -> bool:
        """Adopt a new viewport size; returns whether it changed."""

        width, height = max(1, width), max(1, height)
        changed = (width, height) != (self.width, self.height)
        self.width, self.height = width, height
        return changed

    def repaint(self, visible_lines: Sequence[str]) -> None:
        rows = [line[: self.width] for line in visible_lines[: self.height]]
        with telemetry.span(
            "render::repaint",
            logger_name=self._logger_name,
            component="render",
            metadata={"rows": len(rows), "previous_rows": len(self._last_frame)},
        ):
            out = [cursor_position(1, 1)]
            for index, line in enumerate(rows):
                previous = (
                    self._last_frame[index] if index < len(self._last_frame) else None
                )
                out.append(line)
                out.append(" " * row_padding(previous, line))
                out.append(_ROW_END)
            self._stream.write("".join(out))
            self._last_frame = rows

    def full_clear(self) -> None:
        with telemetry.span(
            "render::full_clear",
            logger_name=self._logger_name,
            component="render",
            metadata={"width": self.width, "height": self.height},
        ):
            blank = " " * self.width + _ROW_END
            self._stream.write(cursor_position(1, 1) + blank * self.height)
            self._last_frame = []

    def move_cursor(self, col: int, row: int) -> None:
        self._stream.write(cursor_position(col, row))

    def erase_cell(self, col: int, row: int) -> None:
        self._stream.write(cursor_position(col, row) + " ")

    def flush(self) -> None:
        self._stream.flush()


__all__ = ["OutputStream", "Renderer", "cursor_position", "row_padding"]
