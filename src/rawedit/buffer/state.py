"""Cursor, scroll, and run-state tracking for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Cursor(NamedTuple):
    """(line, column) position; column may equal the line length."""

    line: int
    column: int


class Direction(str, Enum):
    """Cursor motions understood by ``Buffer.move``."""

    BACK = "back"
    FORWARD = "forward"
    DOWN = "down"
    UP = "up"
    LINE_START = "line_start"
    LINE_END = "line_end"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    QUIT = "quit"

    @property
    def is_page(self) -> bool:
        return self in (Direction.PAGE_DOWN, Direction.PAGE_UP)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor, scroll offset and run flag for one buffer."""

    cursor: Cursor = Cursor(0, 0)
    scroll_offset: int = 0
    running: bool = True

    def set_cursor(self, line: int, column: int) -> None:
        self.cursor = Cursor(line, column)

    def reset(self) -> None:
        self.cursor = Cursor(0, 0)
        self.scroll_offset = 0
