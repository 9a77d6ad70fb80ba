"""High-level buffer façade combining document storage and cursor state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, List, Optional, Protocol, Sequence

from rawedit.config import DEFAULT_PAGE_SIZE
from rawedit.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor, Direction
from .validation import ensure_cursor, ensure_scroll


class TextSink(Protocol):
    def write(self, text: str) -> object: ...


@dataclass(frozen=True, slots=True)
class BufferView:
    """Immutable snapshot handed to hosts and tests."""

    version: int
    lines: tuple[str, ...]
    cursor: Cursor
    scroll_offset: int
    dirty: bool


class Buffer:
    """Ordered lines plus a clamped (line, column) cursor and scroll offset.

    Index arithmetic saturates at the document bounds instead of raising, so
    every keystroke-driven call is safe from any valid state.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.page_size = page_size

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_lines(lines))

    # -- read access ---------------------------------------------------------

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def scroll_offset(self) -> int:
        return self.state.scroll_offset

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def current_line(self) -> str:
        return self.document.get_line(self.state.cursor.line)

    def visible_lines(self, viewport_height: int) -> List[str]:
        offset = self.state.scroll_offset
        return self.document.slice(offset, offset + max(1, viewport_height))

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            lines=tuple(self.document.snapshot()),
            cursor=self.state.cursor,
            scroll_offset=self.state.scroll_offset,
            dirty=self.document.dirty,
        )

    # -- editing -------------------------------------------------------------

    def insert_char(self, char: str, count: int = 1) -> None:
        """Insert ``char`` ``count`` times at the cursor and advance past it."""

        if count < 1 or not char:
            return
        line, column = self.state.cursor
        with Transaction(self, "insert_char"):
            text = self.document.get_line(line)
            inserted = char * count
            self.document.set_line(line, text[:column] + inserted + text[column:])
            self.state.set_cursor(line, column + len(inserted))

    def split_line_after_cursor(self) -> None:
        """Open an empty line below the cursor line and move onto it.

        The cursor line keeps all of its text; nothing after the cursor
        column is carried down.
        """

        with Transaction(self, "split_line"):
            target = self.state.cursor.line + 1
            self.document.insert_line(target, "")
            self.state.set_cursor(target, 0)

    def open_line_below(self) -> None:
        """Insert a blank line at the cursor index, pushing the current line down."""

        with Transaction(self, "open_line"):
            line = self.state.cursor.line
            self.document.insert_line(line, "")
            self.state.set_cursor(line, 0)

    def delete_current_line(self) -> bool:
        """Remove the cursor line unless it is the only one left."""

        if self.document.line_count == 1:
            return False
        with Transaction(self, "delete_line"):
            line = self.state.cursor.line
            self.document.remove_line(line)
            if line >= self.document.line_count:
                line -= 1
            self.state.set_cursor(line, 0)
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor; a no-op at column zero."""

        line, column = self.state.cursor
        if column == 0:
            return False
        with Transaction(self, "backspace"):
            text = self.document.get_line(line)
            self.document.set_line(line, text[: column - 1] + text[column:])
            self.state.set_cursor(line, column - 1)
        return True

    # -- navigation ----------------------------------------------------------

    def move(self, direction: Direction) -> None:
        line, column = self.state.cursor
        last_line = self.document.line_count - 1

        if direction is Direction.QUIT:
            self.quit()
            return
        if direction is Direction.BACK:
            column = max(0, column - 1)
        elif direction is Direction.FORWARD:
            column = min(len(self.document.get_line(line)), column + 1)
        elif direction is Direction.LINE_START:
            column = 0
        elif direction is Direction.LINE_END:
            column = len(self.document.get_line(line))
        else:
            step = self.page_size if direction.is_page else 1
            if direction in (Direction.UP, Direction.PAGE_UP):
                step = -step
            line = min(last_line, max(0, line + step))
            column = min(len(self.document.get_line(line)), column)

        self.state.set_cursor(line, column)

    def quit(self) -> None:
        self.state.running = False

    def adjust_scroll(self, viewport_height: int) -> bool:
        """Scroll so the cursor line is visible; return whether the offset moved."""

        height = max(1, viewport_height)
        line = self.state.cursor.line
        previous = self.state.scroll_offset

        if line + 1 - previous > height:
            self.state.scroll_offset = line + 1 - height
        elif line - previous < 0:
            self.state.scroll_offset = line

        return self.state.scroll_offset != previous

    # -- persistence ---------------------------------------------------------

    def load(self, source: Iterable[str]) -> None:
        """Replace every line with ``source``'s lines, terminators stripped.

        Cursor and scroll offset are left alone; callers reset them before
        the first repaint.
        """

        with telemetry.span(
            "buffer::load", component="buffer", metadata={"buffer": self.name}
        ) as handle:
            self.document.replace(_strip_terminator(line) for line in source)
            handle.add_metadata("lines", self.document.line_count)

    def save(self, sink: TextSink) -> None:
        """Write every line followed by a newline, in document order."""

        with telemetry.span(
            "buffer::save", component="buffer", metadata={"buffer": self.name}
        ) as handle:
            for line in self.document.snapshot():
                sink.write(f"{line}\n")
            self.document.dirty = False
            handle.add_metadata("lines", self.document.line_count)

    # -- invariants ----------------------------------------------------------

    def check_invariants(self, viewport_height: Optional[int] = None) -> None:
        cursor = ensure_cursor(self.document, self.state.cursor)
        if viewport_height is not None:
            ensure_scroll(cursor, self.state.scroll_offset, viewport_height)


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single buffer mutation in a telemetry span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name, "line": self.buffer.cursor.line},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line
