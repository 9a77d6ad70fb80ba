"""Invariant checks shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor


class BufferValidationError(RuntimeError):
    """Raised when a cursor or scroll offset falls outside the document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    line, column = cursor
    if document.line_count < 1:
        raise BufferValidationError("Document has no lines", cursor=cursor)
    if line < 0 or line >= document.line_count:
        raise BufferValidationError("Line out of range", cursor=cursor)
    text = document.get_line(line)
    if column < 0 or column > len(text):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def ensure_scroll(cursor: Cursor, scroll_offset: int, viewport_height: int) -> None:
    if scroll_offset < 0:
        raise BufferValidationError("Negative scroll offset", cursor=cursor)
    if not scroll_offset <= cursor.line < scroll_offset + viewport_height:
        raise BufferValidationError(
            f"Cursor outside viewport [{scroll_offset}, "
            f"{scroll_offset + viewport_height})",
            cursor=cursor,
        )
