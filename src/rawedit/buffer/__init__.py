"""Buffer abstractions: line storage, cursor state, and invariant checks."""

from .buffer import Buffer, BufferView, TextSink, Transaction
from .document import BufferDocument
from .state import BufferState, Cursor, Direction
from .validation import BufferValidationError, ensure_cursor, ensure_scroll

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "Cursor",
    "Direction",
    "TextSink",
    "Transaction",
    "ensure_cursor",
    "ensure_scroll",
]
