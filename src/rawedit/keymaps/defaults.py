"""Built-in actions and the single-byte key table."""

from __future__ import annotations

from typing import Iterable, Sequence

from rawedit.buffer import Direction

from .models import ActionRef, Binding, CommandKind
from .registry import KeymapRegistry


def _move(action_id: str, direction: Direction, description: str) -> ActionRef:
    return ActionRef(
        id=action_id,
        kind=CommandKind.MOVE,
        direction=direction,
        description=description,
    )


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="edit.new_line",
        kind=CommandKind.NEW_LINE,
        description="Open a line below and move to it",
    ),
    ActionRef(
        id="edit.open_line",
        kind=CommandKind.OPEN_LINE,
        description="Insert a blank line at the cursor",
    ),
    ActionRef(
        id="edit.backspace",
        kind=CommandKind.BACKSPACE,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.tab",
        kind=CommandKind.TAB,
        description="Insert a fixed run of spaces",
    ),
    ActionRef(
        id="edit.delete_line",
        kind=CommandKind.DELETE_LINE,
        description="Delete the cursor line",
    ),
    ActionRef(
        id="file.save",
        kind=CommandKind.SAVE,
        description="Write the buffer to its file",
    ),
    ActionRef(
        id="session.quit",
        kind=CommandKind.QUIT,
        description="Leave the editor",
    ),
    _move("move.back", Direction.BACK, "Cursor left"),
    _move("move.forward", Direction.FORWARD, "Cursor right"),
    _move("move.down", Direction.DOWN, "Cursor down"),
    _move("move.up", Direction.UP, "Cursor up"),
    _move("move.line_start", Direction.LINE_START, "Start of line"),
    _move("move.line_end", Direction.LINE_END, "End of line"),
    _move("move.page_down", Direction.PAGE_DOWN, "Page down"),
    _move("move.page_up", Direction.PAGE_UP, "Page up"),
)

# token -> action id; tokens are KeyStroke names or literal characters
DEFAULT_KEYS: tuple[tuple[str, str], ...] = (
    ("LF", "edit.new_line"),
    ("CR", "edit.new_line"),
    ("BS", "edit.backspace"),
    ("DEL", "edit.backspace"),
    ("TAB", "edit.tab"),
    ("K", "edit.delete_line"),
    ("O", "edit.open_line"),
    ("S", "file.save"),
    ("B", "move.back"),
    ("F", "move.forward"),
    ("N", "move.down"),
    ("P", "move.up"),
    ("A", "move.line_start"),
    ("E", "move.line_end"),
    ("V", "move.page_down"),
    ("C", "move.page_up"),
    ("Q", "session.quit"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding.for_token(f"key.{token}", token, action_id, source="default")
    for token, action_id in DEFAULT_KEYS
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and key table.

    ``include_bindings``/``exclude_bindings`` filter by binding id
    (``"key.S"``, ``"key.CR"``); excluded keys fall back to literal insertion.
    Extra bindings are applied last and always replace defaults on the same key.
    """

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "DEFAULT_KEYS"]
