"""Editing verbs applied to the buffer, one per command kind."""

from __future__ import annotations

from rawedit.buffer import Cursor
from rawedit.keymaps import Command
from rawedit.runtime import telemetry
from rawedit.storage import save_path

from .base import ActionContext, ActionResult, Repaint


def insert_char(context: ActionContext, command: Command) -> ActionResult:
    context.buffer.insert_char(command.char, command.count)
    return ActionResult()


def insert_tab(context: ActionContext, command: Command) -> ActionResult:
    del command
    context.buffer.insert_char(" ", context.config.tab_width)
    return ActionResult()


def new_line(context: ActionContext, command: Command) -> ActionResult:
    del command
    context.buffer.split_line_after_cursor()
    return ActionResult(repaint=Repaint.FULL, message="new_line")


def open_line(context: ActionContext, command: Command) -> ActionResult:
    del command
    context.buffer.open_line_below()
    return ActionResult(repaint=Repaint.FULL, message="open_line")


def delete_line(context: ActionContext, command: Command) -> ActionResult:
    del command
    buffer = context.buffer
    if not buffer.delete_current_line():
        return ActionResult(status="noop", message="last_line")
    context.bus.emit("buffer.line_removed", buffer.cursor.line)
    return ActionResult(repaint=Repaint.FULL, message="delete_line")


def backspace(context: ActionContext, command: Command) -> ActionResult:
    del command
    buffer = context.buffer
    if not buffer.backspace():
        return ActionResult(status="noop")
    line = buffer.cursor.line
    return ActionResult(
        repaint=Repaint.ERASE,
        erase_at=Cursor(line, len(buffer.current_line)),
    )


def move(context: ActionContext, command: Command) -> ActionResult:
    context.buffer.move(command.direction)
    repaint = Repaint.FULL if command.direction.is_page else Repaint.DIFF
    return ActionResult(repaint=repaint)


def save(context: ActionContext, command: Command) -> ActionResult:
    del command
    if context.save_path is None:
        telemetry.record_event("buffer.save_skipped", level="warning")
        return ActionResult(status="noop", message="save_skipped")
    try:
        count = save_path(context.buffer, context.save_path)
    except OSError as exc:
        telemetry.record_event(
            "buffer.save_failed",
            level="error",
            data={"path": str(context.save_path), "error": str(exc)},
        )
        return ActionResult(status="error", message=f"save_failed: {exc}")
    context.bus.emit("buffer.saved", {"path": str(context.save_path), "lines": count})
    return ActionResult(message="saved")


def quit_editor(context: ActionContext, command: Command) -> ActionResult:
    del command
    context.buffer.quit()
    context.bus.emit("buffer.quit", None)
    return ActionResult(message="quit")


def ignore(context: ActionContext, command: Command) -> ActionResult:
    del context, command
    return ActionResult(consumed=False, status="noop")


__all__ = [
    "insert_char",
    "insert_tab",
    "new_line",
    "open_line",
    "delete_line",
    "backspace",
    "move",
    "save",
    "quit_editor",
    "ignore",
]
