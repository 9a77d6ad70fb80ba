"""Editing verbs and the command -> handler dispatch table."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from rawedit.keymaps import Command, CommandKind

from . import core
from .base import ActionContext, ActionResult, EventBus, Repaint

Handler = Callable[[ActionContext, Command], ActionResult]

HANDLERS: Mapping[CommandKind, Handler] = MappingProxyType(
    {
        CommandKind.INSERT_CHAR: core.insert_char,
        CommandKind.TAB: core.insert_tab,
        CommandKind.NEW_LINE: core.new_line,
        CommandKind.OPEN_LINE: core.open_line,
        CommandKind.DELETE_LINE: core.delete_line,
        CommandKind.BACKSPACE: core.backspace,
        CommandKind.MOVE: core.move,
        CommandKind.SAVE: core.save,
        CommandKind.QUIT: core.quit_editor,
        CommandKind.IGNORE: core.ignore,
    }
)


def execute(context: ActionContext, command: Command) -> ActionResult:
    return HANDLERS[command.kind](context, command)


__all__ = [
    "ActionContext",
    "ActionResult",
    "EventBus",
    "HANDLERS",
    "Handler",
    "Repaint",
    "execute",
]
