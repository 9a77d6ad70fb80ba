"""Shared types for editing actions: context, results, and the event bus."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from rawedit.buffer import Buffer, Cursor
from rawedit.config import EditorConfig


class Repaint(str, Enum):
    """How much of the viewport a keystroke invalidates."""

    DIFF = "diff"
    ERASE = "erase"
    FULL = "full"

    def escalate(self, other: "Repaint") -> "Repaint":
        return max(self, other, key=_REPAINT_ORDER.index)


_REPAINT_ORDER = [Repaint.DIFF, Repaint.ERASE, Repaint.FULL]


@dataclass(slots=True)
class ActionResult:
    """Result returned from every action handler."""

    consumed: bool = True
    repaint: Repaint = Repaint.DIFF
    status: str = "ok"
    message: Optional[str] = None
    erase_at: Optional[Cursor] = None


class EventBus:
    """Minimal event bus letting actions announce side effects to hosts."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """Services every action can access."""

    buffer: Buffer
    config: EditorConfig = field(default_factory=EditorConfig)
    bus: EventBus = field(default_factory=EventBus)
    save_path: Optional[Path] = None
