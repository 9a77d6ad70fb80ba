"""Keystroke loop coordinating the buffer, actions, and renderer."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from rawedit.actions import ActionContext, ActionResult, EventBus, Repaint, execute
from rawedit.buffer import Buffer
from rawedit.config import EditorConfig
from rawedit.keymaps import KeymapResolver, KeyStroke, default_resolver
from rawedit.render import Renderer
from rawedit.runtime import telemetry


class EditorSession:
    """Owns one buffer/renderer pair and applies keystrokes to them.

    Per keystroke: decode, execute, ``adjust_scroll``, then repaint with the
    strategy the action asked for, escalated to a full clear whenever the
    scroll offset moved.
    """

    def __init__(
        self,
        buffer: Buffer,
        renderer: Renderer,
        *,
        config: Optional[EditorConfig] = None,
        resolver: Optional[KeymapResolver] = None,
        save_path: Optional[Path] = None,
        bus: Optional[EventBus] = None,
        logger_name: str = "rawedit.session",
    ) -> None:
        self.config = config or EditorConfig()
        buffer.page_size = self.config.page_size
        self.buffer = buffer
        self.renderer = renderer
        self.resolver = resolver or default_resolver(logger_name="rawedit.keymaps")
        self.context = ActionContext(
            buffer=buffer,
            config=self.config,
            bus=bus or EventBus(),
            save_path=save_path,
        )
        self._logger_name = logger_name
        self._needs_full = False

    @property
    def running(self) -> bool:
        return self.buffer.running

    @property
    def viewport_height(self) -> int:
        return self.renderer.height

    def start(self) -> None:
        """Draw the first frame from a blank screen."""

        self.buffer.adjust_scroll(self.viewport_height)
        self._render(ActionResult(repaint=Repaint.FULL))
        telemetry.record_event(
            "session.start",
            data={"buffer": self.buffer.name, "lines": self.buffer.document.line_count},
        )

    def resize(self, columns: int, rows: int) -> bool:
        changed = self.renderer.resize(
            width=self.config.viewport_width(columns),
            height=self.config.viewport_height(rows),
        )
        if changed:
            self._needs_full = True
        return changed

    def handle_key(self, key: str | KeyStroke) -> ActionResult:
        stroke = key if isinstance(key, KeyStroke) else KeyStroke(key)
        with telemetry.span(
            "session::key",
            logger_name=self._logger_name,
            component="session",
            metadata={"key": stroke.token},
        ) as handle:
            command = self.resolver.decode(stroke)
            result = execute(self.context, command)
            if self.buffer.adjust_scroll(self.viewport_height):
                result.repaint = result.repaint.escalate(Repaint.FULL)
            if self._needs_full:
                result.repaint = Repaint.FULL
                self._needs_full = False
            if self.config.debug:
                self.buffer.check_invariants(self.viewport_height)
            self._render(result)
            handle.add_metadata("command", command.kind.value)
            handle.add_metadata("repaint", result.repaint.value)
            handle.add_metadata("status", result.status)
        return result

    def run(
        self,
        read_key: Callable[[], str],
        size: Optional[Callable[[], tuple[int, int]]] = None,
    ) -> None:
        """Block on ``read_key`` until quit or end of input."""

        if size is not None:
            self.resize(*size())
        self.start()
        while self.running:
            key = read_key()
            if not key:
                telemetry.record_event("session.eof")
                break
            if size is not None:
                self.resize(*size())
            self.handle_key(key)
        telemetry.record_event(
            "session.stop",
            data={"dirty": self.buffer.document.dirty},
        )

    def place_cursor(self) -> None:
        line, column = self.buffer.cursor
        self.renderer.move_cursor(column + 1, line - self.buffer.scroll_offset + 1)

    def _render(self, result: ActionResult) -> None:
        renderer = self.renderer
        if result.repaint is Repaint.FULL:
            renderer.full_clear()
        elif result.repaint is Repaint.ERASE and result.erase_at is not None:
            line, column = result.erase_at
            renderer.erase_cell(column + 1, line - self.buffer.scroll_offset + 1)
        renderer.repaint(self.buffer.visible_lines(self.viewport_height))
        self.place_cursor()
        renderer.flush()


__all__ = ["EditorSession"]
