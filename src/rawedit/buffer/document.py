"""Line storage for rawedit buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Mutable list-of-lines storage that is never empty.

    Every mutation bumps ``version`` and marks the document dirty; callers
    that persist the document clear ``dirty`` themselves.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        return cls(_lines=list(lines))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def slice(self, start: int, stop: int) -> List[str]:
        return self._lines[start:stop]

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self._touch()

    def insert_line(self, index: int, text: str = "") -> None:
        self._lines.insert(index, text)
        self._touch()

    def remove_line(self, index: int) -> str:
        if len(self._lines) == 1:
            raise IndexError("cannot remove the only line of a document")
        removed = self._lines.pop(index)
        self._touch()
        return removed

    def replace(self, lines: Iterable[str], *, dirty: bool = False) -> None:
        """Swap in ``lines`` wholesale; an empty iterable leaves one blank line."""

        self._lines = list(lines) or [""]
        self.version += 1
        self.dirty = dirty

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
