"""Dataclasses describing the key protocol, bindings, and decoded commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from rawedit.buffer import Direction

_CONTROL_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "\n": "LF",
        "\r": "CR",
        "\t": "TAB",
        "\b": "BS",
        "\x7f": "DEL",
        "\x1b": "ESC",
        " ": "SPACE",
    }
)
_NAMED_KEYS: Mapping[str, str] = MappingProxyType(
    {name: key for key, name in _CONTROL_NAMES.items()}
)


class CommandKind(str, Enum):
    NEW_LINE = "new_line"
    OPEN_LINE = "open_line"
    BACKSPACE = "backspace"
    TAB = "tab"
    DELETE_LINE = "delete_line"
    SAVE = "save"
    MOVE = "move"
    QUIT = "quit"
    INSERT_CHAR = "insert_char"
    IGNORE = "ignore"


@dataclass(frozen=True, slots=True)
class Command:
    """Decoded keystroke; ``direction`` is set for MOVE, ``char`` for INSERT_CHAR."""

    kind: CommandKind
    direction: Optional[Direction] = None
    char: Optional[str] = None
    count: int = 1

    def __post_init__(self) -> None:
        if self.kind is CommandKind.MOVE and self.direction is None:
            raise ValueError("MOVE commands require a direction")
        if self.kind is CommandKind.INSERT_CHAR and not self.char:
            raise ValueError("INSERT_CHAR commands require a character")
        if self.count < 1:
            raise ValueError("count must be positive")

    @classmethod
    def insert(cls, char: str, count: int = 1) -> "Command":
        return cls(CommandKind.INSERT_CHAR, char=char, count=count)

    @classmethod
    def move(cls, direction: Direction) -> "Command":
        return cls(CommandKind.MOVE, direction=direction)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single input character read from the terminal."""

    key: str

    def __post_init__(self) -> None:
        if len(self.key) != 1:
            raise ValueError(f"KeyStroke expects one character, got {self.key!r}")

    @classmethod
    def from_token(cls, token: str) -> "KeyStroke":
        """Build a stroke from a printable name (``"LF"``, ``"DEL"``) or a character."""

        if token in _NAMED_KEYS:
            return cls(_NAMED_KEYS[token])
        if token.startswith("^") and len(token) == 2:
            return cls(chr(ord(token[1]) - 64))
        return cls(token)

    @property
    def token(self) -> str:
        named = _CONTROL_NAMES.get(self.key)
        if named:
            return named
        code = ord(self.key)
        if code < 0x20:
            return f"^{chr(code + 64)}"
        return self.key

    @property
    def is_printable(self) -> bool:
        return self.key.isprintable()


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Command template a binding resolves to."""

    id: str
    kind: CommandKind
    direction: Optional[Direction] = None
    telemetry_name: str | None = None
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if self.kind is CommandKind.INSERT_CHAR:
            raise ValueError("literal insertion is the resolver fallback, not an action")
        if (self.kind is CommandKind.MOVE) != (self.direction is not None):
            raise ValueError("direction must be set exactly for MOVE actions")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def command(self) -> Command:
        return Command(self.kind, direction=self.direction)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates one key with an action."""

    id: str
    key: KeyStroke
    action_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @classmethod
    def for_token(
        cls,
        binding_id: str,
        token: str,
        action_id: str,
        *,
        description: str = "",
        source: str | None = None,
    ) -> "Binding":
        return cls(
            id=binding_id,
            key=KeyStroke.from_token(token),
            action_id=action_id,
            description=description,
            source=source,
        )

    @property
    def key_signature(self) -> str:
        return self.key.token


__all__ = [
    "ActionRef",
    "Binding",
    "Command",
    "CommandKind",
    "KeyStroke",
]
