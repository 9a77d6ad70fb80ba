from __future__ import annotations

import pytest

from rawedit.buffer import Direction
from rawedit.keymaps import (
    ActionRef,
    Binding,
    Command,
    CommandKind,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    default_resolver,
)


def make_resolver() -> KeymapResolver:
    return default_resolver()


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("\n", Command(CommandKind.NEW_LINE)),
        ("\r", Command(CommandKind.NEW_LINE)),
        ("\b", Command(CommandKind.BACKSPACE)),
        ("\x7f", Command(CommandKind.BACKSPACE)),
        ("\t", Command(CommandKind.TAB)),
        ("K", Command(CommandKind.DELETE_LINE)),
        ("O", Command(CommandKind.OPEN_LINE)),
        ("S", Command(CommandKind.SAVE)),
        ("Q", Command(CommandKind.QUIT)),
        ("B", Command.move(Direction.BACK)),
        ("F", Command.move(Direction.FORWARD)),
        ("N", Command.move(Direction.DOWN)),
        ("P", Command.move(Direction.UP)),
        ("A", Command.move(Direction.LINE_START)),
        ("E", Command.move(Direction.LINE_END)),
        ("V", Command.move(Direction.PAGE_DOWN)),
        ("C", Command.move(Direction.PAGE_UP)),
    ],
)
def test_decode_protocol_table(key: str, expected: Command) -> None:
    assert make_resolver().decode(key) == expected


@pytest.mark.parametrize("key", ["a", "z", "b", "1", " ", "~", "é", "D", "G"])
def test_decode_unbound_printable_inserts(key: str) -> None:
    assert make_resolver().decode(key) == Command.insert(key)


@pytest.mark.parametrize("key", ["\x00", "\x01", "\x1b", "\x03"])
def test_decode_unbound_control_is_ignored(key: str) -> None:
    assert make_resolver().decode(key).kind is CommandKind.IGNORE


def test_resolve_reports_match_and_miss() -> None:
    resolver = make_resolver()

    hit = resolver.resolve("K")
    miss = resolver.resolve("x")

    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == "key.K"
    assert hit.match.action.id == "edit.delete_line"
    assert miss.status == "miss"
    assert miss.match is None


def test_resolver_sees_registry_changes() -> None:
    registry = KeymapRegistry()
    registry.register_action(ActionRef(id="session.quit", kind=CommandKind.QUIT))
    resolver = KeymapResolver(registry)

    assert resolver.decode("x") == Command.insert("x")

    registry.register_binding(Binding.for_token("key.x", "x", "session.quit"))

    assert resolver.decode("x") == Command(CommandKind.QUIT)

    registry.unregister_binding("key.x")

    assert resolver.decode("x") == Command.insert("x")


def test_keystroke_tokens_round_trip() -> None:
    for token in ("LF", "CR", "TAB", "BS", "DEL", "ESC", "SPACE", "^A", "K", "^"):
        assert KeyStroke.from_token(token).token == token


def test_keystroke_rejects_multiple_characters() -> None:
    with pytest.raises(ValueError):
        KeyStroke("ab")
    with pytest.raises(ValueError):
        KeyStroke("")


def test_command_validation() -> None:
    with pytest.raises(ValueError):
        Command(CommandKind.MOVE)
    with pytest.raises(ValueError):
        Command(CommandKind.INSERT_CHAR)
    with pytest.raises(ValueError):
        Command.insert(" ", count=0)
