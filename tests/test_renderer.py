from __future__ import annotations

import io

import pytest

from rawedit.render import Renderer, cursor_position, row_padding

HOME = "\x1b[1;1H"


class RecordingStream(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()

    def take(self) -> str:
        value = self.getvalue()
        self.seek(0)
        self.truncate(0)
        return value


def make_renderer(width: int = 10, height: int = 3) -> tuple[Renderer, RecordingStream]:
    stream = RecordingStream()
    return Renderer(stream, width=width, height=height), stream


@pytest.mark.parametrize(
    ("previous", "current", "expected"),
    [
        (None, "abc", 0),
        ("abcdef", "abc", 3),
        ("abc", "abcdef", 0),
        ("abc", "abc", 0),
        ("abc", "", 3),
    ],
)
def test_row_padding(previous: str | None, current: str, expected: int) -> None:
    assert row_padding(previous, current) == expected


def test_cursor_position_is_one_indexed_and_clamped() -> None:
    assert cursor_position(3, 7) == "\x1b[7;3H"
    assert cursor_position(0, -2) == HOME


def test_first_repaint_writes_rows_without_padding() -> None:
    renderer, stream = make_renderer()

    renderer.repaint(["ab", "c"])

    assert stream.take() == HOME + "ab\r\nc\r\n"
    assert renderer.last_frame == ("ab", "c")


def test_repaint_pads_rows_that_got_shorter() -> None:
    renderer, stream = make_renderer()
    renderer.repaint(["abcdef", "x"])
    stream.take()

    renderer.repaint(["abc", "xyz"])

    assert stream.take() == HOME + "abc   \r\nxyz\r\n"


def test_repaint_caps_rows_at_height() -> None:
    renderer, stream = make_renderer(height=2)

    renderer.repaint(["1", "2", "3", "4"])

    assert stream.take() == HOME + "1\r\n2\r\n"
    assert renderer.last_frame == ("1", "2")


def test_full_clear_blanks_viewport_and_forgets_frame() -> None:
    renderer, stream = make_renderer(width=4, height=2)
    renderer.repaint(["long", "rows"])
    stream.take()

    renderer.full_clear()

    assert stream.take() == HOME + "    \r\n" * 2
    assert renderer.last_frame == ()

    renderer.repaint(["a"])
    assert stream.take() == HOME + "a\r\n"


def test_move_cursor_and_erase_cell() -> None:
    renderer, stream = make_renderer()

    renderer.move_cursor(4, 2)
    renderer.erase_cell(3, 1)

    assert stream.take() == "\x1b[2;4H" + "\x1b[1;3H "


def test_flush_forwards_to_stream() -> None:
    renderer, stream = make_renderer()

    renderer.flush()

    assert stream.flushes == 1


def test_resize_reports_changes() -> None:
    renderer, _ = make_renderer(width=10, height=3)

    assert not renderer.resize(width=10, height=3)
    assert renderer.resize(width=20, height=5)
    assert (renderer.width, renderer.height) == (20, 5)
    assert renderer.resize(width=0, height=0)
    assert (renderer.width, renderer.height) == (1, 1)


def test_repaint_clips_rows_to_width() -> None:
    renderer, stream = make_renderer(width=4, height=3)

    renderer.repaint(["abcdefgh", "xy"])

    assert stream.take() == HOME + "abcd\r\nxy\r\n"
    assert renderer.last_frame == ("abcd", "xy")

    renderer.repaint(["ab", "xy"])

    assert stream.take() == HOME + "ab  \r\nxy\r\n"
