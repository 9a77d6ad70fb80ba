from __future__ import annotations

import io
import signal
from pathlib import Path
from typing import Iterator

import pytest

from rawedit import cli
from rawedit.config import EditorConfig


class FakeTerminal:
    """Context-managed stand-in for ``RawTerminal`` fed from a key script."""

    instances: list["FakeTerminal"] = []
    script = ""

    def __init__(self) -> None:
        self.stdout = io.StringIO()
        self._keys: Iterator[str] = iter(self.script)
        self.entered = False
        self.exited = False
        FakeTerminal.instances.append(self)

    def __enter__(self) -> "FakeTerminal":
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.exited = True
        return False

    def size(self) -> tuple[int, int]:
        return 40, 12

    def read_key(self) -> str:
        return next(self._keys, "")


@pytest.fixture
def fake_terminal(monkeypatch: pytest.MonkeyPatch) -> type[FakeTerminal]:
    FakeTerminal.instances = []
    FakeTerminal.script = ""
    monkeypatch.setattr(cli, "RawTerminal", FakeTerminal)
    return FakeTerminal


def test_parse_args_defaults() -> None:
    args = cli._parse_args([])

    assert args.path is None
    assert args.tab_width is None
    assert args.page_size is None
    assert args.log_level is None


def test_parse_args_options() -> None:
    args = cli._parse_args(["notes.txt", "--tab-width", "8", "--page-size", "3"])

    assert args.path == Path("notes.txt")
    assert args.tab_width == 8
    assert args.page_size == 3


@pytest.mark.parametrize("value", ["0", "-1", "wide"])
def test_parse_args_rejects_bad_tab_width(value: str) -> None:
    with pytest.raises(SystemExit):
        cli._parse_args(["--tab-width", value])


def test_main_edits_and_saves_file(
    tmp_path: Path, fake_terminal: type[FakeTerminal]
) -> None:
    target = tmp_path / "doc.txt"
    target.write_text("x\n", encoding="utf-8")
    fake_terminal.script = "hiSQ"

    status = cli.main([str(target)])

    assert status == 0
    assert target.read_text(encoding="utf-8") == "hix\n"
    (terminal,) = fake_terminal.instances
    assert terminal.entered and terminal.exited
    assert "\x1b[1;1H" in terminal.stdout.getvalue()


def test_main_creates_file_on_save(
    tmp_path: Path, fake_terminal: type[FakeTerminal]
) -> None:
    target = tmp_path / "new.txt"
    fake_terminal.script = "a\nb\tS"

    assert cli.main([str(target), "--tab-width", "2"]) == 0

    assert target.read_text(encoding="utf-8") == "a\nb  \n"


def test_main_without_path_never_writes(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    fake_terminal: type[FakeTerminal],
) -> None:
    monkeypatch.chdir(tmp_path)
    fake_terminal.script = "abcSQ"

    assert cli.main([]) == 0

    assert list(tmp_path.iterdir()) == []


def test_main_returns_zero_on_interrupt(monkeypatch: pytest.MonkeyPatch) -> None:
    class InterruptingTerminal(FakeTerminal):
        def read_key(self) -> str:
            raise KeyboardInterrupt

    monkeypatch.setattr(cli, "RawTerminal", InterruptingTerminal)

    assert cli.main([]) == 0

    assert InterruptingTerminal.instances[-1].exited


def test_main_restores_sigterm_handler(fake_terminal: type[FakeTerminal]) -> None:
    before = signal.getsignal(signal.SIGTERM)

    cli.main([])

    assert signal.getsignal(signal.SIGTERM) is before


def test_sigterm_handler_exits_cleanly() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli._raise_system_exit(signal.SIGTERM, None)

    assert excinfo.value.code == 0


def test_build_session_sizes_viewport_from_terminal(
    fake_terminal: type[FakeTerminal],
) -> None:
    terminal = FakeTerminal()

    session = cli.build_session(terminal, config=EditorConfig(page_size=4))

    assert session.renderer.width == 39
    assert session.renderer.height == 11
    assert session.buffer.page_size == 4
    assert session.buffer.name == "scratch"


def test_main_applies_log_preset(
    monkeypatch: pytest.MonkeyPatch, fake_terminal: type[FakeTerminal]
) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(cli.telemetry, "configure", lambda **kw: calls.append(kw))

    assert cli.main(["--log-preset", "production", "--log-level", "DEBUG"]) == 0

    assert calls == [{"preset": "production", "level": "DEBUG", "log_file": None}]


def test_unknown_log_preset_flag_is_rejected() -> None:
    with pytest.raises(SystemExit):
        cli._parse_args(["--log-preset", "chatty"])


def test_bad_environment_stops_before_terminal_setup(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    fake_terminal: type[FakeTerminal],
) -> None:
    monkeypatch.setenv("RAWEDIT_LOG_PRESET", "chatty")

    assert cli.main([]) == 2

    assert "chatty" in capsys.readouterr().err
    assert fake_terminal.instances == []
