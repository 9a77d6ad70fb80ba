"""``rawedit [PATH]`` entry point."""

from __future__ import annotations

import argparse
import signal
import sys
from pathlib import Path
from typing import Optional, Sequence

from rawedit.buffer import Buffer
from rawedit.config import EditorConfig
from rawedit.render import Renderer
from rawedit.runtime import telemetry
from rawedit.session import EditorSession
from rawedit.storage import load_path
from rawedit.terminal import RawTerminal


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rawedit",
        description="Minimal full-screen terminal text editor.",
        epilog=(
            "keys: B/F/N/P move, A/E line start/end, V/C page, K delete line, "
            "O open line, S save, Q quit"
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="File to edit; loaded at startup and used as the save target",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="telelog minimum level (default: $RAWEDIT_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default=None,
        help="Named telelog setup (default: $RAWEDIT_LOG_PRESET)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write structured logs here (default: $RAWEDIT_LOG_FILE)",
    )
    parser.add_argument(
        "--tab-width",
        type=_positive_int,
        default=None,
        help="Spaces inserted for TAB (default: 4)",
    )
    parser.add_argument(
        "--page-size",
        type=_positive_int,
        default=None,
        help="Lines moved by V/C (default: 10)",
    )
    return parser.parse_args(argv)


def _raise_system_exit(signum: int, frame: object) -> None:
    del signum, frame
    raise SystemExit(0)


def build_session(
    terminal: RawTerminal,
    *,
    config: EditorConfig,
    path: Optional[Path] = None,
) -> EditorSession:
    buffer = Buffer(name=str(path) if path else "scratch")
    if path is not None:
        load_path(buffer, path)
    buffer.state.reset()
    columns, rows = terminal.size()
    renderer = Renderer(
        terminal.stdout,
        width=config.viewport_width(columns),
        height=config.viewport_height(rows),
        logger_name="rawedit.render",
    )
    return EditorSession(buffer, renderer, config=config, save_path=path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        telemetry.configure(
            preset=args.log_preset, level=args.log_level, log_file=args.log_file
        )
        config = EditorConfig.from_env().with_overrides(
            tab_width=args.tab_width, page_size=args.page_size
        )
    except ValueError as exc:
        print(f"rawedit: {exc}", file=sys.stderr)
        return 2

    previous_sigterm = signal.signal(signal.SIGTERM, _raise_system_exit)
    try:
        with RawTerminal() as terminal:
            session = build_session(terminal, config=config, path=args.path)
            session.run(terminal.read_key, terminal.size)
    except KeyboardInterrupt:
        telemetry.record_event("session.interrupted", level="warning")
    finally:
        signal.signal(signal.SIGTERM, previous_sigterm)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry
    raise SystemExit(main())
