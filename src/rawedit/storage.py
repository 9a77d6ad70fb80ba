"""Path-based load/save wrappers around ``Buffer.load`` and ``Buffer.save``."""

from __future__ import annotations

import os
from pathlib import Path

from rawedit.buffer import Buffer
from rawedit.runtime import telemetry

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def load_path(buffer: Buffer, path: str | os.PathLike[str]) -> bool:
    """Load ``path`` into ``buffer``; a missing file leaves one empty line.

    Returns whether the file existed.
    """

    target = Path(path)
    try:
        with target.open("r", encoding=ENCODING, errors=ERRORS) as handle:
            buffer.load(handle)
    except FileNotFoundError:
        buffer.load(())
        telemetry.record_event("buffer.load_missing", data={"path": str(target)})
        return False
    telemetry.record_event(
        "buffer.loaded",
        data={"path": str(target), "lines": buffer.document.line_count},
    )
    return True


def save_path(buffer: Buffer, path: str | os.PathLike[str]) -> int:
    """Write ``buffer`` to ``path`` and return the number of lines written."""

    target = Path(path)
    with target.open("w", encoding=ENCODING, errors=ERRORS, newline="\n") as handle:
        buffer.save(handle)
    count = buffer.document.line_count
    telemetry.record_event("buffer.saved", data={"path": str(target), "lines": count})
    return count


__all__ = ["load_path", "save_path"]
