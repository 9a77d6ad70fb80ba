"""Editor configuration and key protocol constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "RAWEDIT_"

DEFAULT_TAB_WIDTH = 4
DEFAULT_PAGE_SIZE = 10


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = _env(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables shared by the session, actions, and renderer.

    ``reserved_rows`` and ``reserved_columns`` are subtracted from the
    terminal size: the bottom row is kept free so the terminal does not
    scroll when the last visible line ends with a newline.
    """

    tab_width: int = DEFAULT_TAB_WIDTH
    page_size: int = DEFAULT_PAGE_SIZE
    reserved_rows: int = 1
    reserved_columns: int = 1
    debug: bool = False

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be positive")
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        if self.reserved_rows < 0 or self.reserved_columns < 0:
            raise ValueError("reserved rows/columns cannot be negative")

    @classmethod
    def from_env(cls) -> "EditorConfig":
        return cls(
            tab_width=_env_int("TAB_WIDTH", DEFAULT_TAB_WIDTH, minimum=1),
            page_size=_env_int("PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
            reserved_rows=_env_int("RESERVED_ROWS", 1),
            reserved_columns=_env_int("RESERVED_COLUMNS", 1),
            debug=_env_flag("DEBUG", False),
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        """Return a copy with every non-``None`` override applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        if not applied:
            return self
        return replace(self, **applied)

    def viewport_height(self, terminal_rows: int) -> int:
        return max(1, terminal_rows - self.reserved_rows)

    def viewport_width(self, terminal_columns: int) -> int:
        return max(1, terminal_columns - self.reserved_columns)


__all__ = ["EditorConfig", "DEFAULT_TAB_WIDTH", "DEFAULT_PAGE_SIZE"]
