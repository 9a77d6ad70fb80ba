"""OS-facing terminal wrappers."""

from .raw import DEFAULT_SIZE, RawTerminal, is_raw_mode

__all__ = ["DEFAULT_SIZE", "RawTerminal", "is_raw_mode"]
