"""Minimal full-screen terminal text editor."""

__all__ = [
    "actions",
    "buffer",
    "cli",
    "config",
    "keymaps",
    "render",
    "runtime",
    "session",
    "storage",
    "terminal",
]

__version__ = "0.1.0"
