"""Terminal rendering: escape output and back-buffer diffing."""

from .renderer import OutputStream, Renderer, cursor_position, row_padding

__all__ = ["OutputStream", "Renderer", "cursor_position", "row_padding"]
