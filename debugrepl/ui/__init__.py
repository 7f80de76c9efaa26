"""UI components for debugrepl."""

from .console import console, render_entry, render_text

__all__ = [
    "console",
    "render_entry",
    "render_text",
]
