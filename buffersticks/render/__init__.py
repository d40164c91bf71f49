"""Panel line building and ANSI rendering."""

from __future__ import annotations

from .lines import PanelView, RenderLine, Renderer, Segment, build_lines, display_width, stick_for

__all__ = [
    "PanelView",
    "RenderLine",
    "Renderer",
    "Segment",
    "build_lines",
    "display_width",
    "stick_for",
]
