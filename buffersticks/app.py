"""Interactive terminal picker wiring.

Builds the screen, renderer, previewer, and session controller around a
``BufferList`` and runs one selection session in raw terminal mode.
"""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Callable

from .config import SticksConfig
from .host import BufferList
from .input import read_key
from .render.ansi import AnsiRenderer, strip_ansi
from .render.lines import display_width
from .preview import FilePreviewer
from .session.actions import Action
from .session.controller import SessionController
from .session.loop import run_session
from .terminal import TerminalController

PREVIEW_GAP = 2


class Screen:
    """Composes preview rows (left) and panel rows (right, centred) into frames."""

    def __init__(
        self,
        write: Callable[[list[str]], None],
        size: Callable[[], os.terminal_size] | None = None,
    ) -> None:
        self.write = write
        self._size = size if size is not None else (lambda: shutil.get_terminal_size((80, 24)))
        self.panel_rows: list[str] = []
        self.preview_rows: list[str] = []

    def panel_width(self) -> int:
        return max((display_width(strip_ansi(row)) for row in self.panel_rows), default=0)

    def preview_size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` available to the preview."""
        term = self._size()
        return max(1, term.columns - self.panel_width() - PREVIEW_GAP), max(1, term.lines)

    def set_panel(self, rows: list[str]) -> None:
        self.panel_rows = list(rows)
        self.redraw()

    def set_preview(self, rows: list[str]) -> None:
        self.preview_rows = list(rows)
        self.redraw()

    def compose(self) -> list[str]:
        term = self._size()
        height = max(1, term.lines)
        panel_top = max(0, (height - len(self.panel_rows)) // 2)
        frame: list[str] = []
        for row in range(height):
            left = self.preview_rows[row] if row < len(self.preview_rows) else ""
            if "\x1b" in left:
                left += "\x1b[0m"
            panel_idx = row - panel_top
            right = self.panel_rows[panel_idx] if 0 <= panel_idx < len(self.panel_rows) else ""
            if not right:
                frame.append(left)
                continue
            used = display_width(strip_ansi(left))
            gap = max(0, term.columns - used - display_width(strip_ansi(right)))
            frame.append(left + " " * gap + right)
        return frame

    def redraw(self) -> None:
        self.write(self.compose())


def _is_interactive() -> bool:
    try:
        return os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def run_picker(
    buffers: BufferList,
    config: SticksConfig,
    action: Action,
    *,
    no_color: bool = False,
    style: str | None = None,
) -> None:
    """Run one interactive session over ``buffers`` on the controlling terminal."""
    if not _is_interactive():
        raise SystemExit("buffersticks needs an interactive terminal.")

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    screen = Screen(terminal.write_frame)
    renderer = AnsiRenderer(screen.set_panel, config.highlights, no_color=no_color)

    def preview_size() -> tuple[int, int]:
        columns, rows = screen.preview_size()
        return columns, min(config.preview.max_lines, rows)

    previewer = None
    if config.preview.enabled:
        previewer = FilePreviewer(
            screen.set_preview,
            preview_size,
            style=style or config.preview.style,
            no_color=no_color,
        )
    controller = SessionController(buffers, renderer, buffers, config, previewer=previewer)

    with terminal.raw_mode():
        run_session(controller, lambda: read_key(stdin_fd), action)


__all__ = ["Screen", "run_picker"]
