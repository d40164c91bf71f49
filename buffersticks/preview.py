"""File preview for the terminal picker.

Loads the highlighted file, neutralizes terminal control bytes, and
syntax-highlights the head of it with Pygments.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .items import LabeledItem

logger = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
FALLBACK_STYLE = "monokai"
TAB_WIDTH = 4


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    resolved = style
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.warning("unknown pygments style %r, using %s", style, FALLBACK_STYLE)
        resolved = FALLBACK_STYLE
    formatter = Terminal256Formatter(style=resolved)
    _FORMATTERS[style] = formatter
    return formatter


def head_lines(source: str, max_lines: int, max_cols: int) -> str:
    """First ``max_lines`` lines, tabs expanded, each clipped to ``max_cols``."""
    rows = source.splitlines()[: max(0, max_lines)]
    return "\n".join(row.expandtabs(TAB_WIDTH)[: max(0, max_cols)] for row in rows)


def render_preview(
    path: Path,
    *,
    max_lines: int,
    max_cols: int,
    style: str = FALLBACK_STYLE,
    no_color: bool = False,
) -> list[str]:
    """Return preview rows for ``path``; empty when it is not a readable file."""
    try:
        source = read_text(path)
    except OSError as exc:
        logger.debug("cannot preview %s: %s", path, exc)
        return []
    text = sanitize_terminal_text(head_lines(source, max_lines, max_cols))
    if no_color or not text:
        return text.splitlines()

    try:
        lexer = get_lexer_for_filename(path.name, text)
    except ClassNotFound:
        lexer = TextLexer()
    rendered = highlight(text, lexer, _formatter_for_style(style))
    return rendered.rstrip("\n").split("\n")


class FilePreviewer:
    """Previewer feeding highlighted file heads into ``show``."""

    def __init__(
        self,
        show: Callable[[list[str]], None],
        size: Callable[[], tuple[int, int]],
        *,
        style: str = FALLBACK_STYLE,
        no_color: bool = False,
    ) -> None:
        self.show = show
        self.size = size
        self.style = style
        self.no_color = no_color
        self.previewed: Path | None = None

    def update(self, item: LabeledItem) -> None:
        path = Path(item.raw_name)
        if path == self.previewed:
            return
        self.previewed = path
        max_cols, max_lines = self.size()
        if not path.is_file():
            self.show([])
            return
        self.show(
            render_preview(
                path,
                max_lines=max_lines,
                max_cols=max_cols,
                style=self.style,
                no_color=self.no_color,
            )
        )

    def cleanup(self, restore_original: bool) -> None:
        # Nothing was switched while previewing, so there is nothing to restore.
        self.previewed = None
        self.show([])


__all__ = ["FilePreviewer", "read_text", "render_preview", "sanitize_terminal_text"]
