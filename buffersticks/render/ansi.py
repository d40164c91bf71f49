"""ANSI rendering of panel lines through Pygments formatters.

Style tags become Pygments token types under ``Token.Sticks`` and the
configured highlight strings (``"italic #aaaaaa"``) become a Pygments style,
so the terminal escape codes come from ``Terminal256Formatter``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping

import pygments
from pygments.formatter import Formatter
from pygments.formatters import Terminal256Formatter
from pygments.style import Style
from pygments.token import Token, _TokenType

from ..config import DEFAULT_HIGHLIGHTS
from .lines import RenderLine

logger = logging.getLogger(__name__)

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
StickToken = Token.Sticks


def token_for_tag(tag: str) -> _TokenType:
    """Map ``active_modified`` to ``Token.Sticks.ActiveModified``."""
    name = "".join(part.capitalize() for part in tag.split("_") if part)
    return getattr(StickToken, name or "Plain")


def build_style(highlights: Mapping[str, str]) -> type[Style]:
    """Create a Pygments style class from tag -> style-string highlights.

    Entries Pygments rejects are dropped individually, falling back to the
    default highlight for that tag.
    """
    styles: dict[_TokenType, str] = {}
    for tag, spec in {**DEFAULT_HIGHLIGHTS, **highlights}.items():
        token = token_for_tag(tag)
        try:
            # StyleMeta parses the string eagerly; bad colors fail its assertions.
            type("_Checked", (Style,), {"styles": {token: spec}})
        except (AssertionError, ValueError):
            logger.warning("ignoring invalid highlight %r for %r", spec, tag)
            spec = DEFAULT_HIGHLIGHTS.get(tag, "")
        styles[token] = spec
    return type("SticksStyle", (Style,), {"styles": styles})


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class AnsiRenderer:
    """Renderer turning ``RenderLine`` objects into ANSI strings.

    Formatted rows are handed to ``sink``; ``no_color`` keeps plain text.
    """

    def __init__(
        self,
        sink: Callable[[list[str]], None],
        highlights: Mapping[str, str] | None = None,
        *,
        no_color: bool = False,
    ) -> None:
        self.sink = sink
        self.no_color = no_color
        self._formatter: Formatter | None = None
        if not no_color:
            self._formatter = Terminal256Formatter(style=build_style(highlights or {}))
        self.rows: list[str] = []

    def format_line(self, line: RenderLine) -> str:
        if self._formatter is None:
            return line.text
        tokens: list[tuple[_TokenType, str]] = []
        cursor = 0
        for segment in sorted(line.segments):
            start = max(segment.start, cursor)
            if start > cursor:
                tokens.append((Token, line.text[cursor:start]))
            if segment.end > start:
                tokens.append((token_for_tag(segment.tag), line.text[start : segment.end]))
                cursor = segment.end
        if cursor < len(line.text):
            tokens.append((Token, line.text[cursor:]))
        return pygments.format(tokens, self._formatter)

    def render(self, lines: list[RenderLine]) -> None:
        self.rows = [self.format_line(line) for line in lines]
        self.sink(self.rows)


__all__ = ["ANSI_ESCAPE_RE", "AnsiRenderer", "build_style", "strip_ansi", "token_for_tag"]
