"""Line building for the sticks panel.

Turns the labeled item list plus session state into plain text lines with
symbolic style segments. Renderers decide how tags look; nothing here knows
about colors or terminal geometry.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from typing import NamedTuple, Protocol

from ..config import SticksConfig
from ..items import LabeledItem
from ..labels import has_two_char_label
from ..paths import display_name
from ..session.state import Mode, SelectionSession

TAG_LABEL = "label"
TAG_LIST_SELECTED = "list_selected"
TAG_FILTER_SELECTED = "filter_selected"
TAG_FILTER_TITLE = "filter_title"


class Segment(NamedTuple):
    """Half-open character range ``[start, end)`` styled with ``tag``."""

    start: int
    end: int
    tag: str


@dataclass(frozen=True)
class RenderLine:
    text: str
    segments: tuple[Segment, ...] = ()


class Renderer(Protocol):
    def render(self, lines: list[RenderLine]) -> None: ...


class _Part(NamedTuple):
    text: str
    tag: str | None = None
    tag_start: int = 0
    tag_end: int | None = None


@dataclass(frozen=True)
class PanelView:
    """Snapshot of everything needed to draw the panel once."""

    items: Sequence[LabeledItem]
    paths: dict[Hashable, str]
    session: SelectionSession
    config: SticksConfig
    visible: Sequence[int]


def display_width(text: str) -> int:
    """Terminal column width: wide/fullwidth chars count two, combining marks zero."""
    width = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1
    return width


def stick_for(item: LabeledItem, config: SticksConfig) -> tuple[str, str]:
    """Return the stick glyph and its style tag for ``item``."""
    if item.is_current:
        char, tag = config.active_char, "active"
        if item.is_modified:
            char = config.active_modified_char
    elif item.is_alternate:
        char, tag = config.alternate_char, "alternate"
        if item.is_modified:
            char = config.alternate_modified_char
    else:
        char, tag = config.inactive_char, "inactive"
        if item.is_modified:
            char = config.inactive_modified_char
    if item.is_modified:
        tag += "_modified"
    return char, tag


def _label_part(
    item: LabeledItem,
    view: PanelView,
    two_char: bool,
    *,
    filter_selected: bool,
    list_selected: bool,
) -> _Part:
    session = view.session
    list_config = view.config.list
    label_display = " " + item.label if len(item.label) == 1 and two_char else item.label

    if session.filtering:
        if not filter_selected:
            return _Part(" " * len(label_display))
        indicator = list_config.filter.active_indicator
        padding = max(0, len(label_display) - display_width(indicator))
        return _Part(indicator + " " * padding, TAG_FILTER_SELECTED, 0, len(indicator))

    if list_selected:
        indicator = list_config.active_indicator
        lead = " " if two_char else ""
        return _Part(lead + indicator, TAG_LIST_SELECTED, len(lead), len(lead) + len(indicator))

    lead = len(label_display) - len(item.label)
    return _Part(label_display, TAG_LABEL, lead, len(label_display))


def _join_parts(parts: list[_Part], separator: str) -> tuple[str, list[Segment]]:
    text_parts: list[str] = []
    segments: list[Segment] = []
    offset = 0
    for idx, part in enumerate(parts):
        if idx and separator:
            text_parts.append(separator)
            offset += len(separator)
        text_parts.append(part.text)
        if part.tag is not None:
            end = len(part.text) if part.tag_end is None else part.tag_end
            if end > part.tag_start:
                segments.append(Segment(offset + part.tag_start, offset + end, part.tag))
        offset += len(part.text)
    return "".join(text_parts), segments


def _item_line(item: LabeledItem, position: int, view: PanelView, two_char: bool) -> tuple[str, list[Segment]]:
    session = view.session
    config = view.config
    filter_selected = session.filtering and position == session.filter_selected_index
    list_selected = session.mode is Mode.LIST and position == session.selected_index
    stick, stick_tag = stick_for(item, config)
    row_tag = stick_tag
    if filter_selected:
        row_tag = TAG_FILTER_SELECTED
    elif list_selected:
        row_tag = TAG_LIST_SELECTED

    if session.active and config.list.show:
        show = config.list.show
        parts: list[_Part] = []
        if "stick" in show:
            parts.append(_Part(stick, row_tag))
        if "filename" in show:
            parts.append(_Part(display_name(item, view.paths), row_tag))
        if "label" in show:
            parts.append(
                _label_part(
                    item,
                    view,
                    two_char,
                    filter_selected=filter_selected,
                    list_selected=list_selected,
                )
            )
        separator = " " if "space" in show and len(parts) > 1 else ""
        return _join_parts(parts, separator)

    show_label = config.label_show == "always" or (config.label_show == "list" and session.active)
    text = f"{stick} {item.label}" if show_label else stick
    return text, [Segment(0, len(text), row_tag)]


def _align(rows: list[tuple[str, list[Segment]]], config: SticksConfig) -> list[RenderLine]:
    padding = config.padding
    width = max((display_width(text) for text, _ in rows), default=0)
    lines: list[RenderLine] = []
    for text, segments in rows:
        shift = padding.left + max(0, width - display_width(text))
        aligned = " " * shift + text + " " * padding.right
        lines.append(
            RenderLine(
                aligned,
                tuple(Segment(seg.start + shift, seg.end + shift, seg.tag) for seg in segments),
            )
        )

    blank = RenderLine(" " * display_width(lines[0].text) if lines else "")
    return [blank] * padding.top + lines + [blank] * padding.bottom


def build_lines(view: PanelView) -> list[RenderLine]:
    """Compute the panel lines for the current session state."""
    session = view.session
    visible_items = [view.items[idx] for idx in view.visible]
    two_char = has_two_char_label(visible_items)
    rows: list[tuple[str, list[Segment]]] = []

    if session.filtering:
        filter_config = view.config.list.filter
        title = filter_config.title if session.filter_input else filter_config.title_empty
        prompt = title + session.filter_input + ("   " if two_char else "  ")
        rows.append((prompt, [Segment(0, len(prompt), TAG_FILTER_TITLE)]))

    for position, item in enumerate(visible_items):
        rows.append(_item_line(item, position, view, two_char))

    return _align(rows, view.config)


__all__ = [
    "PanelView",
    "RenderLine",
    "Renderer",
    "Segment",
    "build_lines",
    "display_width",
    "stick_for",
]
