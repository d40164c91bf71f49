"""Item model shared by label generation, path resolution, and sessions.

Items are supplied fresh by an item source on every query and are never
mutated here. ``LabeledItem`` adds the generated selection label.
"""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class Item:
    id: Hashable
    raw_name: str
    is_current: bool = False
    is_alternate: bool = False
    is_modified: bool = False
    kind: str = ""


@dataclass(frozen=True)
class LabeledItem(Item):
    label: str = "?"


class ItemSource(Protocol):
    """Anything that can list the current selectable items in order."""

    def list_items(self) -> list[Item]: ...


@dataclass(frozen=True)
class ItemFilter:
    """Exclusion rules applied before labels are generated.

    ``names`` are regular expressions searched in the raw name; ``kinds`` are
    host-defined kind tags (file type, buffer type) to drop.
    """

    names: tuple[str, ...] = ()
    kinds: tuple[str, ...] = ()
    _compiled: tuple[re.Pattern[str], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        compiled: list[re.Pattern[str]] = []
        for pattern in self.names:
            try:
                compiled.append(re.compile(pattern))
            except re.error:
                continue
        object.__setattr__(self, "_compiled", tuple(compiled))

    def excludes(self, item: Item) -> bool:
        if item.kind and item.kind in self.kinds:
            return True
        return any(pattern.search(item.raw_name) for pattern in self._compiled)


def display_filename(raw_name: str) -> str:
    """Return the last ``/``-separated component of ``raw_name`` (may be empty)."""
    return raw_name.rsplit("/", 1)[-1]


def is_word_char(ch: str) -> bool:
    """Single-byte word character test: ASCII letters and digits only."""
    return len(ch) == 1 and ch.isascii() and ch.isalnum()


def filter_items(items: Iterable[Item], item_filter: ItemFilter | None) -> list[Item]:
    if item_filter is None:
        return list(items)
    return [item for item in items if not item_filter.excludes(item)]


def index_of_id(items: list[Item], item_id: Hashable) -> int | None:
    for idx, item in enumerate(items):
        if item.id == item_id:
            return idx
    return None


def current_item(items: list[Item]) -> Item | None:
    for item in items:
        if item.is_current:
            return item
    return None


__all__ = [
    "Item",
    "ItemFilter",
    "ItemSource",
    "LabeledItem",
    "current_item",
    "display_filename",
    "filter_items",
    "index_of_id",
    "is_word_char",
]
