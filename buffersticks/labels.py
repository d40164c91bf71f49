"""Unique short label assignment for list items.

Labels are typed to select an item, so they are kept as short as possible:
one character when an item's first word character is unique, two characters
for every member of a colliding group, and a digit for names without any word
character. ``LabelCache`` reuses the previous map while the ordered item id
sequence is unchanged so labels do not shuffle under the user's fingers.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Hashable, Iterable, Sequence

from .errors import InvariantError, LabelSpaceExhaustedError
from .items import Item, ItemFilter, ItemSource, LabeledItem, display_filename, filter_items, is_word_char

logger = logging.getLogger(__name__)

MISSING_LABEL = "?"
SECOND_CHAR_SCAN_END = 5
DIGIT_LABELS = tuple(string.digits)
PAIR_LABELS = tuple(a + b for a in string.ascii_lowercase for b in string.ascii_lowercase)


def _label_filename(item: Item) -> str:
    filename = display_filename(item.raw_name)
    return (filename or "?").lower()


def _first_word_char(filename: str) -> str | None:
    for ch in filename:
        if is_word_char(ch):
            return ch
    return None


def _two_char_label(filename: str, first_char: str, used: set[str], reserved: set[str]) -> str:
    """Pick a two-character label for one member of a colliding group.

    Labels starting with a ``reserved`` single-character label are skipped so
    that no label is a prefix of another.
    """

    def free(candidate: str) -> bool:
        return candidate not in used and candidate[0] not in reserved

    head = filename[:2]
    if len(head) == 2 and all(is_word_char(ch) for ch in head) and free(head):
        return head

    for ch in filename[1:SECOND_CHAR_SCAN_END]:
        if not is_word_char(ch):
            continue
        candidate = first_char + ch
        if free(candidate):
            return candidate

    for candidate in PAIR_LABELS:
        if free(candidate):
            return candidate
    raise LabelSpaceExhaustedError(f"no two-letter label left for {filename!r}")


def generate_labels(items: Sequence[Item]) -> dict[Hashable, str]:
    """Assign a prefix-free set of labels, one per item.

    No label equals or starts with another, so typing any label selects
    exactly one item. Deterministic for a given item order. Raises
    ``LabelSpaceExhaustedError`` when the digits or the ``aa``..``zz`` pairs
    run out.
    """
    labels: dict[Hashable, str] = {}
    used: set[str] = set()
    filenames: dict[Hashable, str] = {}
    groups: dict[str, list[Item]] = {}

    for item in items:
        filename = _label_filename(item)
        filenames[item.id] = filename
        first_char = _first_word_char(filename)
        if first_char is not None:
            groups.setdefault(first_char, []).append(item)

    singles = {first_char for first_char, group in groups.items() if len(group) == 1}

    for first_char, group in groups.items():
        if len(group) == 1:
            labels[group[0].id] = first_char
            used.add(first_char)
            continue
        for item in group:
            label = _two_char_label(filenames[item.id], first_char, used, singles)
            labels[item.id] = label
            used.add(label)

    pair_heads = {label[0] for label in labels.values() if len(label) == 2}
    for item in items:
        if item.id in labels:
            continue
        for digit in DIGIT_LABELS:
            if digit not in used and digit not in pair_heads:
                labels[item.id] = digit
                used.add(digit)
                break
        else:
            raise LabelSpaceExhaustedError(
                f"no free digit label left for {filenames[item.id]!r}"
            )

    return labels


def check_labels_unique(labels: dict[Hashable, str]) -> None:
    """Raise ``InvariantError`` if two items share a label."""
    seen: dict[str, Hashable] = {}
    for item_id, label in labels.items():
        if label in seen:
            raise InvariantError(f"label {label!r} assigned to both {seen[label]!r} and {item_id!r}")
        seen[label] = item_id


def check_labels_prefix_free(labels: dict[Hashable, str]) -> None:
    """Raise ``InvariantError`` if one label is a proper prefix of another."""
    ordered = sorted(labels.values())
    for shorter, longer in zip(ordered, ordered[1:]):
        if shorter != longer and longer.startswith(shorter):
            raise InvariantError(f"label {shorter!r} is a prefix of {longer!r}")


class LabelCache:
    """Label map memoized on the exact ordered id sequence."""

    def __init__(self) -> None:
        self._ids: tuple[Hashable, ...] | None = None
        self._labels: dict[Hashable, str] = {}

    def labels_for(self, items: Sequence[Item]) -> dict[Hashable, str]:
        ids = tuple(item.id for item in items)
        if ids != self._ids:
            logger.debug("regenerating labels for %d items", len(ids))
            labels = generate_labels(items)
            check_labels_unique(labels)
            check_labels_prefix_free(labels)
            self._labels = labels
            self._ids = ids
        return self._labels

    def invalidate(self) -> None:
        self._ids = None
        self._labels = {}


def label_items(items: Iterable[Item], labels: dict[Hashable, str]) -> list[LabeledItem]:
    return [
        LabeledItem(
            id=item.id,
            raw_name=item.raw_name,
            is_current=item.is_current,
            is_alternate=item.is_alternate,
            is_modified=item.is_modified,
            kind=item.kind,
            label=labels.get(item.id, MISSING_LABEL),
        )
        for item in items
    ]


def collect_items(
    source: ItemSource,
    cache: LabelCache,
    item_filter: ItemFilter | None = None,
) -> list[LabeledItem]:
    """Query ``source``, drop filtered items, and attach cached labels."""
    items = filter_items(source.list_items(), item_filter)
    return label_items(items, cache.labels_for(items))


def has_two_char_label(items: Iterable[LabeledItem]) -> bool:
    return any(len(item.label) == 2 for item in items)


def items_matching_prefix(items: Iterable[LabeledItem], prefix: str) -> list[LabeledItem]:
    return [item for item in items if item.label.startswith(prefix)]


__all__ = [
    "LabelCache",
    "MISSING_LABEL",
    "check_labels_prefix_free",
    "check_labels_unique",
    "collect_items",
    "generate_labels",
    "has_two_char_label",
    "items_matching_prefix",
    "label_items",
]
