"""Shortest-unique display paths for items with clashing file names.

Every item starts out shown by its file name. Items whose shown string clashes
with another item grow by one parent directory per round until the clash is
gone, the item runs out of parents, or ``MAX_EXPANSION_ROUNDS`` is reached.
Whatever is still clashing after the bound is shown as-is.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence

from .items import Item, display_filename

MAX_EXPANSION_ROUNDS = 10
UNNAMED = "?"


def path_components(raw_name: str) -> list[str]:
    """Split ``raw_name`` into ``[filename, parent, grandparent, ...]``.

    Empty and ``.`` components are skipped. A name without a file name part
    (empty, or ending in ``/``) has no components.
    """
    filename = display_filename(raw_name)
    if not filename:
        return []
    parents = raw_name[: -len(filename)].split("/")
    components = [filename]
    components.extend(part for part in reversed(parents) if part and part != ".")
    return components


def _join(components: list[str], depth: int) -> str:
    return "/".join(reversed(components[:depth]))


def resolve_display_paths(items: Sequence[Item]) -> dict[Hashable, str]:
    components = {item.id: path_components(item.raw_name) for item in items}
    depths = {item_id: 1 for item_id in components}
    display = {
        item_id: _join(parts, 1) if parts else UNNAMED for item_id, parts in components.items()
    }

    for _ in range(MAX_EXPANSION_ROUNDS):
        groups: dict[str, list[Hashable]] = {}
        for item_id, shown in display.items():
            groups.setdefault(shown, []).append(item_id)

        clashing = [group for group in groups.values() if len(group) > 1]
        if not clashing:
            break

        for group in clashing:
            for item_id in group:
                parts = components[item_id]
                if depths[item_id] >= len(parts):
                    continue
                depths[item_id] += 1
                display[item_id] = _join(parts, depths[item_id])

    return display


def display_name(item: Item, paths: dict[Hashable, str]) -> str:
    shown = paths.get(item.id)
    if shown is not None:
        return shown
    return display_filename(item.raw_name)


__all__ = ["MAX_EXPANSION_ROUNDS", "display_name", "path_components", "resolve_display_paths"]
