"""Public package surface for buffersticks.

Short unique labels, shortest-unique display paths, fuzzy ranking, and the
modal selection session that ties them together. ``main`` runs the
interactive command-line picker.
"""

from __future__ import annotations

from .errors import BufferSticksError, InvariantError, LabelSpaceExhaustedError
from .fuzzy import fuzzy_filter_sort
from .items import Item, ItemFilter, LabeledItem
from .labels import LabelCache, generate_labels
from .paths import resolve_display_paths


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "BufferSticksError",
    "InvariantError",
    "Item",
    "ItemFilter",
    "LabelCache",
    "LabelSpaceExhaustedError",
    "LabeledItem",
    "fuzzy_filter_sort",
    "generate_labels",
    "main",
    "resolve_display_paths",
]
