"""In-memory buffer list acting as item source and action executor.

Used by the command-line picker: each path given on the command line becomes
one buffer. Opening a buffer makes it current (the previous current one
becomes the alternate); closing removes it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePath

from .items import Item, LabeledItem

logger = logging.getLogger(__name__)


@dataclass
class Buffer:
    id: int
    path: str
    modified: bool = False


class BufferList:
    def __init__(self, paths: Iterable[str], current: str | None = None) -> None:
        self.buffers: list[Buffer] = [Buffer(id=idx, path=path) for idx, path in enumerate(paths, start=1)]
        self.current_id: int | None = None
        self.alternate_id: int | None = None
        self.opened: list[int] = []
        self.closed: list[int] = []
        if current is not None:
            self.current_id = self.id_for_path(current)
        elif self.buffers:
            self.current_id = self.buffers[0].id

    def id_for_path(self, path: str) -> int | None:
        for buffer in self.buffers:
            if buffer.path == path:
                return buffer.id
        return None

    def _buffer(self, buffer_id: object) -> Buffer:
        for buffer in self.buffers:
            if buffer.id == buffer_id:
                return buffer
        raise KeyError(f"no buffer with id {buffer_id!r}")

    def list_items(self) -> list[Item]:
        return [
            Item(
                id=buffer.id,
                raw_name=buffer.path,
                is_current=buffer.id == self.current_id,
                is_alternate=buffer.id == self.alternate_id,
                is_modified=buffer.modified,
                kind=PurePath(buffer.path).suffix.lstrip("."),
            )
            for buffer in self.buffers
        ]

    def open_item(self, item: LabeledItem) -> None:
        buffer = self._buffer(item.id)
        if buffer.id != self.current_id:
            self.alternate_id = self.current_id
            self.current_id = buffer.id
        self.opened.append(buffer.id)
        logger.debug("opened %s", buffer.path)

    def close_item(self, item: LabeledItem) -> None:
        buffer = self._buffer(item.id)
        self.buffers.remove(buffer)
        self.closed.append(buffer.id)
        if self.alternate_id == buffer.id:
            self.alternate_id = None
        if self.current_id == buffer.id:
            self.current_id = self.alternate_id
            self.alternate_id = None
            if self.current_id is None and self.buffers:
                self.current_id = self.buffers[0].id
        logger.debug("closed %s", buffer.path)

    def mark_modified(self, path: str, modified: bool = True) -> None:
        buffer_id = self.id_for_path(path)
        if buffer_id is not None:
            self._buffer(buffer_id).modified = modified

    @property
    def current_path(self) -> str | None:
        if self.current_id is None:
            return None
        return self._buffer(self.current_id).path

    @property
    def paths(self) -> list[str]:
        return [buffer.path for buffer in self.buffers]


__all__ = ["Buffer", "BufferList"]
