from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum

from .actions import Action, OpenAction


class Mode(Enum):
    NORMAL = "normal"
    LIST = "list"
    FILTER = "filter"


@dataclass
class SelectionSession:
    """Mutable state of one selection session.

    ``selected_index`` indexes the unfiltered item list and is ``None`` while
    selection happens by typed label. ``filter_selected_index`` indexes the
    ranked filter results. ``last_selected_id`` survives across sessions.
    """

    mode: Mode = Mode.NORMAL
    action: Action = OpenAction()
    list_input: str = ""
    filter_input: str = ""
    selected_index: int | None = None
    filter_selected_index: int = 0
    pre_filter_index: int | None = None
    last_selected_id: Hashable | None = None
    pending: bool = False
    generation: int = 0

    @property
    def active(self) -> bool:
        return self.mode is not Mode.NORMAL

    @property
    def filtering(self) -> bool:
        return self.mode is Mode.FILTER

    def reset_input(self) -> None:
        self.list_input = ""
        self.filter_input = ""
        self.selected_index = None
        self.filter_selected_index = 0
        self.pre_filter_index = None

    def to_normal(self) -> None:
        self.mode = Mode.NORMAL
        self.pending = False
        self.reset_input()
        self.generation += 1
