"""Actions a session can run on its final selection.

``OpenAction`` and ``CloseAction`` are built-in verbs carried out by the
host's executor. ``CustomAction`` wraps a caller callback that receives the
selected item plus a ``finish`` callable it must invoke to end the session.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, Union

from ..items import LabeledItem

FinishCallback = Callable[[], None]
ActionCallback = Callable[[LabeledItem, FinishCallback], None]


@dataclass(frozen=True)
class OpenAction:
    name = "open"


@dataclass(frozen=True)
class CloseAction:
    name = "close"


@dataclass(frozen=True)
class CustomAction:
    callback: ActionCallback
    name: str = "custom"


Action = Union[OpenAction, CloseAction, CustomAction]


class ActionExecutor(Protocol):
    """Host operations behind the built-in verbs."""

    def open_item(self, item: LabeledItem) -> None: ...

    def close_item(self, item: LabeledItem) -> None: ...


def is_navigation(action: Action) -> bool:
    """Navigation-style actions restore the original item when cancelled."""
    return isinstance(action, OpenAction)


def parse_action(name: str) -> Action:
    """Map a built-in verb name to its action; unknown names raise ``ValueError``."""
    normalized = name.strip().lower()
    if normalized == OpenAction.name:
        return OpenAction()
    if normalized == CloseAction.name:
        return CloseAction()
    raise ValueError(f"unknown action: {name!r}")


__all__ = [
    "Action",
    "ActionCallback",
    "ActionExecutor",
    "CloseAction",
    "CustomAction",
    "FinishCallback",
    "OpenAction",
    "is_navigation",
    "parse_action",
]
