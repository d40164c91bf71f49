"""Selection session state and actions.

The controller lives in ``buffersticks.session.controller`` and the driver
loop in ``buffersticks.session.loop``.
"""

from __future__ import annotations

from .actions import Action, ActionExecutor, CloseAction, CustomAction, OpenAction, parse_action
from .state import Mode, SelectionSession

__all__ = [
    "Action",
    "ActionExecutor",
    "CloseAction",
    "CustomAction",
    "Mode",
    "OpenAction",
    "SelectionSession",
    "parse_action",
]
