"""Driver loop feeding input events into a session controller."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .actions import Action
from .controller import SessionController

logger = logging.getLogger(__name__)


def run_session(
    controller: SessionController,
    read_key: Callable[[], str],
    action: Action | None = None,
) -> None:
    """Enter list mode and feed keys until the session ends or suspends.

    Returns early while a custom action holds the session pending; its
    ``finish`` callback completes the session later. An empty key means the
    input source is closed and cancels the session.
    """
    controller.enter(action)
    session = controller.session
    while session.active and not session.pending:
        key = read_key()
        if not key:
            logger.debug("input closed; cancelling session")
            controller.cancel()
            break
        controller.handle_key(key)
