"""Modal selection controller.

Owns one ``SelectionSession`` and advances it one key at a time:

* ``LIST``: typed word characters narrow items by label prefix, arrows move a
  highlight through the full list, ``ENTER`` confirms the highlight.
* ``FILTER`` (entered from ``LIST``): typed text fuzzy-ranks display names,
  arrows move through the ranked results, confirm picks the highlighted one.

Every visible change is pushed to the renderer; leaving any mode goes back to
``NORMAL``. The controller never blocks: a driver loop feeds it keys.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from typing import Protocol

from ..config import DEFAULT_CONFIG, SticksConfig
from ..errors import InvariantError
from ..fuzzy import fuzzy_match_indices
from ..items import ItemSource, LabeledItem, current_item, index_of_id, is_word_char
from ..keys import BACKSPACE, CANCEL_KEYS, ENTER, is_printable_key
from ..labels import LabelCache, collect_items, items_matching_prefix, label_items
from ..paths import display_name, resolve_display_paths
from ..render.lines import PanelView, Renderer, build_lines
from .actions import Action, ActionExecutor, CloseAction, CustomAction, OpenAction, is_navigation
from .state import Mode, SelectionSession

logger = logging.getLogger(__name__)


class Previewer(Protocol):
    """Optional host hook showing the highlighted item while selecting."""

    def update(self, item: LabeledItem) -> None: ...

    def cleanup(self, restore_original: bool) -> None: ...


def _item_at(items: Sequence[LabeledItem], index: int) -> LabeledItem:
    if not 0 <= index < len(items):
        raise InvariantError(f"index {index} outside item list of length {len(items)}")
    return items[index]


class SessionController:
    """Stateful selection session bound to its collaborators."""

    def __init__(
        self,
        source: ItemSource,
        renderer: Renderer,
        executor: ActionExecutor,
        config: SticksConfig = DEFAULT_CONFIG,
        *,
        previewer: Previewer | None = None,
        cache: LabelCache | None = None,
    ) -> None:
        self.source = source
        self.renderer = renderer
        self.executor = executor
        self.config = config
        self.previewer = previewer
        self.cache = cache if cache is not None else LabelCache()
        self.session = SelectionSession()

    # Queries

    def items(self) -> list[LabeledItem]:
        return collect_items(self.source, self.cache, self.config.filter)

    def ranked_indices(self, items: Sequence[LabeledItem], paths: dict[Hashable, str] | None = None) -> list[int]:
        """Indices of ``items`` ranked against the filter input, best first."""
        if paths is None:
            paths = resolve_display_paths(items)
        names = [display_name(item, paths) for item in items]
        return fuzzy_match_indices(self.session.filter_input, names, self.config.list.filter.fuzzy_cutoff)

    def render(self) -> None:
        items = self.items()
        paths = resolve_display_paths(items)
        if self.session.filtering and self.session.filter_input:
            visible: Sequence[int] = self.ranked_indices(items, paths)
        else:
            visible = range(len(items))
        view = PanelView(items=items, paths=paths, session=self.session, config=self.config, visible=visible)
        self.renderer.render(build_lines(view))

    # Lifecycle

    def enter(self, action: Action | None = None) -> None:
        """Start a session in ``LIST`` mode, highlighting the current item."""
        session = self.session
        session.mode = Mode.LIST
        session.action = action if action is not None else OpenAction()
        session.pending = False
        session.generation += 1
        session.reset_input()

        items = self.items()
        current = current_item(items)
        if current is not None:
            session.selected_index = index_of_id(items, current.id)
            session.last_selected_id = current.id
        logger.debug("session entered with action %s over %d items", session.action.name, len(items))

        self.render()
        if current is not None:
            self._preview(current)

    def cancel(self) -> None:
        """Abort the session, including one waiting on a custom action."""
        if self.session.active:
            self._leave(restore=True)

    def handle_key(self, key: str) -> bool:
        """Advance the session by one key; returns whether it is still active."""
        session = self.session
        if not session.active:
            return False
        if session.pending:
            logger.debug("ignoring key %r while action is pending", key)
            return True
        if session.filtering:
            self._handle_filter_key(key)
        else:
            self._handle_list_key(key)
        return session.active

    # List mode

    def _handle_list_key(self, key: str) -> None:
        keys = self.config.list.keys
        if key in CANCEL_KEYS:
            self._leave(restore=True)
        elif key == keys.move_up:
            self._move_selection(-1)
        elif key == keys.move_down:
            self._move_selection(1)
        elif key == ENTER and self.session.selected_index is not None:
            self._confirm_selection()
        elif key == self.config.list.filter.keys.enter:
            self._enter_filter()
        elif key == keys.close_buffer:
            self._close_active()
        elif is_word_char(key):
            self._type_label_char(key)
        else:
            self._leave(restore=True)

    def _type_label_char(self, ch: str) -> None:
        session = self.session
        session.selected_index = None
        session.list_input += ch.lower()
        matches = items_matching_prefix(self.items(), session.list_input)
        if len(matches) == 1:
            self._invoke(matches[0])
        elif not matches:
            logger.debug("no label starts with %r", session.list_input)
            self._leave(restore=True)
        else:
            self.render()

    def _move_selection(self, step: int) -> None:
        session = self.session
        items = self.items()
        if not items:
            return
        index: int | None = None
        if session.selected_index is not None and self._resolve_selection(items) is not None:
            index = session.selected_index
        if index is None:
            current = current_item(items)
            if current is not None:
                index = index_of_id(items, current.id)
            else:
                index = len(items) if step < 0 else -1
        assert index is not None
        session.selected_index = (index + step) % len(items)
        selected = _item_at(items, session.selected_index)
        session.last_selected_id = selected.id
        self._preview(selected)
        self.render()

    def _resolve_selection(self, items: list[LabeledItem]) -> LabeledItem | None:
        """Map the highlight back to an item, following its id if the list moved."""
        session = self.session
        index = session.selected_index
        wanted = session.last_selected_id
        if index is not None and 0 <= index < len(items):
            if wanted is None or items[index].id == wanted:
                return items[index]
        if wanted is not None:
            found = index_of_id(items, wanted)
            if found is not None:
                session.selected_index = found
                return items[found]
        return None

    def _confirm_selection(self) -> None:
        selected = self._resolve_selection(self.items())
        if selected is None:
            logger.info("highlighted item vanished; cancelling session")
            self._leave(restore=True)
            return
        self._invoke(selected)

    def _close_active(self) -> None:
        # The active item may be hidden by the item filter; it is still closable.
        active = current_item(self.source.list_items())
        if active is None:
            logger.info("no active item to close; cancelling session")
            self._leave(restore=True)
            return
        labeled = next((item for item in self.items() if item.id == active.id), None)
        if labeled is None:
            labeled = label_items([active], {})[0]
        self._run_builtin(CloseAction(), labeled)

    # Filter mode

    def _enter_filter(self) -> None:
        session = self.session
        session.mode = Mode.FILTER
        session.pre_filter_index = session.selected_index
        session.filter_input = ""
        session.filter_selected_index = 0
        self.render()

    def _exit_filter(self) -> None:
        session = self.session
        session.mode = Mode.LIST
        session.filter_input = ""
        session.filter_selected_index = 0
        session.selected_index = session.pre_filter_index
        session.pre_filter_index = None
        self.render()

    def _handle_filter_key(self, key: str) -> None:
        session = self.session
        keys = self.config.list.filter.keys
        if key in CANCEL_KEYS or key == keys.exit:
            self._exit_filter()
        elif key == keys.move_up:
            self._move_filter_selection(-1)
        elif key == keys.move_down:
            self._move_filter_selection(1)
        elif key == keys.confirm:
            self._confirm_filter()
        elif key == BACKSPACE:
            if session.filter_input:
                session.filter_input = session.filter_input[:-1]
                self._refilter()
        elif is_printable_key(key):
            session.filter_input += key
            self._refilter()

    def _refilter(self) -> None:
        self.session.filter_selected_index = 0
        items = self.items()
        ranked = self.ranked_indices(items)
        if ranked:
            self._preview(_item_at(items, ranked[0]))
        self.render()

    def _move_filter_selection(self, step: int) -> None:
        session = self.session
        items = self.items()
        ranked = self.ranked_indices(items)
        if not ranked:
            return
        session.filter_selected_index = (session.filter_selected_index + step) % len(ranked)
        self._preview(_item_at(items, ranked[session.filter_selected_index]))
        self.render()

    def _confirm_filter(self) -> None:
        session = self.session
        items = self.items()
        ranked = self.ranked_indices(items)
        if not ranked:
            return
        position = min(session.filter_selected_index, len(ranked) - 1)
        self._invoke(_item_at(items, ranked[position]))

    # Dispatch

    def _invoke(self, item: LabeledItem) -> None:
        session = self.session
        session.last_selected_id = item.id
        action = session.action
        if isinstance(action, CustomAction):
            self._run_custom(action, item)
        else:
            self._run_builtin(action, item)

    def _run_builtin(self, action: Action, item: LabeledItem) -> None:
        try:
            if isinstance(action, CloseAction):
                self.executor.close_item(item)
            else:
                self.executor.open_item(item)
        except Exception:
            logger.exception("%s action failed for %r", action.name, item.raw_name)
            self._leave(restore=True)
            return
        self._leave(restore=False)

    def _run_custom(self, action: CustomAction, item: LabeledItem) -> None:
        session = self.session
        session.pending = True
        generation = session.generation

        def finish() -> None:
            if session.generation == generation and session.active:
                self._leave(restore=False)

        try:
            action.callback(item, finish)
        except Exception:
            logger.exception("custom action failed for %r", item.raw_name)
            if session.generation == generation and session.active:
                self._leave(restore=True)

    def _preview(self, item: LabeledItem) -> None:
        if self.previewer is not None:
            self.previewer.update(item)

    def _leave(self, *, restore: bool) -> None:
        session = self.session
        restore_original = restore and is_navigation(session.action)
        logger.debug("session left (restore_original=%s)", restore_original)
        session.to_normal()
        if self.previewer is not None:
            self.previewer.cleanup(restore_original)
        self.render()


__all__ = ["Previewer", "SessionController"]
