"""Configuration model and persistent JSON config helpers.

Defaults mirror the stock look: thin sticks, labels shown while listing,
``/`` to filter, ``CTRL_Q`` to close. User overrides live in ``config.json``
under the platform user config directory and are deep-merged over the defaults.
All loading is defensive: malformed or wrongly typed values fall back safely.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from .fuzzy import DEFAULT_CUTOFF
from .items import ItemFilter

logger = logging.getLogger(__name__)

APP_NAME = "buffersticks"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

LABEL_SHOW_MODES = ("always", "list", "never")
LIST_SHOW_PARTS = ("filename", "space", "label", "stick")


@dataclass(frozen=True)
class Padding:
    top: int = 0
    right: int = 1
    bottom: int = 0
    left: int = 1


@dataclass(frozen=True)
class ListKeys:
    close_buffer: str = "CTRL_Q"
    move_up: str = "UP"
    move_down: str = "DOWN"


@dataclass(frozen=True)
class FilterKeys:
    enter: str = "/"
    confirm: str = "ENTER"
    exit: str = "ESC"
    move_up: str = "UP"
    move_down: str = "DOWN"


@dataclass(frozen=True)
class FilterConfig:
    title: str = "➜ "
    title_empty: str = "Filter"
    active_indicator: str = "•"
    fuzzy_cutoff: int = DEFAULT_CUTOFF
    keys: FilterKeys = field(default_factory=FilterKeys)


@dataclass(frozen=True)
class ListConfig:
    show: tuple[str, ...] = ("filename", "space", "label")
    active_indicator: str = "•"
    keys: ListKeys = field(default_factory=ListKeys)
    filter: FilterConfig = field(default_factory=FilterConfig)


@dataclass(frozen=True)
class PreviewConfig:
    enabled: bool = True
    style: str = "monokai"
    max_lines: int = 40


DEFAULT_HIGHLIGHTS: dict[str, str] = {
    "active": "#bbbbbb",
    "alternate": "#888888",
    "inactive": "#333333",
    "active_modified": "#ffffff",
    "alternate_modified": "#dddddd",
    "inactive_modified": "#999999",
    "label": "italic #aaaaaa",
    "filter_selected": "italic #bbbbbb",
    "filter_title": "italic #aaaaaa",
    "list_selected": "italic #bbbbbb",
}


@dataclass(frozen=True)
class SticksConfig:
    active_char: str = "──"
    inactive_char: str = " ─"
    alternate_char: str = " ─"
    active_modified_char: str = "──"
    inactive_modified_char: str = " ─"
    alternate_modified_char: str = " ─"
    label_show: str = "list"
    padding: Padding = field(default_factory=Padding)
    list: ListConfig = field(default_factory=ListConfig)
    filter: ItemFilter = field(default_factory=ItemFilter)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    highlights: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HIGHLIGHTS))


DEFAULT_CONFIG = SticksConfig()


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _coerce_like(default: Any, value: object) -> Any:
    """Return ``value`` when it has the same JSON shape as ``default``, else ``default``."""
    if isinstance(default, bool):
        return value if isinstance(value, bool) else default
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            return default
        return max(0, value)
    if isinstance(default, str):
        return value if isinstance(value, str) else default
    if isinstance(default, tuple):
        if not isinstance(value, list) or not all(isinstance(part, str) for part in value):
            return default
        return tuple(value)
    return default


def _merge_dataclass(default: Any, overrides: object) -> Any:
    """Deep-merge a JSON object over a frozen config dataclass."""
    if not isinstance(overrides, dict):
        return default
    changes: dict[str, Any] = {}
    for config_field in dataclasses.fields(default):
        if not config_field.init or config_field.name not in overrides:
            continue
        current = getattr(default, config_field.name)
        raw = overrides[config_field.name]
        if dataclasses.is_dataclass(current):
            changes[config_field.name] = _merge_dataclass(current, raw)
        elif isinstance(current, dict):
            if isinstance(raw, dict):
                merged = dict(current)
                merged.update({str(k): v for k, v in raw.items() if isinstance(v, str)})
                changes[config_field.name] = merged
        else:
            changes[config_field.name] = _coerce_like(current, raw)
    return dataclasses.replace(default, **changes) if changes else default


def config_from_dict(data: dict[str, object]) -> SticksConfig:
    """Build a config from a user JSON object, keeping defaults for bad values."""
    config = _merge_dataclass(DEFAULT_CONFIG, data)
    if config.label_show not in LABEL_SHOW_MODES:
        config = dataclasses.replace(config, label_show=DEFAULT_CONFIG.label_show)
    show = tuple(part for part in config.list.show if part in LIST_SHOW_PARTS)
    if show != config.list.show:
        config = dataclasses.replace(config, list=dataclasses.replace(config.list, show=show))
    if config.list.filter.fuzzy_cutoff <= 0:
        filter_config = dataclasses.replace(config.list.filter, fuzzy_cutoff=DEFAULT_CUTOFF)
        config = dataclasses.replace(config, list=dataclasses.replace(config.list, filter=filter_config))
    return config


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_CONFIG",
    "DEFAULT_HIGHLIGHTS",
    "FilterConfig",
    "FilterKeys",
    "ListConfig",
    "ListKeys",
    "Padding",
    "PreviewConfig",
    "SticksConfig",
    "config_from_dict",
    "load_config",
    "save_config",
]
