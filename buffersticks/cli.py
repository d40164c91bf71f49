"""Command-line front door for buffersticks.

Parses CLI options, builds the buffer list from the given paths, and runs
one interactive selection. The chosen path (``open``) or the remaining paths
(``close``) are printed afterwards so the picker composes with shell scripts.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .app import run_picker
from .config import LABEL_SHOW_MODES, config_from_dict, load_config, save_config
from .host import BufferList
from .items import ItemFilter
from .session.actions import OpenAction, parse_action


def _default_paths() -> list[str]:
    """Regular, non-hidden files in the current directory, sorted case-insensitively."""
    cwd = Path.cwd()
    files = [p for p in cwd.iterdir() if p.is_file() and not p.name.startswith(".")]
    return [str(p.relative_to(cwd)) for p in sorted(files, key=lambda p: p.name.lower())]


def _configure_logging(log_file: str | None) -> None:
    if not log_file:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("buffersticks")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pick one of several files by typing its short label or fuzzy-filtering names."
    )
    parser.add_argument("paths", nargs="*", help="Files to choose from. Defaults to files in the current directory.")
    parser.add_argument(
        "--action",
        choices=("open", "close"),
        default="open",
        help="open prints the chosen path; close removes it and prints the rest.",
    )
    parser.add_argument("--current", metavar="PATH", help="Path treated as the currently active buffer.")
    parser.add_argument(
        "--modified",
        metavar="PATH",
        action="append",
        default=[],
        help="Mark PATH as having unsaved changes (repeatable).",
    )
    parser.add_argument(
        "--exclude",
        metavar="REGEX",
        action="append",
        default=[],
        help="Hide paths matching REGEX (repeatable, added to configured filters).",
    )
    parser.add_argument("--label-show", choices=LABEL_SHOW_MODES, help="When to show labels next to sticks.")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Persist --label-show to the user config file.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for file previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--no-preview", action="store_true", help="Do not preview the highlighted file.")
    parser.add_argument("--log-file", metavar="PATH", help="Write debug logs to PATH.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the interactive picker."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_file)

    data = load_config()
    if args.label_show is not None:
        data["label_show"] = args.label_show
        if args.save_config:
            save_config(data)
    config = config_from_dict(data)
    if args.exclude:
        item_filter = ItemFilter(
            names=config.filter.names + tuple(args.exclude),
            kinds=config.filter.kinds,
        )
        config = dataclasses.replace(config, filter=item_filter)
    if args.no_preview:
        config = dataclasses.replace(config, preview=dataclasses.replace(config.preview, enabled=False))

    paths = args.paths or _default_paths()
    if not paths:
        raise SystemExit("No files to choose from.")
    missing = [path for path in paths if not Path(path).exists()]
    if missing:
        raise SystemExit(f"Path not found: {missing[0]}")

    buffers = BufferList(paths, current=args.current)
    for path in args.modified:
        buffers.mark_modified(path)
    action = parse_action(args.action)
    run_picker(buffers, config, action, no_color=args.no_color, style=args.style)

    if isinstance(action, OpenAction):
        if not buffers.opened:
            raise SystemExit(1)
        sys.stdout.write(f"{buffers.current_path}\n")
        return
    sys.stdout.write("".join(f"{path}\n" for path in buffers.paths))


if __name__ == "__main__":
    main()
