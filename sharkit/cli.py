"""Command-line front door for sharkit.

Parses options, builds the catalog for the target directory, runs the
interactive picker on the controlling terminal, and prints the confirmed
selection to stdout.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

from .catalog import load_catalog
from .config import PickerConfig, resolve_config
from .errors import SharkitError
from .input import read_key
from .keys import LoopState
from .log import configure_logging
from .loop import run_picker_loop
from .render import ListViewport, render_frame, write_frame
from .session import DisplaySnapshot, SelectionSession
from .terminal import TerminalController, open_tty
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

EXIT_CONFIRMED = 0
EXIT_ERROR = 1
# POSIX convention for "terminated by SIGINT".
EXIT_CANCELLED = 130


def format_output_path(path: Path, cwd: Path) -> str:
    """Express ``path`` relative to ``cwd``, or absolute when that is impossible."""
    absolute = os.path.abspath(path)
    try:
        return os.path.relpath(absolute, os.path.abspath(cwd))
    except ValueError:
        return absolute


def write_selection(paths: Iterable[Path], cwd: Path, out: TextIO) -> None:
    for path in paths:
        out.write(format_output_path(path, cwd) + "\n")
    out.flush()


def run_picker(session: SelectionSession, config: PickerConfig) -> LoopState:
    """Run the interactive loop for ``session`` on the controlling terminal."""
    theme = resolve_theme(config.theme, no_color=config.no_color)
    with open_tty() as tty_fd:
        terminal = TerminalController(tty_fd, tty_fd)
        viewport = ListViewport()

        def render(snapshot: DisplaySnapshot) -> None:
            size = terminal.size()
            frame = render_frame(
                snapshot,
                size.columns,
                size.lines,
                theme,
                style=config.style,
                highlight=not config.no_color,
                viewport=viewport,
            )
            write_frame(tty_fd, frame)

        with terminal.raw_mode():
            return run_picker_loop(session, read_key=lambda: read_key(tty_fd), render=render)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharkit",
        description="Pick files in a directory interactively and print the selected paths.",
    )
    parser.add_argument("directory", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    parser.add_argument("--no-preview", action="store_true", help="Start with the preview pane hidden.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors and syntax highlighting.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for the preview.")
    parser.add_argument("--log-file", default=None, help="Write a debug log to this file.")
    parser.add_argument("--debug", action="store_true", help="Log debug details (to the user log dir by default).")
    return parser


def run(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv``, run the picker, and return the process exit code."""
    args = build_parser().parse_args(argv)
    config = resolve_config(
        no_preview=args.no_preview,
        no_color=args.no_color,
        theme=args.theme,
        style=args.style,
        log_file=args.log_file,
        debug=args.debug,
    )
    cwd = Path.cwd()
    directory = Path(args.directory) if args.directory is not None else Path(".")
    try:
        configure_logging(config.log_file, config.debug)
        session = SelectionSession(load_catalog(directory), show_preview=config.show_preview)
        outcome = run_picker(session, config)
    except SharkitError as exc:
        logger.error("%s", exc)
        sys.stderr.write(f"sharkit: {exc}\n")
        return EXIT_ERROR

    if outcome is not LoopState.CONFIRMED:
        return EXIT_CANCELLED
    write_selection(session.selected_paths(), cwd, sys.stdout)
    return EXIT_CONFIRMED


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point; exits with the picker's status code."""
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
