"""Frame rendering for the picker.

Turns a ``DisplaySnapshot`` into one full-screen ANSI frame: the file list,
the optional preview pane, and a footer with key help and the selection count.
Rendering is pure apart from the optional ``ListViewport`` it advances;
``write_frame`` is the only function touching a descriptor.
"""

from __future__ import annotations

import os
import re

from .ansi import build_screen_lines, clip_ansi_line, display_width, pad_ansi_line
from .session import DisplaySnapshot
from .syntax import DEFAULT_STYLE, highlight_preview, sanitize_terminal_text
from .ui_theme import DEFAULT_THEME, UITheme

APP_TITLE = "sharkit"
HIGHLIGHT_SYMBOL = "› "
LIST_PANE_PERCENT = 40
FOOTER_ROWS = 5
FOOTER_MIN_SCREEN_ROWS = FOOTER_ROWS + 3
CONTROLS_PANE_PERCENT = 70

CONTROLS_LINES: tuple[str, ...] = (
    "[↑/↓ or j/k] move cursor  [space] toggle selection",
    "[shift+1..9] select only that file  [shift+0] last",
    "[enter] confirm  [q/esc] quit",
)
ACTIONS_LINES: tuple[str, ...] = (
    "[a/A] select all  [n] none",
    "[p] toggle preview",
)

_KEY_HINT_RE = re.compile(r"\[[^\]]+\]")


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def _box(title: str, body: list[str], width: int, height: int, theme: UITheme) -> list[str]:
    """Frame ``body`` lines in a titled border of exactly ``width`` x ``height`` cells."""
    if width <= 0 or height <= 0:
        return []
    if width < 2 or height < 2:
        return [" " * width for _ in range(height)]

    inner_width = width - 2
    title_text = clip_ansi_line(f" {title} ", inner_width) if title else ""
    top_fill = "─" * max(0, inner_width - display_width(title_text))
    rows = [
        _styled("┌", theme.border, theme)
        + _styled(title_text, theme.title, theme)
        + _styled(top_fill + "┐", theme.border, theme)
    ]
    side = _styled("│", theme.border, theme)
    for idx in range(height - 2):
        line = body[idx] if idx < len(body) else ""
        rows.append(side + pad_ansi_line(line, inner_width) + side)
    rows.append(_styled("└" + "─" * inner_width + "┘", theme.border, theme))
    return rows


class ListViewport:
    """Scroll offset of the list pane, carried from one frame to the next."""

    def __init__(self, offset: int = 0) -> None:
        self.offset = offset


def list_scroll_start(cursor: int | None, visible_rows: int, offset: int = 0) -> int:
    """First visible row index that keeps ``cursor`` on screen.

    The previous ``offset`` is kept while the cursor stays inside its window.
    """
    if cursor is None or visible_rows <= 0:
        return 0
    if cursor < offset:
        return cursor
    if cursor >= offset + visible_rows:
        return cursor - visible_rows + 1
    return offset


def list_pane_lines(
    snapshot: DisplaySnapshot,
    inner_width: int,
    visible_rows: int,
    theme: UITheme,
    viewport: ListViewport | None = None,
) -> list[str]:
    offset = viewport.offset if viewport is not None else 0
    start = list_scroll_start(snapshot.cursor, visible_rows, offset)
    # A taller pane must not leave blank rows under the last entry.
    start = max(0, min(start, len(snapshot.rows) - max(visible_rows, 0)))
    if viewport is not None:
        viewport.offset = start
    out: list[str] = []
    for idx in range(start, min(len(snapshot.rows), start + visible_rows)):
        row = snapshot.rows[idx]
        if idx == snapshot.cursor:
            line = pad_ansi_line(HIGHLIGHT_SYMBOL + row.text, inner_width)
            out.append(_styled(line, theme.cursor, theme))
            continue
        style = theme.entry_dim if row.dim else theme.entry
        out.append(_styled(" " * len(HIGHLIGHT_SYMBOL) + row.text, style, theme))
    return out


def preview_pane_lines(
    snapshot: DisplaySnapshot,
    inner_width: int,
    visible_rows: int,
    *,
    style: str = DEFAULT_STYLE,
    highlight: bool = True,
) -> list[str]:
    text = sanitize_terminal_text(snapshot.preview_text)
    if highlight and snapshot.preview_from_file:
        text = highlight_preview(text, snapshot.preview_filename, style)
    return build_screen_lines(text, max(1, inner_width))[:visible_rows]


def _key_help(line: str, theme: UITheme) -> str:
    return _KEY_HINT_RE.sub(lambda match: _styled(match.group(0), theme.help_key, theme), line)


def footer_lines(snapshot: DisplaySnapshot, width: int, theme: UITheme) -> list[str]:
    controls_width = width * CONTROLS_PANE_PERCENT // 100
    actions_width = width - controls_width
    controls = _box(
        "Controls",
        [_key_help(line, theme) for line in CONTROLS_LINES],
        controls_width,
        FOOTER_ROWS,
        theme,
    )
    actions = _box(
        "Actions",
        [_key_help(line, theme) for line in ACTIONS_LINES]
        + [_styled(f"{snapshot.selected_count} selected", theme.count, theme)],
        actions_width,
        FOOTER_ROWS,
        theme,
    )
    return [left + right for left, right in zip(controls, actions)]


def render_frame(
    snapshot: DisplaySnapshot,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
    *,
    style: str = DEFAULT_STYLE,
    highlight: bool = True,
    viewport: ListViewport | None = None,
) -> str:
    """Compose one full frame of ``width`` x ``height`` cells.

    The footer is dropped on very short terminals; the preview pane is
    omitted entirely when ``snapshot.show_preview`` is false. Pass the same
    ``viewport`` for every frame of a session to keep the list scroll position.
    """
    width = max(1, width)
    height = max(1, height)
    show_footer = height >= FOOTER_MIN_SCREEN_ROWS
    main_rows = height - FOOTER_ROWS if show_footer else height

    show_preview_pane = snapshot.show_preview and width >= 4
    list_width = width * LIST_PANE_PERCENT // 100 if show_preview_pane else width
    list_rows = list_pane_lines(snapshot, max(0, list_width - 2), main_rows - 2, theme, viewport)
    rows = _box(APP_TITLE, list_rows, list_width, main_rows, theme)

    if show_preview_pane:
        preview_width = width - list_width
        body = preview_pane_lines(
            snapshot,
            preview_width - 2,
            main_rows - 2,
            style=style,
            highlight=highlight,
        )
        preview = _box(snapshot.preview_title, body, preview_width, main_rows, theme)
        rows = [left + right for left, right in zip(rows, preview)]

    if show_footer:
        rows.extend(footer_lines(snapshot, width, theme))

    return "\033[H\033[J" + "\r\n".join(rows)


def write_frame(fd: int, frame: str) -> None:
    data = memoryview(frame.encode("utf-8", errors="replace"))
    while data:
        written = os.write(fd, data)
        data = data[written:]
