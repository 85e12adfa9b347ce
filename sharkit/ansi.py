"""ANSI-aware text measurement and line shaping.

Clipping, padding, and wrapping here keep escape sequences intact and count
wide characters and tabs the way a terminal does.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Cells taken by ``ch`` when it starts at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Visible column width of ``text``, ignoring escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def _cells(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(token, is_escape)``: whole escape sequences or single chars."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        for ch in text[pos : match.start()]:
            yield ch, False
        yield match.group(0), True
        pos = match.end()
    for ch in text[pos:]:
        yield ch, False


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Tabs become spaces so the clip point lines up with terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""
    pieces: list[str] = []
    col = 0
    for token, is_escape in _cells(text):
        if is_escape:
            pieces.append(token)
            continue
        w = char_display_width(token, col)
        if col + w > max_cols:
            break
        pieces.append(" " * w if token == "\t" else token)
        col += w
    return "".join(pieces)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad with spaces to exactly ``width``."""
    clipped = clip_ansi_line(text, width)
    fill = " " * max(0, width - display_width(clipped))
    if "\x1b" in clipped:
        return f"{clipped}{RESET}{fill}"
    return clipped + fill


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Break a styled line into pieces no wider than ``width`` columns."""
    if width <= 0 or not text:
        return [""]
    lines: list[str] = []
    current: list[str] = []
    col = 0
    for token, is_escape in _cells(text):
        if is_escape:
            current.append(token)
            continue
        w = char_display_width(token, col)
        if col and col + w > width:
            lines.append("".join(current))
            current, col = [], 0
            w = char_display_width(token, col)
        current.append(" " * w if token == "\t" else token)
        col += w
    lines.append("".join(current))
    return lines


def build_screen_lines(rendered: str, width: int) -> list[str]:
    """Split text into wrapped screen lines without line terminators."""
    screen: list[str] = []
    for logical in rendered.splitlines():
        screen.extend(wrap_ansi_line(logical, width))
    return screen or [""]
