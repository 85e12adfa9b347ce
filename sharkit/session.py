"""Selection session: cursor, per-entry selection, and preview state.

The session owns its entry list outright; every mutation goes through the
methods below. ``snapshot()`` turns the current state into the display model
consumed by ``sharkit.render``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from .catalog import Entry, build_catalog
from .preview import PreviewText, load_preview

SELECTED_MARK = "✓"


@dataclass(frozen=True)
class DisplayRow:
    """One list row as the renderer sees it."""

    text: str
    dim: bool
    selected: bool


@dataclass(frozen=True)
class DisplaySnapshot:
    """Everything the renderer needs for one frame."""

    rows: tuple[DisplayRow, ...]
    cursor: int | None
    preview_title: str
    preview_text: str
    show_preview: bool
    selected_count: int
    preview_filename: str = ""
    preview_from_file: bool = False

    @property
    def total_count(self) -> int:
        return len(self.rows)


def entry_is_dim(entry: Entry) -> bool:
    """Hidden and ignored entries render dimmed."""
    return entry.hidden or entry.ignored


def entry_display_line(entry: Entry) -> str:
    mark = SELECTED_MARK if entry.selected else " "
    return f" [{mark}] {entry.name}"


class SelectionSession:
    """Navigation and multi-selection state over a fixed catalog.

    ``preview_content`` is recomputed eagerly whenever the cursor moves, so it
    always describes the entry under the cursor.
    """

    def __init__(
        self,
        entries: Iterable[Entry],
        *,
        show_preview: bool = True,
        preview_loader: Callable[[Path | None], PreviewText] = load_preview,
    ) -> None:
        self._entries: list[Entry] = build_catalog(entries)
        self._preview_loader = preview_loader
        self.cursor = 0
        self.show_preview = show_preview
        self.preview_content = ""
        self.preview_from_file = False
        self._refresh_preview()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def current_entry(self) -> Entry | None:
        if not self._entries:
            return None
        return self._entries[self.cursor]

    def _refresh_preview(self) -> None:
        current = self.current_entry()
        preview = self._preview_loader(current.path if current is not None else None)
        self.preview_content = preview.text
        self.preview_from_file = preview.from_file

    def _set_selected(self, index: int, selected: bool) -> None:
        entry = self._entries[index]
        if entry.selected != selected:
            self._entries[index] = replace(entry, selected=selected)

    def move_up(self) -> None:
        if not self._entries:
            return
        if self.cursor == 0:
            self.cursor = len(self._entries) - 1
        else:
            self.cursor -= 1
        self._refresh_preview()

    def move_down(self) -> None:
        if not self._entries:
            return
        self.cursor = (self.cursor + 1) % len(self._entries)
        self._refresh_preview()

    def toggle_current(self) -> None:
        if not self._entries:
            return
        self._set_selected(self.cursor, not self._entries[self.cursor].selected)

    def select_all(self) -> None:
        for idx in range(len(self._entries)):
            self._set_selected(idx, True)

    def select_none(self) -> None:
        for idx in range(len(self._entries)):
            self._set_selected(idx, False)

    def select_only_index(self, n: int) -> None:
        """Select exactly the entry at ordinal ``n`` and move the cursor there.

        Ordinals past the end clamp to the last entry.
        """
        if not self._entries:
            return
        self.select_none()
        idx = max(0, min(n, len(self._entries) - 1))
        self._set_selected(idx, True)
        self.cursor = idx
        self._refresh_preview()

    def select_last(self) -> None:
        if not self._entries:
            return
        self.select_only_index(len(self._entries) - 1)

    def toggle_preview(self) -> None:
        self.show_preview = not self.show_preview

    def selected_paths(self) -> list[Path]:
        return [entry.path for entry in self._entries if entry.selected]

    def selected_count(self) -> int:
        return sum(1 for entry in self._entries if entry.selected)

    def snapshot(self) -> DisplaySnapshot:
        rows = tuple(
            DisplayRow(
                text=entry_display_line(entry),
                dim=entry_is_dim(entry),
                selected=entry.selected,
            )
            for entry in self._entries
        )
        current = self.current_entry()
        return DisplaySnapshot(
            rows=rows,
            cursor=self.cursor if current is not None else None,
            preview_title=f"Preview: {current.name}" if current is not None else "Preview",
            preview_text=self.preview_content,
            show_preview=self.show_preview,
            selected_count=self.selected_count(),
            preview_filename=current.name if current is not None else "",
            preview_from_file=self.preview_from_file,
        )
