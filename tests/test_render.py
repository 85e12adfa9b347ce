"""Frame rendering tests for list, preview, and footer panes."""

from __future__ import annotations

import os
import unittest
from unittest import mock

from sharkit.ansi import display_width, strip_ansi
from sharkit.render import ListViewport, list_scroll_start, preview_pane_lines, render_frame, write_frame
from sharkit.session import DisplayRow, DisplaySnapshot
from sharkit.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _snapshot(**overrides) -> DisplaySnapshot:
    values = dict(
        rows=(
            DisplayRow(text=" [✓] app.py", dim=False, selected=True),
            DisplayRow(text=" [ ] build.log", dim=True, selected=False),
            DisplayRow(text=" [ ] .env", dim=True, selected=False),
        ),
        cursor=0,
        preview_title="Preview: app.py",
        preview_text="print('hi')\nsecond line",
        show_preview=True,
        selected_count=1,
        preview_filename="app.py",
        preview_from_file=True,
    )
    values.update(overrides)
    return DisplaySnapshot(**values)


def _screen_rows(frame: str) -> list[str]:
    assert frame.startswith("\033[H\033[J")
    return frame[len("\033[H\033[J"):].split("\r\n")


class RenderFrameTests(unittest.TestCase):
    def test_frame_fills_every_cell(self) -> None:
        frame = render_frame(_snapshot(), 80, 20, DEFAULT_THEME)

        rows = _screen_rows(frame)
        self.assertEqual(len(rows), 20)
        for row in rows:
            self.assertEqual(display_width(row), 80)

    def test_plain_frame_shows_list_preview_and_footer(self) -> None:
        frame = render_frame(_snapshot(), 100, 20, PLAIN_THEME, highlight=False)
        plain = strip_ansi(frame)

        self.assertIn("sharkit", plain)
        self.assertIn("› " + " [✓] app.py", plain)
        self.assertIn("[ ] build.log", plain)
        self.assertIn("Preview: app.py", plain)
        self.assertIn("print('hi')", plain)
        self.assertIn("second line", plain)
        self.assertIn("Controls", plain)
        self.assertIn("1 selected", plain)

    def test_hidden_preview_omits_preview_pane(self) -> None:
        frame = render_frame(_snapshot(show_preview=False), 100, 20, PLAIN_THEME, highlight=False)
        plain = strip_ansi(frame)

        self.assertNotIn("Preview: app.py", plain)
        self.assertNotIn("print('hi')", plain)
        self.assertIn("app.py", plain)

    def test_dim_rows_use_dim_style_and_cursor_uses_highlight(self) -> None:
        frame = render_frame(_snapshot(), 100, 20, DEFAULT_THEME, highlight=False)

        self.assertIn(DEFAULT_THEME.entry_dim + "   [ ] build.log", frame)
        self.assertIn(DEFAULT_THEME.cursor + "›  [✓] app.py", frame)

    def test_placeholder_preview_is_not_highlighted(self) -> None:
        snapshot = _snapshot(preview_text="<empty file>", preview_from_file=False)

        with mock.patch("sharkit.render.highlight_preview") as highlight_mock:
            render_frame(snapshot, 100, 20, DEFAULT_THEME)

        highlight_mock.assert_not_called()

    def test_file_preview_is_highlighted_with_style(self) -> None:
        with mock.patch("sharkit.render.highlight_preview", return_value="colored") as highlight_mock:
            frame = render_frame(_snapshot(), 100, 20, DEFAULT_THEME, style="native")

        highlight_mock.assert_called_once_with("print('hi')\nsecond line", "app.py", "native")
        self.assertIn("colored", frame)

    def test_control_bytes_in_preview_are_escaped(self) -> None:
        snapshot = _snapshot(preview_text="bell\x07here")

        frame = render_frame(snapshot, 100, 20, PLAIN_THEME, highlight=False)

        self.assertIn("bell\\x07here", frame)
        self.assertNotIn("\x07", frame)

    def test_list_scrolls_to_keep_cursor_visible(self) -> None:
        rows = tuple(DisplayRow(text=f" [ ] file{idx:02d}", dim=False, selected=False) for idx in range(40))
        snapshot = _snapshot(rows=rows, cursor=35, show_preview=False)

        plain = strip_ansi(render_frame(snapshot, 60, 20, PLAIN_THEME, highlight=False))

        self.assertIn("file35", plain)
        self.assertNotIn("file00", plain)

    def test_empty_catalog_renders_placeholder(self) -> None:
        snapshot = _snapshot(
            rows=(),
            cursor=None,
            preview_title="Preview",
            preview_text="no files available",
            preview_filename="",
            preview_from_file=False,
            selected_count=0,
        )

        plain = strip_ansi(render_frame(snapshot, 80, 20, PLAIN_THEME))

        self.assertIn("no files available", plain)
        self.assertIn("0 selected", plain)

    def test_tiny_terminal_still_renders(self) -> None:
        for width, height in ((1, 1), (3, 2), (10, 4)):
            rows = _screen_rows(render_frame(_snapshot(), width, height, PLAIN_THEME, highlight=False))
            self.assertEqual(len(rows), height)


class ListScrollTests(unittest.TestCase):
    def test_scroll_start(self) -> None:
        self.assertEqual(list_scroll_start(None, 10), 0)
        self.assertEqual(list_scroll_start(3, 10), 0)
        self.assertEqual(list_scroll_start(9, 10), 0)
        self.assertEqual(list_scroll_start(10, 10), 1)
        self.assertEqual(list_scroll_start(5, 0), 0)

    def test_scroll_start_keeps_offset_while_cursor_is_visible(self) -> None:
        self.assertEqual(list_scroll_start(25, 10, offset=20), 20)
        self.assertEqual(list_scroll_start(19, 10, offset=20), 19)
        self.assertEqual(list_scroll_start(30, 10, offset=20), 21)

    def test_moving_up_does_not_scroll_until_cursor_leaves_window(self) -> None:
        rows = tuple(DisplayRow(text=f" [ ] file{idx:02d}", dim=False, selected=False) for idx in range(40))
        viewport = ListViewport()

        def visible_names(cursor: int) -> list[str]:
            frame = render_frame(
                _snapshot(rows=rows, cursor=cursor, show_preview=False), 40, 20, PLAIN_THEME, viewport=viewport
            )
            body = _screen_rows(strip_ansi(frame))[1:14]
            return [line.strip("│ ›").split("] ")[-1] for line in body]

        self.assertEqual(visible_names(39)[0], "file27")
        self.assertEqual(viewport.offset, 27)
        self.assertEqual(visible_names(30)[0], "file27")
        self.assertEqual(visible_names(27)[0], "file27")
        self.assertEqual(visible_names(26)[0], "file26")
        self.assertEqual(visible_names(0)[0], "file00")

    def test_viewport_clamps_when_pane_grows(self) -> None:
        rows = tuple(DisplayRow(text=f" [ ] file{idx:02d}", dim=False, selected=False) for idx in range(20))
        viewport = ListViewport(offset=15)

        render_frame(_snapshot(rows=rows, cursor=19, show_preview=False), 40, 30, PLAIN_THEME, viewport=viewport)

        self.assertEqual(viewport.offset, 0)


class PreviewPaneTests(unittest.TestCase):
    def test_highlighted_preview_keeps_leading_blank_lines(self) -> None:
        snapshot = _snapshot(preview_text="\n\nfirst\n  second", preview_filename="app.py")

        plain = preview_pane_lines(snapshot, 40, 10, highlight=False)
        colored = preview_pane_lines(snapshot, 40, 10, highlight=True)

        self.assertEqual(plain, ["", "", "first", "  second"])
        self.assertEqual([strip_ansi(line) for line in colored], plain)


class WriteFrameTests(unittest.TestCase):
    def test_write_frame_encodes_utf8(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            write_frame(write_fd, "› ok")
            data = os.read(read_fd, 64)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(data, "› ok".encode("utf-8"))


if __name__ == "__main__":
    unittest.main()
