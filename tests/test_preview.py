"""Preview derivation tests: placeholders, truncation, and read errors."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from sharkit.preview import (
    EMPTY_FILE_TEXT,
    NO_FILES_TEXT,
    PREVIEW_MAX_CHARS,
    derive_preview,
    load_preview,
)


class DerivePreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_small_file_is_returned_verbatim(self) -> None:
        path = self.root / "abc.txt"
        path.write_bytes(b"abc")

        self.assertEqual(derive_preview(path), "abc")

    def test_line_endings_are_kept(self) -> None:
        path = self.root / "crlf.txt"
        path.write_bytes(b"one\r\ntwo\r\n")

        self.assertEqual(derive_preview(path), "one\r\ntwo\r\n")

    def test_empty_file_uses_placeholder(self) -> None:
        path = self.root / "empty.txt"
        path.write_bytes(b"")

        preview = load_preview(path)

        self.assertEqual(preview.text, EMPTY_FILE_TEXT)
        self.assertEqual(preview.text, "<empty file>")
        self.assertFalse(preview.from_file)

    def test_long_file_is_truncated_with_byte_length_notice(self) -> None:
        path = self.root / "long.txt"
        path.write_text("x" * 11_000, encoding="utf-8")

        preview = derive_preview(path)

        self.assertTrue(preview.startswith("x" * PREVIEW_MAX_CHARS))
        self.assertFalse(preview.startswith("x" * (PREVIEW_MAX_CHARS + 1)))
        self.assertEqual(preview[PREVIEW_MAX_CHARS:], "\n\n... (truncated, file is 11000 bytes)")

    def test_truncation_counts_characters_and_reports_bytes(self) -> None:
        path = self.root / "wide.txt"
        path.write_text("é" * 10_001, encoding="utf-8")

        preview = derive_preview(path)

        self.assertTrue(preview.startswith("é" * PREVIEW_MAX_CHARS + "\n\n"))
        self.assertIn("20002 bytes", preview)

    def test_exactly_max_chars_is_not_truncated(self) -> None:
        path = self.root / "edge.txt"
        path.write_text("y" * PREVIEW_MAX_CHARS, encoding="utf-8")

        self.assertEqual(derive_preview(path), "y" * PREVIEW_MAX_CHARS)

    def test_missing_file_reports_error_text(self) -> None:
        preview = load_preview(self.root / "gone.txt")

        self.assertTrue(preview.text.startswith("Error reading file: "))
        self.assertIn("gone.txt", preview.text)
        self.assertFalse(preview.from_file)

    def test_invalid_utf8_reports_error_text(self) -> None:
        path = self.root / "binary.bin"
        path.write_bytes(b"\x89PNG\r\n\x1a\n\xff\x00")

        preview = derive_preview(path)

        self.assertTrue(preview.startswith("Error reading file: "))
        self.assertIn("utf-8", preview)

    def test_no_path_means_no_files(self) -> None:
        self.assertEqual(derive_preview(None), NO_FILES_TEXT)
        self.assertEqual(NO_FILES_TEXT, "no files available")

    def test_derivation_is_idempotent(self) -> None:
        path = self.root / "same.txt"
        path.write_text("hello\n", encoding="utf-8")

        self.assertEqual(load_preview(path), load_preview(path))
        self.assertTrue(load_preview(path).from_file)


if __name__ == "__main__":
    unittest.main()
