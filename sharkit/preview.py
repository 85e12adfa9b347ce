"""Preview text derivation for the entry under the cursor.

Every outcome is displayable text: read failures become an in-pane message
rather than an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PREVIEW_MAX_CHARS = 10_000
NO_FILES_TEXT = "no files available"
EMPTY_FILE_TEXT = "<empty file>"


@dataclass(frozen=True)
class PreviewText:
    """Derived preview plus whether it came from the file itself.

    Placeholders and error messages have ``from_file`` set to ``False`` so the
    renderer does not syntax-highlight them.
    """

    text: str
    from_file: bool = False


def read_preview_source(path: Path) -> str:
    """Read ``path`` as strict UTF-8 text, keeping line endings verbatim."""
    return path.read_bytes().decode("utf-8")


def truncation_notice(byte_length: int) -> str:
    return f"\n\n... (truncated, file is {byte_length} bytes)"


def format_preview(content: str) -> str:
    """Shape file content into preview text (empty placeholder, truncation)."""
    if not content:
        return EMPTY_FILE_TEXT
    if len(content) > PREVIEW_MAX_CHARS:
        byte_length = len(content.encode("utf-8"))
        return content[:PREVIEW_MAX_CHARS] + truncation_notice(byte_length)
    return content


def load_preview(path: Path | None) -> PreviewText:
    """Derive the preview for ``path``; ``None`` means the catalog is empty."""
    if path is None:
        return PreviewText(NO_FILES_TEXT)
    try:
        content = read_preview_source(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("preview read failed for %s: %s", path, exc)
        return PreviewText(f"Error reading file: {exc}")
    if not content:
        return PreviewText(EMPTY_FILE_TEXT)
    return PreviewText(format_preview(content), from_file=True)


def derive_preview(path: Path | None) -> str:
    """Return just the preview text for ``path``."""
    return load_preview(path).text
