"""Directory scanning and catalog construction.

Turns one directory listing into the fixed, sorted entry sequence a picker
session works on. Only regular files (or symlinks to them) become entries.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import DirectoryListingError
from .gitignore import IgnoreMatcher, NullIgnoreMatcher, build_ignore_matcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One selectable file.

    Entries are immutable; a session changes selection by swapping in a copy
    with a different ``selected`` flag.
    """

    name: str
    path: Path
    hidden: bool = False
    ignored: bool = False
    selected: bool = False

    @classmethod
    def for_path(cls, path: Path, ignored: bool = False) -> Entry:
        name = path.name
        return cls(name=name, path=path, hidden=name.startswith("."), ignored=ignored)


def catalog_sort_key(entry: Entry) -> tuple[bool, str, str]:
    """Non-hidden before hidden, then case-insensitive name."""
    return (entry.hidden, entry.name.lower(), entry.name)


def build_catalog(entries: Iterable[Entry]) -> list[Entry]:
    """Return ``entries`` in catalog order."""
    return sorted(entries, key=catalog_sort_key)


def _is_text_name(name: str) -> bool:
    """Reject names carrying undecodable bytes (surrogate escapes)."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def list_directory_entries(
    directory: Path,
    ignore_matcher: IgnoreMatcher | None = None,
) -> list[Entry]:
    """List regular files in ``directory`` as unsorted entries.

    Directories, symlinks to directories, dangling links, and children whose
    type cannot be probed are skipped. Raises ``DirectoryListingError`` when
    ``directory`` itself cannot be scanned.
    """
    matcher = ignore_matcher if ignore_matcher is not None else NullIgnoreMatcher()
    out: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                if not _is_text_name(name):
                    logger.debug("skipping entry with undecodable name in %s", directory)
                    continue
                try:
                    if not child.is_file():
                        continue
                except OSError:
                    continue
                path = directory / name
                ignored = matcher.is_ignored(Path(os.path.abspath(child.path)))
                out.append(Entry.for_path(path, ignored=ignored))
    except OSError as exc:
        raise DirectoryListingError(f"cannot list {directory}: {exc.strerror or exc}") from exc
    return out


def load_catalog(directory: Path) -> list[Entry]:
    """Build the ignore matcher, scan ``directory``, and sort the result."""
    matcher = build_ignore_matcher(directory)
    entries = build_catalog(list_directory_entries(directory, matcher))
    logger.info(
        "catalog for %s: %d files (%d hidden, %d ignored)",
        directory,
        len(entries),
        sum(1 for entry in entries if entry.hidden),
        sum(1 for entry in entries if entry.ignored),
    )
    return entries
