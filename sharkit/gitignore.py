"""Gitignore-aware path matching for catalog entries.

Parses ``.gitignore`` with pathspec's gitignore rules.
Building a matcher never fails: missing or broken pattern files yield a
matcher that ignores nothing.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pathspec

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"


class IgnoreMatcher(Protocol):
    def is_ignored(self, path: Path) -> bool: ...


def _absolute(path: Path) -> Path:
    """Return an absolute, normalized path without resolving symlinks."""
    return Path(os.path.abspath(path))


class NullIgnoreMatcher:
    """Matcher used when no usable ignore rules exist."""

    def is_ignored(self, path: Path) -> bool:
        return False

    def __repr__(self) -> str:
        return "NullIgnoreMatcher()"


@dataclass(frozen=True)
class PathSpecMatcher:
    """Compiled gitignore rules anchored at ``root``.

    A path counts as ignored when it matches directly or when any of its
    parent directories (below ``root``) matches a directory rule.
    """

    root: Path
    spec: pathspec.PathSpec

    def is_ignored(self, path: Path) -> bool:
        candidate = _absolute(path if path.is_absolute() else self.root / path)
        try:
            relative = candidate.relative_to(self.root)
        except ValueError:
            return False
        parts = relative.parts
        if not parts:
            return False
        for depth in range(1, len(parts)):
            parent = "/".join(parts[:depth]) + "/"
            if self.spec.match_file(parent):
                return True
        return self.spec.match_file("/".join(parts))


def load_gitignore_lines(root: Path) -> list[str]:
    """Read raw pattern lines from ``root/.gitignore``.

    Raises ``OSError`` or ``UnicodeDecodeError`` when the file is unusable.
    """
    gitignore_path = root / GITIGNORE_FILENAME
    return gitignore_path.read_text(encoding="utf-8").splitlines()


def build_ignore_matcher(root: Path) -> IgnoreMatcher:
    """Return the ignore matcher for ``root``, falling back to ``NullIgnoreMatcher``."""
    root = _absolute(root)
    try:
        lines = load_gitignore_lines(root)
    except FileNotFoundError:
        return NullIgnoreMatcher()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("ignoring unreadable %s in %s: %s", GITIGNORE_FILENAME, root, exc)
        return NullIgnoreMatcher()

    try:
        spec = pathspec.GitIgnoreSpec.from_lines(lines)
    except (ValueError, TypeError) as exc:
        logger.debug("ignoring unparsable %s in %s: %s", GITIGNORE_FILENAME, root, exc)
        return NullIgnoreMatcher()
    return PathSpecMatcher(root=root, spec=spec)
