"""Runtime settings resolved from flags and environment.

There is no config file: command-line flags win, then ``SHARKIT_*``
environment variables (plus the ``NO_COLOR`` convention), then defaults.
Malformed environment values fall back to defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .syntax import DEFAULT_STYLE
from .ui_theme import normalize_theme_name

ENV_THEME = "SHARKIT_THEME"
ENV_STYLE = "SHARKIT_STYLE"
ENV_NO_PREVIEW = "SHARKIT_NO_PREVIEW"
ENV_LOG_FILE = "SHARKIT_LOG_FILE"
ENV_NO_COLOR = "NO_COLOR"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class PickerConfig:
    show_preview: bool = True
    no_color: bool = False
    theme: str = "default"
    style: str = DEFAULT_STYLE
    log_file: Path | None = None
    debug: bool = False


def _env_flag(environ: Mapping[str, str], key: str) -> bool:
    return environ.get(key, "").strip().lower() in _TRUE_VALUES


def _env_text(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key, "").strip()
    return value or None


def resolve_config(
    *,
    no_preview: bool = False,
    no_color: bool = False,
    theme: str | None = None,
    style: str | None = None,
    log_file: str | Path | None = None,
    debug: bool = False,
    environ: Mapping[str, str] | None = None,
) -> PickerConfig:
    """Merge explicit flag values over environment settings."""
    env = os.environ if environ is None else environ
    env_log_file = _env_text(env, ENV_LOG_FILE)
    resolved_log_file = log_file if log_file is not None else env_log_file
    return PickerConfig(
        show_preview=not (no_preview or _env_flag(env, ENV_NO_PREVIEW)),
        no_color=no_color or bool(env.get(ENV_NO_COLOR, "")),
        theme=normalize_theme_name(theme or _env_text(env, ENV_THEME)),
        style=style or _env_text(env, ENV_STYLE) or DEFAULT_STYLE,
        log_file=Path(resolved_log_file).expanduser() if resolved_log_file else None,
        debug=debug,
    )
