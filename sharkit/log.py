"""Logging setup.

The terminal belongs to the picker UI, so log records only ever go to a
file. Without a log file the package stays silent.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .errors import LogSetupError

APP_NAME = "sharkit"
LOG_FILENAME = "sharkit.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_PACKAGE_LOGGER = logging.getLogger(APP_NAME)


def default_log_path() -> Path:
    """Per-user log file location used by ``--debug`` without ``--log-file``."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(log_file: Path | None = None, debug: bool = False) -> Path | None:
    """Attach the package log handler and return the file being written, if any.

    Calling again replaces the handler installed by a previous call. Raises
    ``LogSetupError`` when the log file cannot be created.
    """
    for handler in list(_PACKAGE_LOGGER.handlers):
        _PACKAGE_LOGGER.removeHandler(handler)
        handler.close()
    _PACKAGE_LOGGER.propagate = False

    target = log_file
    if target is None and debug:
        target = default_log_path()
    if target is None:
        _PACKAGE_LOGGER.addHandler(logging.NullHandler())
        return None

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError as exc:
        _PACKAGE_LOGGER.addHandler(logging.NullHandler())
        raise LogSetupError(f"cannot open log file {target}: {exc.strerror or exc}") from exc
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _PACKAGE_LOGGER.addHandler(handler)
    _PACKAGE_LOGGER.setLevel(logging.DEBUG if debug else logging.INFO)
    return target
