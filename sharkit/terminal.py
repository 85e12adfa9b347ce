"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle and alternate-screen switching. The UI talks to the
controlling tty directly so stdout stays free for the selected paths.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty
from collections.abc import Iterator

from .errors import TerminalUnavailableError

TTY_DEVICE = "/dev/tty"


class TerminalController:
    """Manage terminal mode transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalUnavailableError(f"cannot read terminal attributes: {exc}") from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalUnavailableError(f"cannot enter raw mode: {exc}") from exc
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, restore tty attributes."""
        try:
            os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        """Return the tty size, falling back to 80x24."""
        try:
            return os.get_terminal_size(self.stdout_fd)
        except OSError:
            return shutil.get_terminal_size((80, 24))

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[TerminalController]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


@contextlib.contextmanager
def open_tty(device: str = TTY_DEVICE) -> Iterator[int]:
    """Open the controlling terminal read/write and close it afterwards."""
    try:
        fd = os.open(device, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise TerminalUnavailableError(f"no terminal available ({device}: {exc.strerror or exc})") from exc
    try:
        yield fd
    finally:
        os.close(fd)
