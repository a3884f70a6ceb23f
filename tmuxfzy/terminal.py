"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle and alternate-screen switching. ``raw_mode`` is the
only way the runtime enters full-screen mode, so every exit path restores the
terminal before anything else is printed.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from collections.abc import Iterator


class TerminalController:
    """Manage terminal mode transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._tui_mode_enabled = False

    @property
    def tui_mode_enabled(self) -> bool:
        return self._tui_mode_enabled

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._tui_mode_enabled = True
        # Enter alternate screen, clear it, and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[2J\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        if not self._tui_mode_enabled:
            return
        self._tui_mode_enabled = False
        try:
            # Show cursor and restore the main screen buffer.
            os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
