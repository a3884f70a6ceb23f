"""Tests for terminal mode control sequences.

Verifies raw-mode lifecycle safety and the alternate-screen payloads the
picker relies on to leave the user's shell untouched.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from tmuxfzy.terminal import TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("tmuxfzy.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "tmuxfzy.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("tmuxfzy.terminal.os.write") as write_mock, mock.patch(
            "tmuxfzy.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            self.assertTrue(controller.tui_mode_enabled)
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[2J\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)
        self.assertFalse(controller.tui_mode_enabled)

    def test_disable_without_enable_is_noop(self) -> None:
        with mock.patch("tmuxfzy.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "tmuxfzy.terminal.os.write"
        ) as write_mock, mock.patch("tmuxfzy.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.disable_tui_mode()

        write_mock.assert_not_called()
        setattr_mock.assert_not_called()

    def test_tty_state_restored_even_if_screen_write_fails(self) -> None:
        with mock.patch("tmuxfzy.terminal.termios.tcgetattr", return_value=[7]), mock.patch(
            "tmuxfzy.terminal.tty.setraw"
        ), mock.patch("tmuxfzy.terminal.os.write", side_effect=[3, OSError("gone")]), mock.patch(
            "tmuxfzy.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            with self.assertRaises(OSError):
                controller.disable_tui_mode()

        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, [7])

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("tmuxfzy.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


if __name__ == "__main__":
    unittest.main()
