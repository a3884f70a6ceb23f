"""Runtime loop tests driven by scripted key tokens.

The terminal and tmux are replaced with fakes so each test exercises the
loop's outcome handling, redraw bookkeeping and raw-mode bracketing.
"""

from __future__ import annotations

import contextlib
import os
import unittest
from collections.abc import Iterator
from pathlib import Path
from unittest import mock

from tmuxfzy.catalog import CatalogEntry
from tmuxfzy.input import InputController
from tmuxfzy.runtime.loop import PickerState, RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from tmuxfzy.selection import SelectionList
from tmuxfzy.ui_theme import PLAIN_THEME


class _FakeTerminal:
    def __init__(self, stdout_fd: int = 9) -> None:
        self.stdout_fd = stdout_fd
        self.events: list[str] = []

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.events.append("enter")
        try:
            yield
        finally:
            self.events.append("exit")


def _scripted_keys(keys: list[str]):
    pending = list(keys)

    def read_key(_fd: int, _timeout_ms: int | None = None) -> str:
        if not pending:
            raise AssertionError("loop asked for more keys than scripted")
        return pending.pop(0)

    return read_key


class RuntimeLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        entries = [
            CatalogEntry(label="/home/a/proj1", full_path=Path("/home/a/proj1")),
            CatalogEntry(label="/home/a/proj2", full_path=Path("/home/a/proj2")),
        ]
        self.session_names = {"/home/a/proj1": "proj1", "/home/a/proj2": "proj2"}
        self.selection = SelectionList(entries)
        self.state = PickerState(
            selection=self.selection,
            theme=PLAIN_THEME,
            session_names=self.session_names,
            active_sessions=frozenset({"proj1"}),
        )
        self.controller = InputController(
            self.selection,
            session_name_for=lambda result: self.session_names[result.entry.label],
            is_session_active=lambda name: name in self.state.active_sessions,
        )
        self.terminal = _FakeTerminal()
        self.render = mock.Mock()
        self.kill_session = mock.Mock()
        self.list_sessions = mock.Mock(return_value=[])

    def _run(self, keys: list[str], sizes: list[tuple[int, int]] | None = None):
        size_iter = iter(sizes or [])
        current = [os.terminal_size((80, 24))]

        def terminal_size() -> os.terminal_size:
            nxt = next(size_iter, None)
            if nxt is not None:
                current[0] = os.terminal_size(nxt)
            return current[0]

        callbacks = RuntimeLoopCallbacks(
            read_key=_scripted_keys(keys),
            render=self.render,
            terminal_size=terminal_size,
            kill_session=self.kill_session,
            list_sessions=self.list_sessions,
        )
        return run_main_loop(
            self.state,
            self.controller,
            self.terminal,
            0,
            RuntimeLoopTiming(cursor_blink_seconds=0.5),
            callbacks,
        )

    def test_enter_returns_selected_entry(self) -> None:
        result = self._run(["DOWN", "ENTER"])

        self.assertIsNotNone(result)
        self.assertEqual(result.entry.full_path, Path("/home/a/proj2"))
        self.assertEqual(self.terminal.events, ["enter", "exit"])
        self.render.assert_called()

    def test_typed_query_filters_before_confirm(self) -> None:
        result = self._run(["2", "ENTER"])

        self.assertEqual(result.entry.label, "/home/a/proj2")

    def test_escape_returns_none(self) -> None:
        self.assertIsNone(self._run(["ESC"]))
        self.assertEqual(self.terminal.events, ["enter", "exit"])

    def test_confirmed_kill_calls_tmux_and_refreshes_sessions(self) -> None:
        result = self._run(["CTRL_X", "y", "ESC"])

        self.assertIsNone(result)
        self.kill_session.assert_called_once_with("proj1")
        self.list_sessions.assert_called_once_with()
        self.assertEqual(self.state.active_sessions, frozenset())

    def test_declined_kill_leaves_sessions_alone(self) -> None:
        self._run(["CTRL_X", "n", "ESC"])

        self.kill_session.assert_not_called()
        self.assertEqual(self.state.active_sessions, frozenset({"proj1"}))

    def test_confirm_prompt_is_rendered_while_confirming(self) -> None:
        self._run(["CTRL_X", "ESC", "ESC"])

        prompts = [call.args[0].confirm_prompt for call in self.render.call_args_list]
        self.assertIn("Kill session 'proj1'? [y/N]", prompts)

    def test_frames_target_the_terminal_stdout_fd(self) -> None:
        self._run(["ESC"])

        fds = {call.args[0].stdout_fd for call in self.render.call_args_list}
        self.assertEqual(fds, {self.terminal.stdout_fd})

    def test_resize_triggers_render_with_new_size(self) -> None:
        self._run(["UNKNOWN", "ESC"], sizes=[(80, 24), (100, 30)])

        widths = [call.args[0].width for call in self.render.call_args_list]
        self.assertEqual(widths[0], 80)
        self.assertIn(100, widths)

    def test_exception_from_callback_restores_terminal(self) -> None:
        def boom(_fd: int, _timeout_ms: int | None = None) -> str:
            raise RuntimeError("read failed")

        callbacks = RuntimeLoopCallbacks(
            read_key=boom,
            render=self.render,
            terminal_size=lambda: os.terminal_size((80, 24)),
            kill_session=self.kill_session,
            list_sessions=self.list_sessions,
        )

        with self.assertRaises(RuntimeError):
            run_main_loop(
                self.state,
                self.controller,
                self.terminal,
                0,
                RuntimeLoopTiming(cursor_blink_seconds=0.5),
                callbacks,
            )

        self.assertEqual(self.terminal.events, ["enter", "exit"])


if __name__ == "__main__":
    unittest.main()
