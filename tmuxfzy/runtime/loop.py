"""Main interactive event loop for the picker.

Each iteration checks the terminal size, redraws when something changed, and
feeds one key token to the ``InputController``. The read timeout only drives
the query cursor blink; nothing correctness-relevant depends on it.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..input import InputController, OutcomeKind
from ..render import RenderContext, list_rows, scroll_list_start
from ..selection import MatchResult, SelectionList
from ..terminal import TerminalController
from ..ui_theme import UITheme


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    cursor_blink_seconds: float


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected I/O used by ``run_main_loop``.

    Keeping the loop callback-driven keeps terminal and tmux access out of
    the loop body and makes it easy to drive from tests.
    """

    read_key: Callable[[int, int | None], str]
    render: Callable[[RenderContext], None]
    terminal_size: Callable[[], os.terminal_size]
    kill_session: Callable[[str], None]
    list_sessions: Callable[[], list[str]]


@dataclass
class PickerState:
    selection: SelectionList
    theme: UITheme
    session_names: dict[str, str] = field(default_factory=dict)
    active_sessions: frozenset[str] = field(default_factory=frozenset)
    list_start: int = 0
    dirty: bool = True
    cursor_visible: bool = True
    last_size: tuple[int, int] | None = None


def run_main_loop(
    state: PickerState,
    controller: InputController,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> MatchResult | None:
    """Run the picker until the user confirms or cancels.

    Returns the confirmed result, or ``None`` on cancel. Exceptions from
    callbacks propagate after ``raw_mode`` has restored the terminal.
    """
    ops = callbacks
    blink_ms = max(1, int(timing.cursor_blink_seconds * 1000))

    with terminal.raw_mode():
        while True:
            term = ops.terminal_size()
            size = (term.columns, term.lines)
            if size != state.last_size:
                state.last_size = size
                if controller.handle_key("RESIZE").redraw:
                    state.dirty = True

            blink_phase = (int(time.monotonic() / timing.cursor_blink_seconds) % 2) == 0
            if blink_phase != state.cursor_visible:
                state.cursor_visible = blink_phase
                state.dirty = True

            confirm_prompt = controller.confirm_prompt
            rows = list_rows(term.lines, confirm_prompt=bool(confirm_prompt))
            selection = state.selection
            list_start = scroll_list_start(state.list_start, selection.cursor, rows, len(selection))
            if list_start != state.list_start:
                state.list_start = list_start
                state.dirty = True

            if state.dirty:
                ops.render(
                    RenderContext(
                        selection=selection,
                        theme=state.theme,
                        width=term.columns,
                        height=term.lines,
                        list_start=state.list_start,
                        cursor_visible=state.cursor_visible,
                        active_sessions=state.active_sessions,
                        session_names=state.session_names,
                        confirm_prompt=confirm_prompt,
                        stdout_fd=terminal.stdout_fd,
                    )
                )
                state.dirty = False

            key = ops.read_key(stdin_fd, blink_ms)
            outcome = controller.handle_key(key)
            if outcome.kind is OutcomeKind.CONFIRMED:
                return outcome.result
            if outcome.kind is OutcomeKind.CANCELLED:
                return None
            if outcome.kind is OutcomeKind.KILL_REQUESTED and outcome.result is not None:
                session_name = state.session_names.get(outcome.result.entry.label)
                if session_name:
                    ops.kill_session(session_name)
                    state.active_sessions = frozenset(ops.list_sessions())
            if outcome.redraw:
                state.dirty = True
