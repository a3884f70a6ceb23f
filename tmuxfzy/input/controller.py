"""Key-event state machine for the picker.

The controller is either editing the query or asking the user to confirm a
destructive action. Each mode has its own transition method; the current
mode is a small frozen value, never a string flag checked all over the loop.
No transition blocks: the slowest one is a full catalog rescan.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from ..selection import MatchResult, SelectionList
from .key_registry import KeyComboBinding, KeyComboRegistry

MOVE_UP_KEYS = ("UP", "CTRL_K", "CTRL_P")
MOVE_DOWN_KEYS = ("DOWN", "CTRL_J", "CTRL_N")
PAGE_UP_KEYS = ("CTRL_U",)
PAGE_DOWN_KEYS = ("CTRL_D",)
CONFIRM_KEYS = ("ENTER",)
CANCEL_KEYS = ("ESC", "CTRL_C")
KILL_KEYS = ("CTRL_X",)
REDRAW_KEYS = ("RESIZE", "")


@dataclass(frozen=True)
class EditingMode:
    pass


@dataclass(frozen=True)
class ConfirmDestructiveMode:
    target: MatchResult
    session_name: str

    @property
    def prompt(self) -> str:
        return f"Kill session {self.session_name!r}? [y/N]"


InputMode = Union[EditingMode, ConfirmDestructiveMode]


class OutcomeKind(enum.Enum):
    CONTINUE = "continue"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    KILL_REQUESTED = "kill-requested"


@dataclass(frozen=True)
class InputOutcome:
    """What the loop should do after one key."""

    kind: OutcomeKind
    redraw: bool = False
    result: MatchResult | None = None

    @property
    def finished(self) -> bool:
        return self.kind in {OutcomeKind.CONFIRMED, OutcomeKind.CANCELLED}


UNCHANGED = InputOutcome(OutcomeKind.CONTINUE)
REDRAW = InputOutcome(OutcomeKind.CONTINUE, redraw=True)
CANCELLED = InputOutcome(OutcomeKind.CANCELLED, redraw=True)


def is_query_character(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class InputController:
    """Translate key tokens into ``SelectionList`` edits and loop outcomes."""

    def __init__(
        self,
        selection: SelectionList,
        *,
        session_name_for: Callable[[MatchResult], str] | None = None,
        is_session_active: Callable[[str], bool] | None = None,
    ) -> None:
        self.selection = selection
        self.mode: InputMode = EditingMode()
        self._session_name_for = session_name_for
        self._is_session_active = is_session_active
        self._editing_keys: KeyComboRegistry[InputOutcome] = KeyComboRegistry()
        self._editing_keys.register_bindings(
            KeyComboBinding(MOVE_UP_KEYS, lambda: self._moved(self.selection.move_cursor(-1))),
            KeyComboBinding(MOVE_DOWN_KEYS, lambda: self._moved(self.selection.move_cursor(1))),
            KeyComboBinding(PAGE_UP_KEYS, lambda: self._moved(self.selection.page_scroll(-1))),
            KeyComboBinding(PAGE_DOWN_KEYS, lambda: self._moved(self.selection.page_scroll(1))),
            KeyComboBinding(("BACKSPACE",), self._delete_last_character),
            KeyComboBinding(CONFIRM_KEYS, self._confirm),
            KeyComboBinding(CANCEL_KEYS, lambda: CANCELLED),
            KeyComboBinding(KILL_KEYS, self._request_kill),
            KeyComboBinding(REDRAW_KEYS, lambda: REDRAW),
        )

    @property
    def confirm_prompt(self) -> str:
        if isinstance(self.mode, ConfirmDestructiveMode):
            return self.mode.prompt
        return ""

    def handle_key(self, key: str) -> InputOutcome:
        """Apply one key token in the current mode."""
        if isinstance(self.mode, ConfirmDestructiveMode):
            return self._handle_confirm_destructive_key(key, self.mode)
        return self._handle_editing_key(key)

    def _handle_editing_key(self, key: str) -> InputOutcome:
        outcome = self._editing_keys.dispatch(key)
        if outcome is not None:
            return outcome
        if is_query_character(key):
            self.selection.reset_cursor()
            self.selection.apply_query(self.selection.query + key)
            return REDRAW
        return UNCHANGED

    def _handle_confirm_destructive_key(self, key: str, mode: ConfirmDestructiveMode) -> InputOutcome:
        if key in {"y", "Y"}:
            self.mode = EditingMode()
            return InputOutcome(OutcomeKind.KILL_REQUESTED, redraw=True, result=mode.target)
        if key in {"n", "N", "ESC"}:
            self.mode = EditingMode()
            return REDRAW
        if key == "CTRL_C":
            self.mode = EditingMode()
            return CANCELLED
        if key in REDRAW_KEYS:
            return REDRAW
        return UNCHANGED

    @staticmethod
    def _moved(changed: bool) -> InputOutcome:
        return REDRAW if changed else UNCHANGED

    def _delete_last_character(self) -> InputOutcome:
        if not self.selection.query:
            return UNCHANGED
        self.selection.undo_last_edit()
        return REDRAW

    def _confirm(self) -> InputOutcome:
        selected = self.selection.selected()
        if selected is None:
            return UNCHANGED
        return InputOutcome(OutcomeKind.CONFIRMED, redraw=True, result=selected)

    def _request_kill(self) -> InputOutcome:
        selected = self.selection.selected()
        if selected is None or self._session_name_for is None or self._is_session_active is None:
            return UNCHANGED
        session_name = self._session_name_for(selected)
        if not self._is_session_active(session_name):
            return UNCHANGED
        self.mode = ConfirmDestructiveMode(target=selected, session_name=session_name)
        return REDRAW
