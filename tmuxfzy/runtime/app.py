"""Runtime composition layer for tmux-fzy.

Builds the catalog and initial state, wires the loop to the terminal and
tmux, and turns a confirmed directory into a tmux session action once the
terminal is back in normal mode.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Sequence
from pathlib import Path

from ..catalog import CatalogEntry, build_catalog
from ..errors import ConfigError, SessionNameError, TmuxFzyError
from ..input import InputController, read_key
from ..render import render_frame
from ..selection import MatchResult, SelectionList
from ..session import SessionAction, resolve_session_action, session_name_for_path
from ..terminal import TerminalController
from ..tmux import TmuxClient
from ..ui_theme import UITheme, resolve_theme
from .config import load_colors, load_roots, load_show_hidden, load_theme_name
from .loop import PickerState, RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

logger = logging.getLogger(__name__)

CURSOR_BLINK_SECONDS = 0.5
MATCH_WORKERS = min(8, os.cpu_count() or 1)


def session_names_for(entries: Sequence[CatalogEntry]) -> dict[str, str]:
    """Map each entry label to its session name, skipping unnameable paths."""
    names: dict[str, str] = {}
    for entry in entries:
        try:
            names[entry.label] = session_name_for_path(entry.full_path)
        except SessionNameError:
            logger.debug("no session name for %s", entry.full_path)
    return names


def open_session(path: Path, tmux: TmuxClient) -> SessionAction:
    """Resolve and execute the session action for ``path`` with fresh facts."""
    session_name = session_name_for_path(path)
    facts = tmux.gather_facts(session_name)
    action = resolve_session_action(facts, session_name, path)
    logger.info("opening %s via %s", path, action.kind.value)
    tmux.execute(action)
    return action


def run_picker(
    entries: Sequence[CatalogEntry],
    theme: UITheme,
    tmux: TmuxClient,
    *,
    stdin_fd: int,
    stdout_fd: int,
) -> MatchResult | None:
    """Run the interactive picker and return the confirmed entry, if any."""
    session_names = session_names_for(entries)
    selection = SelectionList(entries, workers=MATCH_WORKERS)
    state = PickerState(
        selection=selection,
        theme=theme,
        session_names=session_names,
        active_sessions=frozenset(tmux.list_sessions()),
    )
    controller = InputController(
        selection,
        session_name_for=lambda result: session_names.get(result.entry.label, ""),
        is_session_active=lambda name: bool(name) and name in state.active_sessions,
    )
    terminal = TerminalController(stdin_fd=stdin_fd, stdout_fd=stdout_fd)
    return run_main_loop(
        state,
        controller,
        terminal,
        stdin_fd,
        RuntimeLoopTiming(cursor_blink_seconds=CURSOR_BLINK_SECONDS),
        RuntimeLoopCallbacks(
            read_key=read_key,
            render=render_frame,
            terminal_size=lambda: shutil.get_terminal_size((80, 24)),
            kill_session=tmux.kill_session,
            list_sessions=tmux.list_sessions,
        ),
    )


def run_app(theme_name: str | None = None, no_color: bool = False) -> SessionAction | None:
    """Launch the picker and open the chosen directory in tmux.

    Returns the executed action, or ``None`` when the user cancelled.
    """
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise TmuxFzyError("tmux-fzy needs an interactive terminal")

    roots = load_roots()
    if not roots:
        raise ConfigError("no search roots configured; add one with `tmux-fzy add PATH`")

    theme = resolve_theme(
        theme_name if theme_name is not None else load_theme_name(),
        no_color=no_color,
        colors=load_colors(),
    )
    entries = build_catalog(roots, show_hidden=load_show_hidden())
    tmux = TmuxClient()

    chosen = run_picker(
        entries,
        theme,
        tmux,
        stdin_fd=sys.stdin.fileno(),
        stdout_fd=sys.stdout.fileno(),
    )
    if chosen is None:
        logger.debug("picker cancelled")
        return None
    return open_session(chosen.entry.full_path, tmux)
