"""Thin wrapper over the tmux command line.

Every operation is one fixed ``tmux`` (or ``pgrep``) invocation. Exit status
is the only success signal, apart from reading session names out of
``list-sessions``. Foreground commands inherit the terminal, so callers must
leave raw mode before executing an action.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path

from .errors import EnvironmentQueryError, SessionListDecodeError, TmuxCommandError
from .session import SessionAction, SessionActionKind, SessionFacts

logger = logging.getLogger(__name__)

TMUX_ENV_VAR = "TMUX"


def _stderr_text(proc: subprocess.CompletedProcess) -> str:
    raw = proc.stderr or b""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return raw.strip()


class TmuxClient:
    """Issue tmux commands for session queries and actions."""

    def __init__(self, executable: str = "tmux", environ: Mapping[str, str] | None = None) -> None:
        self.executable = executable
        self.environ = os.environ if environ is None else environ

    def _query(self, cmd: list[str]) -> subprocess.CompletedProcess:
        logger.debug("query: %s", shlex.join(cmd))
        try:
            return subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=False)
        except OSError as exc:
            raise EnvironmentQueryError(f"could not run `{shlex.join(cmd)}`") from exc

    def _action(self, args: list[str], *, foreground: bool = False) -> None:
        cmd = [self.executable, *args]
        logger.info("run: %s", shlex.join(cmd))
        try:
            if foreground:
                proc = subprocess.run(cmd, check=False)
            else:
                proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=False)
        except OSError as exc:
            raise TmuxCommandError(cmd, None, str(exc)) from exc
        if proc.returncode != 0:
            raise TmuxCommandError(cmd, proc.returncode, "" if foreground else _stderr_text(proc))

    def inside_tmux(self) -> bool:
        return TMUX_ENV_VAR in self.environ

    def server_running(self) -> bool:
        """Return whether a process named exactly like the tmux executable is alive.

        ``-x`` keeps ``tmux-fzy`` itself from counting as a server.
        """
        proc = self._query(["pgrep", "-x", os.path.basename(self.executable)])
        if proc.returncode != 0:
            return False
        return bool(proc.stdout.strip())

    def has_session(self, name: str) -> bool:
        proc = self._query([self.executable, "has-session", "-t", f"={name}"])
        return proc.returncode == 0

    def list_sessions(self) -> list[str]:
        """Return running session names; an absent server yields ``[]``."""
        cmd = [self.executable, "list-sessions", "-F", "#{session_name}"]
        proc = self._query(cmd)
        if proc.returncode != 0:
            logger.debug("list-sessions exited %s: %s", proc.returncode, _stderr_text(proc))
            return []
        try:
            text = proc.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SessionListDecodeError("tmux list-sessions output is not valid UTF-8") from exc
        return [line for line in text.splitlines() if line]

    def new_session(self, name: str, path: Path) -> None:
        self._action(["new-session", "-s", name, "-c", str(path)], foreground=True)

    def new_session_detached(self, name: str, path: Path) -> None:
        self._action(["new-session", "-d", "-s", name, "-c", str(path)])

    def attach(self, name: str) -> None:
        self._action(["attach-session", "-t", name], foreground=True)

    def switch_client(self, name: str) -> None:
        self._action(["switch-client", "-t", name])

    def kill_session(self, name: str) -> None:
        self._action(["kill-session", "-t", f"={name}"])

    def gather_facts(self, name: str) -> SessionFacts:
        """Sample the three facts the resolver needs, fresh on every call."""
        daemon_running = self.server_running()
        inside = self.inside_tmux()
        exists = self.has_session(name) if daemon_running else False
        facts = SessionFacts(
            daemon_running=daemon_running,
            inside_multiplexer=inside,
            target_session_exists=exists,
        )
        logger.debug("session facts for %s: %s", name, facts)
        return facts

    def execute(self, action: SessionAction) -> None:
        """Run the tmux command(s) for ``action`` sequentially."""
        kind = action.kind
        if kind is SessionActionKind.CREATE_FOREGROUND:
            self.new_session(action.session_name, action.path)
        elif kind is SessionActionKind.ATTACH_FOREGROUND:
            self.attach(action.session_name)
        elif kind is SessionActionKind.SWITCH_FOREGROUND:
            self.switch_client(action.session_name)
        elif kind is SessionActionKind.CREATE_DETACHED_THEN_SWITCH:
            self.new_session_detached(action.session_name, action.path)
            self.switch_client(action.session_name)
        else:
            logger.warning(
                "$%s is set but no tmux server is running; not opening %s",
                TMUX_ENV_VAR,
                action.session_name,
            )
