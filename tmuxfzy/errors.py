"""Exception hierarchy for tmux-fzy.

Every failure that should reach the user derives from ``TmuxFzyError``.
The CLI prints these after the terminal has been restored.
"""

from __future__ import annotations


class TmuxFzyError(Exception):
    """Base class for user-facing tmux-fzy failures."""


class ConfigError(TmuxFzyError):
    """Raised when roots cannot be added, removed, or persisted."""


class SessionNameError(TmuxFzyError):
    """Raised when a directory cannot be turned into a tmux session name."""


class EnvironmentQueryError(TmuxFzyError):
    """Raised when tmux liveness or session queries cannot be executed."""


class SessionListDecodeError(EnvironmentQueryError):
    """Raised when ``tmux list-sessions`` output is not valid UTF-8."""


class TmuxCommandError(TmuxFzyError):
    """Raised when a tmux action fails to run or exits non-zero."""

    def __init__(self, args: list[str], returncode: int | None, detail: str = "") -> None:
        self.command = list(args)
        self.returncode = returncode
        self.detail = detail
        message = f"`{' '.join(args)}` failed"
        if returncode is not None:
            message += f" with exit status {returncode}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


def format_error_chain(exc: BaseException) -> list[str]:
    """Return ``exc`` followed by each chained cause, one message per entry."""
    messages: list[str] = []
    current: BaseException | None = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(str(current) or type(current).__name__)
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__
    return messages
