"""Map tmux environment facts to a single session action.

The decision is an exhaustive table over the three boolean facts rather than
a chain of conditionals, so every combination has exactly one written answer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from .errors import SessionNameError

_SESSION_NAME_REPLACEMENTS = str.maketrans({".": "_", ":": "_"})


class SessionActionKind(enum.Enum):
    CREATE_FOREGROUND = "create-foreground"
    ATTACH_FOREGROUND = "attach-foreground"
    CREATE_DETACHED_THEN_SWITCH = "create-detached-then-switch"
    SWITCH_FOREGROUND = "switch-foreground"
    NO_OP = "no-op"


@dataclass(frozen=True)
class SessionFacts:
    """Environment facts sampled at confirm time."""

    daemon_running: bool
    inside_multiplexer: bool
    target_session_exists: bool


@dataclass(frozen=True)
class SessionAction:
    """Resolved action plus the session name and directory it applies to."""

    kind: SessionActionKind
    session_name: str
    path: Path


# (daemon_running, inside_multiplexer, target_session_exists) -> action
SESSION_ACTION_TABLE: dict[tuple[bool, bool, bool], SessionActionKind] = {
    (False, False, False): SessionActionKind.CREATE_FOREGROUND,
    (False, False, True): SessionActionKind.CREATE_FOREGROUND,
    (True, False, False): SessionActionKind.CREATE_FOREGROUND,
    (True, False, True): SessionActionKind.ATTACH_FOREGROUND,
    (True, True, True): SessionActionKind.SWITCH_FOREGROUND,
    (True, True, False): SessionActionKind.CREATE_DETACHED_THEN_SWITCH,
    # $TMUX is set but no server answers: inconsistent environment.
    (False, True, False): SessionActionKind.NO_OP,
    (False, True, True): SessionActionKind.NO_OP,
}


def resolve_session_action(facts: SessionFacts, session_name: str, path: Path) -> SessionAction:
    """Return the one action that applies to ``facts``."""
    key = (
        bool(facts.daemon_running),
        bool(facts.inside_multiplexer),
        bool(facts.target_session_exists),
    )
    return SessionAction(kind=SESSION_ACTION_TABLE[key], session_name=session_name, path=path)


def session_name_for_path(path: Path) -> str:
    """Derive the tmux session name for ``path`` from its basename.

    tmux rewrites ``.`` and ``:`` in session names, so they are replaced up
    front to keep ``has-session`` lookups consistent with created names.
    """
    name = path.name
    if not name:
        raise SessionNameError(f"cannot derive a session name from {str(path)!r}")
    return name.translate(_SESSION_NAME_REPLACEMENTS)
