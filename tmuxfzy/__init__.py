"""tmux-fzy: fuzzy-pick a project directory and open it as a tmux session.

Only ``main`` is exported here; the CLI module is imported on first call.
"""

from __future__ import annotations


def main(*args, **kwargs):
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
