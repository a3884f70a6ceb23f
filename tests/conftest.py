"""Shared pytest setup.

Puts the repository root first on ``sys.path`` so ``import tmuxfzy`` picks up
the working tree, and clears the key reader's pushed-back bytes between
tests so one test's leftover input never leaks into another.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = str(Path(__file__).resolve().parent.parent)
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tmuxfzy.input import reader  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_pending_key_bytes():
    reader._PENDING_BYTES.clear()
    yield
    reader._PENDING_BYTES.clear()
