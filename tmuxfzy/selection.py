"""Ranked selection list with cursor, paging, and edit-undo history.

``SelectionList`` owns the currently matching catalog entries ordered by
descending score, the cursor into that list, and a stack of previous ranked
sets. Typing a character pushes the current set and rescans the whole
catalog; backspace pops the stack, so deleting a character restores exactly
what was shown before it was typed.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from .catalog import CatalogEntry
from .search.fuzzy import fuzzy_match

PAGE_SIZE = 5
PARALLEL_MIN_ENTRIES = 2_000


@dataclass(frozen=True)
class MatchResult:
    """One catalog entry that matched the current query."""

    entry: CatalogEntry
    score: int
    matched_indices: tuple[int, ...]


RankedSet = tuple[MatchResult, ...]


@dataclass(frozen=True)
class _Snapshot:
    query: str
    ranked: RankedSet
    cursor: int | None


def _match_entry(entry: CatalogEntry, query: str) -> MatchResult | None:
    match = fuzzy_match(entry.label, query)
    if match is None:
        return None
    return MatchResult(entry=entry, score=match.score, matched_indices=match.indices)


def rank_entries(
    entries: Sequence[CatalogEntry],
    query: str,
    *,
    workers: int = 1,
) -> RankedSet:
    """Match every entry against ``query`` and order hits by descending score.

    With ``workers > 1`` and at least ``PARALLEL_MIN_ENTRIES`` entries the
    matching runs on a thread pool. ``Executor.map`` yields results in input
    order, so the ranked set is identical to the sequential one and equal
    scores keep catalog order either way.
    """
    if workers > 1 and len(entries) >= PARALLEL_MIN_ENTRIES:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tmuxfzy-match") as executor:
            results = list(executor.map(_match_entry, entries, [query] * len(entries)))
    else:
        results = [_match_entry(entry, query) for entry in entries]
    matched = [result for result in results if result is not None]
    matched.sort(key=lambda result: -result.score)
    return tuple(matched)


class SelectionList:
    """Interactive ranked list driven by query edits and cursor keys."""

    def __init__(self, entries: Sequence[CatalogEntry], *, workers: int = 1) -> None:
        self.entries: tuple[CatalogEntry, ...] = tuple(entries)
        self.workers = max(1, workers)
        self.query = ""
        self.ranked: RankedSet = rank_entries(self.entries, "", workers=self.workers)
        self.cursor: int | None = 0 if self.ranked else None
        self.history: list[_Snapshot] = []

    def __len__(self) -> int:
        return len(self.ranked)

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def history_depth(self) -> int:
        return len(self.history)

    def selected(self) -> MatchResult | None:
        if self.cursor is None:
            return None
        return self.ranked[self.cursor]

    def apply_query(self, query: str) -> None:
        """Rescan the full catalog for ``query`` and push the previous set."""
        self.history.append(_Snapshot(query=self.query, ranked=self.ranked, cursor=self.cursor))
        self.query = query
        self.ranked = rank_entries(self.entries, query, workers=self.workers)
        self.cursor = 0 if self.ranked else None

    def undo_last_edit(self) -> bool:
        """Restore the ranked set from before the most recent ``apply_query``.

        The snapshot's query, ranked set and cursor come back verbatim.
        Returns ``False`` without changing anything when history is empty.
        """
        if not self.history:
            return False
        snapshot = self.history.pop()
        self.query = snapshot.query
        self.ranked = snapshot.ranked
        self.cursor = snapshot.cursor
        return True

    def reset_cursor(self) -> None:
        self.cursor = 0 if self.ranked else None

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows, clamped to the list bounds."""
        if self.cursor is None:
            return False
        previous = self.cursor
        self.cursor = max(0, min(len(self.ranked) - 1, self.cursor + delta))
        return self.cursor != previous

    def page_scroll(self, pages: int) -> bool:
        """Move the cursor by whole pages of ``PAGE_SIZE`` rows, clamping at the edges."""
        return self.move_cursor(pages * PAGE_SIZE)

    def visible_window(self, viewport_height: int) -> range:
        """Return the index range that needs highlighting for this viewport."""
        if self.cursor is None:
            return range(0)
        height = max(0, viewport_height)
        start = max(0, self.cursor - height)
        stop = min(len(self.ranked), self.cursor + height)
        return range(start, stop)
