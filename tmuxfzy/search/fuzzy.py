"""Ordered-subsequence fuzzy matching for catalog labels.

``fuzzy_match`` finds the highest-scoring alignment of a query inside a label
and returns both the score and the matched character positions, so renderers
can highlight exactly the characters that earned the score.
"""

from __future__ import annotations

from dataclasses import dataclass

SEGMENT_SEPARATORS = "/_- ."

MATCH_SCORE = 16
BOUNDARY_BONUS = 30
CONSECUTIVE_BONUS = 24
GAP_PENALTY = 3
LEADING_PENALTY = 1
LENGTH_PENALTY_DIVISOR = 8


@dataclass(frozen=True)
class FuzzyMatch:
    """Score and strictly increasing label positions for one query match."""

    score: int
    indices: tuple[int, ...]


def is_subsequence(query: str, label: str) -> bool:
    """Return whether every query character appears in ``label`` in order."""
    pos = 0
    for needle in query:
        idx = label.find(needle, pos)
        if idx < 0:
            return False
        pos = idx + 1
    return True


def _boundary_bonus(label: str, idx: int) -> int:
    if idx == 0 or label[idx - 1] in SEGMENT_SEPARATORS:
        return BOUNDARY_BONUS
    return 0


def fuzzy_match(label: str, query: str) -> FuzzyMatch | None:
    """Match ``query`` against ``label`` as a case-sensitive ordered subsequence.

    Returns ``None`` when the query is not a subsequence. An empty query
    matches everything with score ``0`` and no indices.

    The alignment is chosen by dynamic programming so that consecutive runs,
    segment-boundary starts and early positions win over the first greedy
    subsequence. ``best[j]`` in each row holds the best score of the query
    prefix ending with the current query character placed at ``label[j]``.
    """
    if not query:
        return FuzzyMatch(score=0, indices=())
    if len(query) > len(label) or not is_subsequence(query, label):
        return None

    n = len(label)
    bonuses = [_boundary_bonus(label, j) for j in range(n)]
    parents: list[list[int]] = []
    prev_row: list[int | None] = []

    for qi, needle in enumerate(query):
        row: list[int | None] = [None] * n
        parent = [-1] * n
        # Running max of prev_row[p] + GAP_PENALTY * p over p <= j - 2.
        gap_best: int | None = None
        gap_best_idx = -1
        for j in range(n):
            if qi > 0 and j >= 2:
                p = j - 2
                candidate = prev_row[p]
                if candidate is not None:
                    shifted = candidate + GAP_PENALTY * p
                    if gap_best is None or shifted > gap_best:
                        gap_best = shifted
                        gap_best_idx = p
            if label[j] != needle:
                continue
            gained = MATCH_SCORE + bonuses[j]
            if qi == 0:
                row[j] = gained - LEADING_PENALTY * j
                continue

            best: int | None = None
            best_parent = -1
            if j >= 1 and prev_row[j - 1] is not None:
                best = prev_row[j - 1] + CONSECUTIVE_BONUS
                best_parent = j - 1
            if gap_best is not None:
                gapped = gap_best - GAP_PENALTY * (j - 1)
                if best is None or gapped > best:
                    best = gapped
                    best_parent = gap_best_idx
            if best is None:
                continue
            row[j] = best + gained
            parent[j] = best_parent
        parents.append(parent)
        prev_row = row

    end_idx = -1
    end_score: int | None = None
    for j, score in enumerate(prev_row):
        if score is not None and (end_score is None or score > end_score):
            end_score = score
            end_idx = j
    if end_score is None:
        return None

    indices = [0] * len(query)
    cursor = end_idx
    for qi in range(len(query) - 1, -1, -1):
        indices[qi] = cursor
        cursor = parents[qi][cursor]

    return FuzzyMatch(
        score=end_score - n // LENGTH_PENALTY_DIVISOR,
        indices=tuple(indices),
    )


def fuzzy_score(label: str, query: str) -> int | None:
    """Return only the best alignment score, or ``None`` when unmatched."""
    match = fuzzy_match(label, query)
    if match is None:
        return None
    return match.score
