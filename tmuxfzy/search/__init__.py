"""Fuzzy search primitives used by the selection list."""

from .fuzzy import FuzzyMatch, fuzzy_match, fuzzy_score, is_subsequence

__all__ = ["FuzzyMatch", "fuzzy_match", "fuzzy_score", "is_subsequence"]
