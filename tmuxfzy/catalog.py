"""Directory catalog built from configured search roots.

Each root is walked with ``os.walk`` and every directory whose depth relative
to the root falls inside ``[min_depth, max_depth]`` becomes a catalog entry.
The catalog is rebuilt on every run and never mutated afterwards.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RootEntry:
    """One configured search root with inclusive depth bounds."""

    path: Path
    min_depth: int = 0
    max_depth: int = 0

    def normalized(self) -> RootEntry:
        """Return a copy with non-negative depths and ``min <= max``."""
        min_depth = max(0, int(self.min_depth))
        max_depth = max(min_depth, int(self.max_depth))
        return RootEntry(path=self.path, min_depth=min_depth, max_depth=max_depth)


@dataclass(frozen=True)
class CatalogEntry:
    """A searchable directory: ``label`` is matched, ``full_path`` is opened."""

    label: str
    full_path: Path

    @classmethod
    def for_path(cls, path: Path) -> CatalogEntry:
        return cls(label=path.as_posix(), full_path=path)


def _walk_error(exc: OSError) -> None:
    logger.debug("skipping unreadable directory %s: %s", exc.filename, exc.strerror)


def iter_root_directories(root: RootEntry, *, show_hidden: bool = True) -> Iterator[Path]:
    """Yield directories under ``root`` within its depth bounds, in sorted walk order."""
    bounds = root.normalized()
    base = bounds.path
    if not base.is_dir():
        logger.warning("search root %s is not a directory", base)
        return

    base_depth = len(base.parts)
    for dirpath, dirnames, _filenames in os.walk(base, onerror=_walk_error):
        current = Path(dirpath)
        depth = len(current.parts) - base_depth
        if depth >= bounds.max_depth:
            dirnames[:] = []
        else:
            if not show_hidden:
                dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            dirnames.sort(key=str.lower)
        if depth >= bounds.min_depth:
            yield current


def build_catalog(roots: Iterable[RootEntry], *, show_hidden: bool = True) -> list[CatalogEntry]:
    """Expand all roots into catalog entries, dropping duplicate paths."""
    entries: list[CatalogEntry] = []
    seen: set[Path] = set()
    for root in roots:
        for path in iter_root_directories(root, show_hidden=show_hidden):
            if path in seen:
                continue
            seen.add(path)
            entries.append(CatalogEntry.for_path(path))
    logger.debug("catalog built with %d directories", len(entries))
    return entries
