"""Persistent JSON config helpers.

Stores search roots with their depth bounds, color overrides, and the theme.
Reads are defensive: a missing or malformed file behaves like an empty one.
Writes raise ``ConfigError`` so ``add``/``del`` never report false success.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from ..catalog import RootEntry
from ..errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "tmux-fzy"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "tmux-fzy.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"could not write config file {CONFIG_PATH}") from exc


def _coerce_nonnegative_int(value: object) -> int:
    """Normalize JSON scalars for depth bounds; invalid values become ``0``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def load_roots() -> list[RootEntry]:
    """Load configured search roots, dropping malformed entries."""
    value = load_config().get("roots")
    if not isinstance(value, list):
        return []

    roots: list[RootEntry] = []
    for raw in value:
        if not isinstance(raw, dict):
            continue
        raw_path = raw.get("path")
        if not isinstance(raw_path, str) or not raw_path:
            continue
        roots.append(
            RootEntry(
                path=Path(raw_path),
                min_depth=_coerce_nonnegative_int(raw.get("min_depth", 0)),
                max_depth=_coerce_nonnegative_int(raw.get("max_depth", 0)),
            ).normalized()
        )
    return roots


def save_roots(roots: Iterable[RootEntry]) -> None:
    """Persist search roots in configured order."""
    serialized = []
    for root in roots:
        normalized = root.normalized()
        serialized.append(
            {
                "path": str(normalized.path),
                "min_depth": normalized.min_depth,
                "max_depth": normalized.max_depth,
            }
        )
    config = load_config()
    config["roots"] = serialized
    save_config(config)


def add_roots(paths: Iterable[Path], min_depth: int, max_depth: int) -> list[RootEntry]:
    """Add canonicalized ``paths`` as roots; already-known paths keep their bounds.

    Returns the roots that were newly added.
    """
    roots = load_roots()
    known = {root.path for root in roots}
    added: list[RootEntry] = []
    for path in paths:
        try:
            resolved = path.resolve(strict=True)
        except OSError as exc:
            raise ConfigError(f"cannot add {str(path)!r}: path does not exist") from exc
        if not resolved.is_dir():
            raise ConfigError(f"cannot add {str(path)!r}: not a directory")
        if resolved in known:
            continue
        root = RootEntry(path=resolved, min_depth=min_depth, max_depth=max_depth).normalized()
        roots.append(root)
        known.add(resolved)
        added.append(root)
    save_roots(roots)
    return added


def remove_roots(paths: Iterable[Path]) -> list[RootEntry]:
    """Remove roots matching canonicalized ``paths`` and return the removed ones."""
    targets = {path.resolve() for path in paths}
    roots = load_roots()
    kept = [root for root in roots if root.path not in targets]
    removed = [root for root in roots if root.path in targets]
    save_roots(kept)
    return removed


def load_colors() -> dict[str, object]:
    """Return raw color overrides; validation happens in ``ui_theme``."""
    value = load_config().get("colors")
    return dict(value) if isinstance(value, dict) else {}


def load_theme_name() -> str | None:
    value = load_config().get("theme")
    return value if isinstance(value, str) else None


def load_show_hidden() -> bool:
    """Return whether hidden directories are catalogued (default ``True``)."""
    value = load_config().get("show_hidden")
    return bool(value) if isinstance(value, bool) else True
