"""Key-token dispatch table for the picker modes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeyComboBinding(Generic[T]):
    """Key tokens that all trigger the same zero-argument ``handler``."""

    combos: tuple[str, ...]
    handler: Callable[[], T]


class KeyComboRegistry(Generic[T]):
    """Token -> handler table; a later binding for a token replaces the earlier one."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], T]] = {}

    def register_bindings(self, *bindings: KeyComboBinding[T]) -> KeyComboRegistry[T]:
        for binding in bindings:
            self._handlers.update(dict.fromkeys(binding.combos, binding.handler))
        return self

    def dispatch(self, key: str) -> T | None:
        """Run the handler bound to ``key`` and return its result, or ``None``."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
