"""Input-layer public API for key decoding and the picker state machine.

Exports are split between low-level terminal decoding (`read_key`) and the
mode-aware controller used by the runtime loop.
"""

from .controller import (
    ConfirmDestructiveMode,
    EditingMode,
    InputController,
    InputMode,
    InputOutcome,
    OutcomeKind,
)
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "ConfirmDestructiveMode",
    "EditingMode",
    "InputController",
    "InputMode",
    "InputOutcome",
    "OutcomeKind",
]
