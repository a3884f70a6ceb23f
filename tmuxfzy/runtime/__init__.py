"""Runtime package: config persistence, event loop, and app composition."""

from .app import open_session, run_app, run_picker
from .loop import PickerState, RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

__all__ = [
    "open_session",
    "run_app",
    "run_picker",
    "PickerState",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "run_main_loop",
]
