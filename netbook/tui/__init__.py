"""Interactive terminal interface."""

from .app import TuiApp, run_tui, run_execution
from .events import (
    EventChannel,
    KeyPressed,
    ExecutionStarted,
    ExecutionCompleted,
    ExecutionFailed,
    QuitRequested,
)
from .keys import KeyCode, KeyEvent, translate_key
from .state import AppMode, AppState, ResponseTab
from .terminal import SessionTerminal

__all__ = [
    "TuiApp",
    "run_tui",
    "run_execution",
    "EventChannel",
    "KeyPressed",
    "ExecutionStarted",
    "ExecutionCompleted",
    "ExecutionFailed",
    "QuitRequested",
    "KeyCode",
    "KeyEvent",
    "translate_key",
    "AppMode",
    "AppState",
    "ResponseTab",
    "SessionTerminal",
]
