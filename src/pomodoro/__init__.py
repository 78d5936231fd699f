from .clock import SessionClock
from .controller import ModeTransition, next_transition
from .service import (
    FocusSession,
    SessionAction,
    SessionActionResult,
    SessionCompletion,
    SessionMode,
    SessionSnapshot,
    SessionTick,
)
from .settings import SessionConfig, SessionConfigError, SettingsStore

__all__ = [
    "FocusSession",
    "ModeTransition",
    "SessionAction",
    "SessionActionResult",
    "SessionClock",
    "SessionCompletion",
    "SessionConfig",
    "SessionConfigError",
    "SessionMode",
    "SessionSnapshot",
    "SessionTick",
    "SettingsStore",
    "next_transition",
]
