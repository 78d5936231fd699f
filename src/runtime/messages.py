"""Status and rejection text builders for focus session flows."""

from __future__ import annotations

from pomodoro import SessionSnapshot
from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_SET_MODE,
    ACTION_START,
    MODE_LONG_BREAK,
    MODE_SHORT_BREAK,
    MODE_WORK,
    REASON_ALREADY_RUNNING,
    REASON_INVALID_ALERT_SOUND,
    REASON_INVALID_DURATION,
    REASON_INVALID_MODE,
    REASON_NOT_RUNNING,
)
from contracts.ui_protocol import STATE_FOCUSING, STATE_IDLE, STATE_ON_BREAK, STATE_PAUSED

MODE_LABELS: dict[str, str] = {
    MODE_WORK: "Focus",
    MODE_SHORT_BREAK: "Break",
    MODE_LONG_BREAK: "Long Break",
}


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def mode_label(mode: str) -> str:
    return MODE_LABELS.get(mode, mode)


def session_ui_state(snapshot: SessionSnapshot) -> str:
    if snapshot.is_running:
        return STATE_ON_BREAK if snapshot.is_break else STATE_FOCUSING
    if snapshot.remaining_seconds < snapshot.duration_seconds:
        return STATE_PAUSED
    return STATE_IDLE


def session_status_message(snapshot: SessionSnapshot) -> str:
    """Build one-line status text for the current session snapshot."""
    label = mode_label(snapshot.mode)
    remaining = format_duration(snapshot.remaining_seconds)
    state = session_ui_state(snapshot)
    if state == STATE_FOCUSING:
        return f"Focus on '{snapshot.task_label}' ({remaining} remaining)"
    if state == STATE_ON_BREAK:
        return f"{label} ({remaining} remaining)"
    if state == STATE_PAUSED:
        return f"{label} paused ({remaining} remaining)"
    return f"Ready for {label.lower()} ({remaining})"


def rejection_text(action: str, reason: str) -> str:
    """Return user-facing text for a rejected session action."""
    if reason == REASON_ALREADY_RUNNING and action == ACTION_START:
        return "The timer is already running."
    if reason == REASON_NOT_RUNNING and action == ACTION_PAUSE:
        return "The timer is not running."
    if reason == REASON_INVALID_MODE and action == ACTION_SET_MODE:
        return "Unknown mode. Choose work, short, or long."
    if reason == REASON_INVALID_DURATION:
        return "Durations must be whole minutes greater than zero."
    if reason == REASON_INVALID_ALERT_SOUND:
        return "Unknown alert sound."
    return "That action is not possible right now."
