"""Mode, action, and reason constants used by focus session logic."""

from __future__ import annotations

DEFAULT_WORK_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_TASK_LABEL = "General Focus"
MAX_TASK_LABEL_LENGTH = 60

CYCLE_LENGTH = 4
TICK_INTERVAL_SECONDS = 1.0

MODE_WORK = "work"
MODE_SHORT_BREAK = "short"
MODE_LONG_BREAK = "long"

MODES: tuple[str, ...] = (MODE_WORK, MODE_SHORT_BREAK, MODE_LONG_BREAK)
BREAK_MODES: frozenset[str] = frozenset({MODE_SHORT_BREAK, MODE_LONG_BREAK})

SOUND_CLASSIC_BELL = "classic_bell"
SOUND_DIGITAL_ALERT = "digital_alert"
SOUND_ZEN_BOWL = "zen_bowl"
SOUND_ECHO_DING = "echo_ding"

ALERT_SOUNDS: tuple[str, ...] = (
    SOUND_CLASSIC_BELL,
    SOUND_DIGITAL_ALERT,
    SOUND_ZEN_BOWL,
    SOUND_ECHO_DING,
)
DEFAULT_ALERT_SOUND = SOUND_CLASSIC_BELL

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_TOGGLE = "toggle"
ACTION_RESET = "reset"
ACTION_SET_MODE = "set_mode"
ACTION_UPDATE_SETTINGS = "update_settings"
ACTION_SET_TASK = "set_task"
ACTION_SET_ALERT_SOUND = "set_alert_sound"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_MODE_CHANGED = "mode_changed"
REASON_SETTINGS_UPDATED = "settings_updated"
REASON_TASK_UPDATED = "task_updated"
REASON_ALERT_SOUND_UPDATED = "alert_sound_updated"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_INVALID_MODE = "invalid_mode"
REASON_INVALID_DURATION = "invalid_duration"
REASON_INVALID_ALERT_SOUND = "invalid_alert_sound"
REASON_UNSUPPORTED_ACTION = "unsupported_action"

REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_STARTUP = "startup"
