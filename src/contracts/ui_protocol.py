"""Web UI websocket event, state, and command constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_STATE_UPDATE = "state_update"
EVENT_SESSION = "session"
EVENT_REWARD = "reward"
EVENT_ERROR = "error"

# UI runtime states
STATE_IDLE = "idle"
STATE_FOCUSING = "focusing"
STATE_ON_BREAK = "on_break"
STATE_PAUSED = "paused"
STATE_ERROR = "error"

# Inbound commands sent by the UI as {"command": ..., ...}
COMMAND_FIELD = "command"
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_RESET = "reset"
COMMAND_SET_MODE = "set_mode"
COMMAND_UPDATE_SETTINGS = "update_settings"
COMMAND_SET_TASK = "set_task"
COMMAND_SET_ALERT_SOUND = "set_alert_sound"

UI_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_TOGGLE,
        COMMAND_RESET,
        COMMAND_SET_MODE,
        COMMAND_UPDATE_SETTINGS,
        COMMAND_SET_TASK,
        COMMAND_SET_ALERT_SOUND,
    }
)

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_STATE_UPDATE,
        EVENT_SESSION,
        EVENT_REWARD,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SESSION,
    EVENT_REWARD,
    EVENT_ERROR,
    EVENT_STATE_UPDATE,
)
