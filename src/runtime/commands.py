"""Dispatcher that applies normalized UI commands to the focus session."""

from __future__ import annotations

import logging
from typing import Any, Optional

from contracts.ui_protocol import (
    COMMAND_FIELD,
    COMMAND_PAUSE,
    COMMAND_RESET,
    COMMAND_SET_ALERT_SOUND,
    COMMAND_SET_MODE,
    COMMAND_SET_TASK,
    COMMAND_START,
    COMMAND_TOGGLE,
    COMMAND_UPDATE_SETTINGS,
)
from pomodoro import FocusSession, SessionActionResult
from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SET_ALERT_SOUND,
    ACTION_SET_MODE,
    ACTION_SET_TASK,
    ACTION_START,
    ACTION_TOGGLE,
    ACTION_UPDATE_SETTINGS,
    REASON_INVALID_DURATION,
)

from .messages import rejection_text, session_status_message, session_ui_state
from .ui import RuntimeUIPublisher

COMMAND_TO_SESSION_ACTION: dict[str, str] = {
    COMMAND_START: ACTION_START,
    COMMAND_PAUSE: ACTION_PAUSE,
    COMMAND_TOGGLE: ACTION_TOGGLE,
    COMMAND_RESET: ACTION_RESET,
    COMMAND_SET_MODE: ACTION_SET_MODE,
    COMMAND_UPDATE_SETTINGS: ACTION_UPDATE_SETTINGS,
    COMMAND_SET_TASK: ACTION_SET_TASK,
    COMMAND_SET_ALERT_SOUND: ACTION_SET_ALERT_SOUND,
}

_DURATION_FIELDS = ("work", "short", "long")


class RuntimeCommandHandler:
    """Routes UI commands to session actions and publishes the outcome."""
    def __init__(
        self,
        *,
        session: FocusSession,
        ui: RuntimeUIPublisher,
        logger: logging.Logger,
    ):
        self._session = session
        self._ui = ui
        self._logger = logger

    def handle_command(self, command: dict[str, Any]) -> Optional[SessionActionResult]:
        raw_name = command.get(COMMAND_FIELD)
        action = COMMAND_TO_SESSION_ACTION.get(raw_name) if isinstance(raw_name, str) else None
        if action is None:
            self._logger.warning("Unsupported UI command: %s", raw_name)
            return None

        if action == ACTION_UPDATE_SETTINGS:
            durations = _parse_durations(command)
            if durations is None:
                result = SessionActionResult(
                    action=action,
                    accepted=False,
                    reason=REASON_INVALID_DURATION,
                    snapshot=self._session.snapshot(),
                )
            else:
                result = self._session.apply(action, **durations)
        elif action == ACTION_SET_MODE:
            result = self._session.apply(action, mode=_as_text(command.get("mode")))
        elif action == ACTION_SET_TASK:
            result = self._session.apply(action, task_label=_as_text(command.get("task_label")))
        elif action == ACTION_SET_ALERT_SOUND:
            result = self._session.apply(
                action,
                alert_sound=_as_text(command.get("alert_sound")),
            )
        else:
            result = self._session.apply(action)

        self.publish_result(result)
        return result

    def publish_result(self, result: SessionActionResult) -> None:
        if result.accepted:
            message = session_status_message(result.snapshot)
        else:
            message = rejection_text(result.action, result.reason)
        self._ui.publish_session_update(
            result.snapshot,
            action=result.action,
            accepted=result.accepted,
            reason=result.reason,
            message=message,
        )
        if result.accepted:
            self._ui.publish_state(session_ui_state(result.snapshot), message=message)


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip()
    return None


def _parse_durations(command: dict[str, Any]) -> Optional[dict[str, int]]:
    """Extract whole-minute durations; None when any given value is not an integer."""
    durations: dict[str, int] = {}
    for field in _DURATION_FIELDS:
        if field not in command:
            continue
        value = command[field]
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            durations[field] = value
        elif isinstance(value, float) and value.is_integer():
            durations[field] = int(value)
        elif isinstance(value, str):
            try:
                durations[field] = int(value.strip())
            except ValueError:
                return None
        else:
            return None
    return durations
