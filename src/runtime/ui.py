from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_REWARD, EVENT_SESSION
from pomodoro import SessionCompletion, SessionSnapshot


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        ...


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        if self._ui_server:
            self._ui_server.publish_state(state, message=message, **payload)

    def publish_session_update(
        self,
        snapshot: SessionSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        message: Optional[str] = None,
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "mode": snapshot.mode,
            "remaining_seconds": snapshot.remaining_seconds,
            "duration_seconds": snapshot.duration_seconds,
            "is_running": snapshot.is_running,
            "cycle_index": snapshot.cycle_index,
            "streak_count": snapshot.streak_count,
            "task_label": snapshot.task_label,
            "alert_sound": snapshot.alert_sound,
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if message:
            payload["message"] = message
        self.publish(EVENT_SESSION, **payload)

    def publish_completion(self, completion: SessionCompletion) -> None:
        self.publish(
            EVENT_REWARD,
            completed_mode=completion.completed_mode,
            next_mode=completion.next_mode,
            cycle_index=completion.transition.cycle_index,
            streak_count=completion.transition.streak_count,
        )
