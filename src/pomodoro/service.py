"""Focus session state machine driving the work/break cycle."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from .clock import SessionClock
from .constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SET_ALERT_SOUND,
    ACTION_SET_MODE,
    ACTION_SET_TASK,
    ACTION_START,
    ACTION_TOGGLE,
    ACTION_UPDATE_SETTINGS,
    BREAK_MODES,
    MODE_WORK,
    MODES,
    REASON_ALERT_SOUND_UPDATED,
    REASON_ALREADY_RUNNING,
    REASON_INVALID_ALERT_SOUND,
    REASON_INVALID_DURATION,
    REASON_INVALID_MODE,
    REASON_MODE_CHANGED,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_SETTINGS_UPDATED,
    REASON_STARTED,
    REASON_TASK_UPDATED,
    REASON_UNSUPPORTED_ACTION,
)
from .controller import ModeTransition, next_transition
from .settings import SessionConfig, SessionConfigError, SettingsStore

SessionMode = Literal["work", "short", "long"]
SessionAction = Literal[
    "start",
    "pause",
    "toggle",
    "reset",
    "set_mode",
    "update_settings",
    "set_task",
    "set_alert_sound",
]


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable session snapshot exposed to the runtime and UI publishers."""
    mode: SessionMode
    remaining_seconds: int
    duration_seconds: int
    is_running: bool
    cycle_index: int
    streak_count: int
    task_label: str
    alert_sound: str

    @property
    def is_break(self) -> bool:
        return self.mode in BREAK_MODES


@dataclass(frozen=True)
class SessionActionResult:
    """Result envelope returned after applying a user action."""
    action: str
    accepted: bool
    reason: str
    snapshot: SessionSnapshot


@dataclass(frozen=True)
class SessionCompletion:
    """A finished interval, handed to the reward dispatcher."""
    transition: ModeTransition
    snapshot: SessionSnapshot

    @property
    def completed_mode(self) -> str:
        return self.transition.completed_mode

    @property
    def next_mode(self) -> str:
        return self.transition.next_mode


@dataclass(frozen=True)
class SessionTick:
    """Tick payload emitted for every delivered countdown second."""
    snapshot: SessionSnapshot
    completion: Optional[SessionCompletion] = None

    @property
    def completed(self) -> bool:
        return self.completion is not None


class FocusSession:
    """Session controller owning one clock, one settings store, and the cycle state.

    The active countdown only knows the ``SessionConfig`` captured when its mode
    was entered. Later duration edits wait for the next mode entry.
    """

    def __init__(
        self,
        settings: Optional[SettingsStore] = None,
        *,
        logger: Optional[logging.Logger] = None,
        monotonic_fn: Optional[Callable[[], float]] = None,
    ):
        self._settings = settings or SettingsStore()
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.Lock()

        self._mode: SessionMode = MODE_WORK
        self._cycle_index = 1
        self._streak_count = 0
        self._entry_config: SessionConfig = self._settings.config
        self._clock = SessionClock(
            self._entry_config.minutes_for(self._mode) * 60,
            monotonic_fn=monotonic_fn,
        )

    @property
    def settings(self) -> SettingsStore:
        return self._settings

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def seconds_until_tick(self) -> Optional[float]:
        return self._clock.seconds_until_tick()

    def apply(
        self,
        action: str,
        *,
        mode: Optional[str] = None,
        work: Optional[int] = None,
        short: Optional[int] = None,
        long: Optional[int] = None,
        task_label: Optional[str] = None,
        alert_sound: Optional[str] = None,
    ) -> SessionActionResult:
        with self._lock:
            if action == ACTION_TOGGLE:
                action_to_apply = ACTION_PAUSE if self._clock.is_running else ACTION_START
                return self._apply_locked(action_to_apply, reported_action=action)

            if action == ACTION_SET_MODE:
                if mode not in MODES:
                    return self._result_locked(action, False, REASON_INVALID_MODE)
                self._enter_mode_locked(mode)
                self._logger.info(
                    "Mode switched: mode=%s remaining=%ss",
                    self._mode,
                    self._clock.remaining_seconds,
                )
                return self._result_locked(action, True, REASON_MODE_CHANGED)

            if action == ACTION_UPDATE_SETTINGS:
                try:
                    config = self._settings.update_durations(
                        work=work,
                        short=short,
                        long=long,
                    )
                except SessionConfigError as error:
                    self._logger.warning("Rejected duration update: %s", error)
                    return self._result_locked(action, False, REASON_INVALID_DURATION)
                self._logger.info(
                    "Durations updated: work=%sm short=%sm long=%sm",
                    config.work,
                    config.short,
                    config.long,
                )
                return self._result_locked(action, True, REASON_SETTINGS_UPDATED)

            if action == ACTION_SET_TASK:
                label = self._settings.set_task_label(task_label or "")
                self._logger.info("Task label set: %s", label)
                return self._result_locked(action, True, REASON_TASK_UPDATED)

            if action == ACTION_SET_ALERT_SOUND:
                try:
                    sound = self._settings.set_alert_sound(alert_sound or "")
                except SessionConfigError as error:
                    self._logger.warning("Rejected alert sound: %s", error)
                    return self._result_locked(action, False, REASON_INVALID_ALERT_SOUND)
                self._logger.info("Alert sound set: %s", sound)
                return self._result_locked(action, True, REASON_ALERT_SOUND_UPDATED)

            return self._apply_locked(action, reported_action=action)

    def tick(self) -> Optional[SessionTick]:
        """Deliver one tick immediately, bypassing the schedule."""
        with self._lock:
            if not self._clock.is_running:
                return None
            reached_zero = self._clock.tick()
            return self._tick_result_locked(reached_zero)

    def poll(self) -> Optional[SessionTick]:
        """Deliver the scheduled tick if it is due."""
        with self._lock:
            reached_zero = self._clock.poll()
            if reached_zero is None:
                return None
            return self._tick_result_locked(reached_zero)

    def _apply_locked(self, action: str, *, reported_action: str) -> SessionActionResult:
        if action == ACTION_START:
            if not self._clock.start():
                return self._result_locked(reported_action, False, REASON_ALREADY_RUNNING)
            self._logger.info(
                "Session started: mode=%s cycle=%d remaining=%ss",
                self._mode,
                self._cycle_index,
                self._clock.remaining_seconds,
            )
            return self._result_locked(reported_action, True, REASON_STARTED)

        if action == ACTION_PAUSE:
            if not self._clock.pause():
                return self._result_locked(reported_action, False, REASON_NOT_RUNNING)
            self._logger.info(
                "Session paused: mode=%s remaining=%ss",
                self._mode,
                self._clock.remaining_seconds,
            )
            return self._result_locked(reported_action, True, REASON_PAUSED)

        if action == ACTION_RESET:
            self._enter_mode_locked(self._mode)
            self._logger.info(
                "Session reset: mode=%s remaining=%ss",
                self._mode,
                self._clock.remaining_seconds,
            )
            return self._result_locked(reported_action, True, REASON_RESET)

        return self._result_locked(reported_action, False, REASON_UNSUPPORTED_ACTION)

    def _tick_result_locked(self, reached_zero: bool) -> SessionTick:
        if not reached_zero:
            return SessionTick(snapshot=self._snapshot_locked())

        transition = next_transition(
            self._mode,
            cycle_index=self._cycle_index,
            streak_count=self._streak_count,
        )
        self._cycle_index = transition.cycle_index
        self._streak_count = transition.streak_count
        self._enter_mode_locked(transition.next_mode)
        self._logger.info(
            "Interval completed: %s -> %s cycle=%d streak=%d",
            transition.completed_mode,
            transition.next_mode,
            transition.cycle_index,
            transition.streak_count,
        )
        snapshot = self._snapshot_locked()
        return SessionTick(
            snapshot=snapshot,
            completion=SessionCompletion(transition=transition, snapshot=snapshot),
        )

    def _enter_mode_locked(self, mode: SessionMode) -> None:
        self._mode = mode
        self._entry_config = self._settings.config
        self._clock.reset(self._entry_config.minutes_for(mode))

    def _result_locked(
        self,
        action: str,
        accepted: bool,
        reason: str,
    ) -> SessionActionResult:
        return SessionActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )

    def _snapshot_locked(self) -> SessionSnapshot:
        return SessionSnapshot(
            mode=self._mode,
            remaining_seconds=self._clock.remaining_seconds,
            duration_seconds=self._entry_config.minutes_for(self._mode) * 60,
            is_running=self._clock.is_running,
            cycle_index=self._cycle_index,
            streak_count=self._streak_count,
            task_label=self._settings.task_label,
            alert_sound=self._settings.alert_sound,
        )
