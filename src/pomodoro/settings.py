"""Thread-safe settings store for per-mode durations, task label, and alert sound."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Optional

from .constants import (
    ALERT_SOUNDS,
    DEFAULT_ALERT_SOUND,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_TASK_LABEL,
    DEFAULT_WORK_MINUTES,
    MAX_TASK_LABEL_LENGTH,
    MODE_LONG_BREAK,
    MODE_SHORT_BREAK,
    MODE_WORK,
)


class SessionConfigError(ValueError):
    """Raised when a duration or alert sound update is rejected."""


@dataclass(frozen=True)
class SessionConfig:
    """Per-mode durations in whole minutes."""
    work: int = DEFAULT_WORK_MINUTES
    short: int = DEFAULT_SHORT_BREAK_MINUTES
    long: int = DEFAULT_LONG_BREAK_MINUTES

    def __post_init__(self) -> None:
        for field_name in (MODE_WORK, MODE_SHORT_BREAK, MODE_LONG_BREAK):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise SessionConfigError(
                    f"{field_name} duration must be an integer, got: {value!r}"
                )
            if value <= 0:
                raise SessionConfigError(
                    f"{field_name} duration must be greater than zero, got: {value}"
                )

    def minutes_for(self, mode: str) -> int:
        if mode == MODE_WORK:
            return self.work
        if mode == MODE_SHORT_BREAK:
            return self.short
        if mode == MODE_LONG_BREAK:
            return self.long
        raise KeyError(mode)


class SettingsStore:
    """Holds the session config plus task label and alert sound.

    Readers take a copy of the immutable ``SessionConfig``; the clock only ever
    sees the copy captured when a mode was entered.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        *,
        task_label: str = DEFAULT_TASK_LABEL,
        alert_sound: str = DEFAULT_ALERT_SOUND,
    ):
        self._lock = threading.Lock()
        self._config = config or SessionConfig()
        self._task_label = sanitize_task_label(task_label)
        self._alert_sound = _validate_alert_sound(alert_sound)

    @property
    def config(self) -> SessionConfig:
        with self._lock:
            return self._config

    @property
    def task_label(self) -> str:
        with self._lock:
            return self._task_label

    @property
    def alert_sound(self) -> str:
        with self._lock:
            return self._alert_sound

    def duration_minutes(self, mode: str) -> int:
        with self._lock:
            return self._config.minutes_for(mode)

    def update_durations(
        self,
        *,
        work: Optional[int] = None,
        short: Optional[int] = None,
        long: Optional[int] = None,
    ) -> SessionConfig:
        """Replace any given durations; an invalid value keeps the prior config."""
        changes = {
            name: value
            for name, value in (
                (MODE_WORK, work),
                (MODE_SHORT_BREAK, short),
                (MODE_LONG_BREAK, long),
            )
            if value is not None
        }
        with self._lock:
            updated = replace(self._config, **changes)
            self._config = updated
            return updated

    def set_task_label(self, label: str) -> str:
        with self._lock:
            self._task_label = sanitize_task_label(label)
            return self._task_label

    def set_alert_sound(self, identifier: str) -> str:
        sound = _validate_alert_sound(identifier)
        with self._lock:
            self._alert_sound = sound
            return sound


def sanitize_task_label(label: Optional[str]) -> str:
    compact = " ".join((label or "").split())
    compact = compact[:MAX_TASK_LABEL_LENGTH].strip()
    return compact or DEFAULT_TASK_LABEL


def _validate_alert_sound(identifier: str) -> str:
    sound = (identifier or "").strip().lower()
    if sound not in ALERT_SOUNDS:
        allowed = ", ".join(ALERT_SOUNDS)
        raise SessionConfigError(f"alert sound must be one of: {allowed}")
    return sound
