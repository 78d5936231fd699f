"""One-second cooperative countdown clock with a cancellable tick schedule."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from .constants import TICK_INTERVAL_SECONDS


class SessionClock:
    """Countdown that loses one second per delivered tick while running.

    User actions (``start``, ``pause``, ``reset``) bump the schedule generation,
    so a tick that was already due under an older generation is dropped instead
    of racing the action.
    """

    def __init__(
        self,
        duration_seconds: int,
        *,
        monotonic_fn: Optional[Callable[[], float]] = None,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
    ):
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be greater than zero")

        self._monotonic = monotonic_fn or time.monotonic
        self._tick_interval = float(tick_interval_seconds)
        self._lock = threading.Lock()

        self._remaining_seconds = int(duration_seconds)
        self._is_running = False
        self._generation = 0
        self._next_tick_at: Optional[float] = None

    @property
    def remaining_seconds(self) -> int:
        with self._lock:
            return self._remaining_seconds

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._is_running

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def start(self) -> bool:
        """Start counting down; returns False if already running or at zero."""
        with self._lock:
            if self._is_running or self._remaining_seconds <= 0:
                return False
            self._is_running = True
            self._generation += 1
            self._next_tick_at = self._monotonic() + self._tick_interval
            return True

    def pause(self) -> bool:
        """Stop counting down; returns False if the clock was already stopped."""
        with self._lock:
            if not self._is_running:
                return False
            self._cancel_schedule_locked()
            return True

    def toggle(self) -> bool:
        """Pause when running, otherwise start; returns the new running state."""
        if self.pause():
            return False
        return self.start()

    def reset(self, duration_minutes: int) -> None:
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        with self._lock:
            self._cancel_schedule_locked()
            self._remaining_seconds = int(duration_minutes) * 60

    def tick(self, generation: Optional[int] = None) -> bool:
        """Apply one tick; returns True only for the tick that reaches zero.

        ``generation`` identifies the schedule the tick was issued under; ticks
        from a cancelled schedule are ignored.
        """
        with self._lock:
            if not self._is_running:
                return False
            if generation is not None and generation != self._generation:
                return False
            if self._remaining_seconds <= 0:
                return False

            self._remaining_seconds -= 1
            if self._remaining_seconds > 0:
                self._next_tick_at = self._monotonic() + self._tick_interval
            else:
                self._next_tick_at = None
            return self._remaining_seconds == 0

    def due_generation(self) -> Optional[int]:
        """Return the schedule generation if a tick is due now, else None."""
        with self._lock:
            if not self._is_running or self._next_tick_at is None:
                return None
            if self._monotonic() < self._next_tick_at:
                return None
            return self._generation

    def poll(self) -> Optional[bool]:
        """Deliver at most one due tick.

        Returns None when no tick was due, otherwise the result of ``tick``.
        """
        generation = self.due_generation()
        if generation is None:
            return None
        return self.tick(generation)

    def seconds_until_tick(self) -> Optional[float]:
        with self._lock:
            if not self._is_running or self._next_tick_at is None:
                return None
            return max(0.0, self._next_tick_at - self._monotonic())

    def _cancel_schedule_locked(self) -> None:
        self._is_running = False
        self._generation += 1
        self._next_tick_at = None
