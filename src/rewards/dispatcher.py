"""Fire-and-forget side effects for completed focus intervals."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Callable, Optional, Protocol

from pomodoro import SessionCompletion
from pomodoro.constants import MODE_LONG_BREAK, MODE_WORK

from .errors import RewardError
from .identity import IdentityProvider

WORK_COMPLETE_TITLE = "Focus Session Complete!"
BREAK_COMPLETE_TITLE = "Break Over!"
BREAK_COMPLETE_BODY = "Ready to dive back into focus?"


class AlertPlayerLike(Protocol):
    def play(self, identifier: str) -> None:
        ...


class NotifierLike(Protocol):
    def notify(self, title: str, body: str) -> bool:
        ...


class RewardClientLike(Protocol):
    def award_star(self, user_id: str) -> None:
        ...

    def close(self) -> None:
        ...


def completion_notification(completion: SessionCompletion) -> tuple[str, str]:
    """Return the notification title and body for a finished interval."""
    if completion.completed_mode == MODE_WORK:
        break_name = "Long Break" if completion.next_mode == MODE_LONG_BREAK else "Short Break"
        return WORK_COMPLETE_TITLE, f"Time for a {break_name}."
    return BREAK_COMPLETE_TITLE, BREAK_COMPLETE_BODY


class RewardDispatcher:
    """Submits completion side effects to a worker pool without waiting on them.

    Work completions play the alert sound, notify, and request a star for the
    current user. Break completions only notify.
    """

    def __init__(
        self,
        *,
        sound_player: Optional[AlertPlayerLike] = None,
        notifier: Optional[NotifierLike] = None,
        reward_client: Optional[RewardClientLike] = None,
        identity: Optional[IdentityProvider] = None,
        executor: Optional[concurrent.futures.Executor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._sound_player = sound_player
        self._notifier = notifier
        self._reward_client = reward_client
        self._identity = identity
        self._owns_executor = executor is None
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=3,
            thread_name_prefix="reward",
        )
        self._logger = logger or logging.getLogger("rewards")

    def dispatch(self, completion: SessionCompletion) -> list[concurrent.futures.Future[None]]:
        """Queue every applicable effect for ``completion`` and return immediately."""
        futures: list[concurrent.futures.Future[None]] = []
        is_work = completion.completed_mode == MODE_WORK

        if is_work and self._sound_player is not None:
            sound = completion.snapshot.alert_sound
            futures.extend(self._submit("alert sound", self._sound_player.play, sound))

        if self._notifier is not None:
            title, body = completion_notification(completion)
            futures.extend(self._submit("notification", self._notifier.notify, title, body))

        if is_work:
            futures.extend(self._submit_reward())

        return futures

    def shutdown(self, *, wait: bool = False) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=not wait)
        if self._reward_client is not None:
            self._reward_client.close()

    def _submit_reward(self) -> list[concurrent.futures.Future[None]]:
        if self._reward_client is None:
            return []
        user = self._identity.current_user() if self._identity is not None else None
        if user is None:
            self._logger.debug("No signed-in user; skipping star award")
            return []
        return self._submit("star award", self._reward_client.award_star, user.user_id)

    def _submit(
        self,
        name: str,
        effect: Callable[..., object],
        *args: object,
    ) -> list[concurrent.futures.Future[None]]:
        def run() -> None:
            try:
                effect(*args)
            except RewardError as error:
                self._logger.warning("Completion %s failed: %s", name, error)
            except Exception as error:
                self._logger.error("Completion %s crashed: %s", name, error, exc_info=True)

        try:
            return [self._executor.submit(run)]
        except RuntimeError as error:
            # Executor may be shutting down.
            self._logger.warning("Could not queue completion %s: %s", name, error)
            return []
