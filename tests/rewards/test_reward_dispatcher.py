import concurrent.futures
import logging
import threading
import unittest
from unittest.mock import Mock

from pomodoro import SessionCompletion, SessionSnapshot
from pomodoro.controller import ModeTransition
from rewards.client import RewardServiceClient
from rewards.dispatcher import RewardDispatcher, completion_notification
from rewards.errors import RewardDeliveryError
from rewards.identity import StaticIdentityProvider


def _completion(completed_mode: str, next_mode: str, *, sound: str = "zen_bowl") -> SessionCompletion:
    snapshot = SessionSnapshot(
        mode=next_mode,  # type: ignore[arg-type]
        remaining_seconds=300,
        duration_seconds=300,
        is_running=False,
        cycle_index=1,
        streak_count=1,
        task_label="General Focus",
        alert_sound=sound,
    )
    return SessionCompletion(
        transition=ModeTransition(
            completed_mode=completed_mode,
            next_mode=next_mode,
            cycle_index=1,
            streak_count=1,
        ),
        snapshot=snapshot,
    )


class RewardDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sound_player = Mock()
        self.notifier = Mock()
        self.reward_client = Mock()
        self.executor = concurrent.futures.ThreadPoolExecutor(max_workers=3)
        self.addCleanup(self.executor.shutdown, wait=True)

    def _dispatcher(self, user_id="user-1") -> RewardDispatcher:
        return RewardDispatcher(
            sound_player=self.sound_player,
            notifier=self.notifier,
            reward_client=self.reward_client,
            identity=StaticIdentityProvider(user_id),
            executor=self.executor,
            logger=logging.getLogger("test"),
        )

    def test_work_completion_fires_all_effects_once(self) -> None:
        futures = self._dispatcher().dispatch(_completion("work", "short"))
        concurrent.futures.wait(futures, timeout=5)

        self.assertEqual(3, len(futures))
        self.sound_player.play.assert_called_once_with("zen_bowl")
        self.notifier.notify.assert_called_once_with(
            "Focus Session Complete!",
            "Time for a Short Break.",
        )
        self.reward_client.award_star.assert_called_once_with("user-1")

    def test_break_completion_only_notifies(self) -> None:
        futures = self._dispatcher().dispatch(_completion("long", "work"))
        concurrent.futures.wait(futures, timeout=5)

        self.assertEqual(1, len(futures))
        self.sound_player.play.assert_not_called()
        self.reward_client.award_star.assert_not_called()
        self.notifier.notify.assert_called_once_with(
            "Break Over!",
            "Ready to dive back into focus?",
        )

    def test_missing_user_suppresses_reward_only(self) -> None:
        futures = self._dispatcher(user_id=None).dispatch(_completion("work", "long"))
        concurrent.futures.wait(futures, timeout=5)

        self.reward_client.award_star.assert_not_called()
        self.sound_player.play.assert_called_once()
        self.notifier.notify.assert_called_once_with(
            "Focus Session Complete!",
            "Time for a Long Break.",
        )

    def test_effect_failures_are_swallowed(self) -> None:
        self.sound_player.play.side_effect = RewardDeliveryError("no device")
        self.notifier.notify.side_effect = RuntimeError("boom")
        self.reward_client.award_star.side_effect = RewardDeliveryError("503")

        with self.assertLogs("test", level="WARNING") as logs:
            futures = self._dispatcher().dispatch(_completion("work", "short"))
            concurrent.futures.wait(futures, timeout=5)

        for future in futures:
            self.assertIsNone(future.exception())
        self.assertEqual(3, len(logs.records))

    def test_dispatch_does_not_wait_for_slow_effects(self) -> None:
        release = threading.Event()
        self.reward_client.award_star.side_effect = lambda _user: release.wait(5)

        futures = self._dispatcher().dispatch(_completion("work", "short"))

        self.assertFalse(all(future.done() for future in futures))
        release.set()
        concurrent.futures.wait(futures, timeout=5)

    def test_shutdown_closes_reward_client_session(self) -> None:
        http_session = Mock()
        dispatcher = RewardDispatcher(
            reward_client=RewardServiceClient("http://localhost:4000", session=http_session),
            logger=logging.getLogger("test"),
        )

        dispatcher.shutdown(wait=True)

        http_session.close.assert_called_once_with()

    def test_shutdown_keeps_shared_executor_running(self) -> None:
        self._dispatcher().shutdown(wait=True)

        self.reward_client.close.assert_called_once_with()
        self.assertEqual(7, self.executor.submit(lambda: 7).result(timeout=5))

    def test_absent_effects_are_skipped(self) -> None:
        dispatcher = RewardDispatcher(executor=self.executor, logger=logging.getLogger("test"))
        self.assertEqual([], dispatcher.dispatch(_completion("work", "short")))

    def test_completion_notification_text(self) -> None:
        self.assertEqual(
            ("Focus Session Complete!", "Time for a Long Break."),
            completion_notification(_completion("work", "long")),
        )
        self.assertEqual(
            ("Break Over!", "Ready to dive back into focus?"),
            completion_notification(_completion("short", "work")),
        )


if __name__ == "__main__":
    unittest.main()
