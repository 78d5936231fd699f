import logging
import unittest
from types import SimpleNamespace
from unittest.mock import patch

from rewards.client import RewardServiceClient
from rewards.config import RewardConfig
from rewards.errors import RewardConfigurationError, RewardDependencyError
from rewards.providers import build_reward_dispatcher


def _alerts(**overrides):
    values = dict(sound_enabled=False, notifications_enabled=False, output_device=None, volume=0.3)
    values.update(overrides)
    return SimpleNamespace(**values)


def _reward(**overrides):
    values = dict(enabled=True, base_url="http://localhost:4000/", timeout_seconds=5.0)
    values.update(overrides)
    return SimpleNamespace(**values)


class RewardConfigTests(unittest.TestCase):
    def test_from_settings_normalizes_values(self) -> None:
        config = RewardConfig.from_settings(
            _alerts(),
            _reward(),
            user_id="  student-1 ",
            api_token="   ",
        )

        self.assertEqual("http://localhost:4000", config.base_url)
        self.assertEqual("student-1", config.user_id)
        self.assertIsNone(config.api_token)

    def test_invalid_values_rejected(self) -> None:
        with self.assertRaises(RewardConfigurationError):
            RewardConfig.from_settings(_alerts(), _reward(base_url="  "))
        with self.assertRaises(RewardConfigurationError):
            RewardConfig.from_settings(_alerts(), _reward(timeout_seconds=0))
        with self.assertRaises(RewardConfigurationError):
            RewardConfig.from_settings(_alerts(volume=1.5), _reward())


class BuildRewardDispatcherTests(unittest.TestCase):
    def test_sound_failure_degrades_to_no_sound(self) -> None:
        config = RewardConfig.from_settings(_alerts(sound_enabled=True), _reward(), user_id="u1")

        with patch(
            "rewards.providers.SoundDeviceAlertPlayer",
            side_effect=RewardDependencyError("no portaudio"),
        ):
            with self.assertLogs("test", level="WARNING"):
                dispatcher = build_reward_dispatcher(config, logger=logging.getLogger("test"))

        self.addCleanup(dispatcher.shutdown)
        self.assertIsNone(dispatcher._sound_player)
        self.assertIsInstance(dispatcher._reward_client, RewardServiceClient)
        self.assertEqual("u1", dispatcher._identity.current_user().user_id)
        self.assertFalse(dispatcher._notifier.is_permitted)

    def test_reward_disabled_has_no_client(self) -> None:
        config = RewardConfig.from_settings(_alerts(), _reward(enabled=False))
        dispatcher = build_reward_dispatcher(config, logger=logging.getLogger("test"))
        self.addCleanup(dispatcher.shutdown)

        self.assertIsNone(dispatcher._reward_client)
        self.assertIsNone(dispatcher._identity.current_user())


if __name__ == "__main__":
    unittest.main()
