import unittest

import numpy as np

from pomodoro.constants import ALERT_SOUNDS
from rewards.audio import SAMPLE_RATE_HZ, synthesize_alert
from rewards.errors import RewardDeliveryError


class SynthesizeAlertTests(unittest.TestCase):
    def test_every_known_sound_renders_bounded_mono_audio(self) -> None:
        for identifier in ALERT_SOUNDS:
            with self.subTest(identifier=identifier):
                wave = synthesize_alert(identifier, volume=0.5)
                self.assertEqual(np.float32, wave.dtype)
                self.assertEqual(1, wave.ndim)
                self.assertGreater(len(wave), SAMPLE_RATE_HZ // 10)
                self.assertLessEqual(float(np.max(np.abs(wave))), 0.5 + 1e-6)

    def test_volume_is_clamped(self) -> None:
        loud = synthesize_alert("classic_bell", volume=3.0)
        self.assertLessEqual(float(np.max(np.abs(loud))), 1.0 + 1e-6)
        silent = synthesize_alert("classic_bell", volume=0.0)
        self.assertEqual(0.0, float(np.max(np.abs(silent))))

    def test_unknown_sound_raises(self) -> None:
        with self.assertRaises(RewardDeliveryError):
            synthesize_alert("airhorn")


if __name__ == "__main__":
    unittest.main()
