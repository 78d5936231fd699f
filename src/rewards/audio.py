"""Synthesized alert chimes played through sounddevice."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from pomodoro.constants import (
    SOUND_CLASSIC_BELL,
    SOUND_DIGITAL_ALERT,
    SOUND_ECHO_DING,
    SOUND_ZEN_BOWL,
)

from .errors import RewardDeliveryError, RewardDependencyError

SAMPLE_RATE_HZ = 44100


def _decaying_tone(
    freq_hz: float,
    duration_sec: float,
    *,
    decay: float,
    partials: tuple[tuple[float, float], ...] = ((1.0, 1.0),),
    sample_rate_hz: int = SAMPLE_RATE_HZ,
) -> np.ndarray:
    t = np.arange(int(sample_rate_hz * duration_sec)) / sample_rate_hz
    wave = np.zeros_like(t)
    for ratio, gain in partials:
        wave += gain * np.sin(2.0 * np.pi * freq_hz * ratio * t)
    wave *= np.exp(-decay * t)
    peak = np.max(np.abs(wave)) or 1.0
    return wave / peak


def _silence(duration_sec: float, sample_rate_hz: int = SAMPLE_RATE_HZ) -> np.ndarray:
    return np.zeros(int(sample_rate_hz * duration_sec))


def synthesize_alert(
    identifier: str,
    *,
    volume: float = 0.3,
    sample_rate_hz: int = SAMPLE_RATE_HZ,
) -> np.ndarray:
    """Render the chime for ``identifier`` as a mono float32 buffer."""
    if identifier == SOUND_CLASSIC_BELL:
        wave = _decaying_tone(
            880.0,
            1.6,
            decay=2.5,
            partials=((1.0, 1.0), (2.0, 0.5), (3.0, 0.25)),
            sample_rate_hz=sample_rate_hz,
        )
    elif identifier == SOUND_DIGITAL_ALERT:
        beep = _decaying_tone(1320.0, 0.12, decay=4.0, sample_rate_hz=sample_rate_hz)
        gap = _silence(0.08, sample_rate_hz)
        wave = np.concatenate([beep, gap, beep, gap, beep])
    elif identifier == SOUND_ZEN_BOWL:
        wave = _decaying_tone(
            432.0,
            3.0,
            decay=1.0,
            partials=((1.0, 1.0), (2.76, 0.4), (5.4, 0.15)),
            sample_rate_hz=sample_rate_hz,
        )
    elif identifier == SOUND_ECHO_DING:
        ding = _decaying_tone(1046.5, 0.5, decay=6.0, sample_rate_hz=sample_rate_hz)
        wave = np.concatenate([ding, 0.5 * ding, 0.25 * ding])
    else:
        raise RewardDeliveryError(f"Unknown alert sound: {identifier}")

    level = max(0.0, min(1.0, float(volume)))
    return (wave * level).astype(np.float32)


class SoundDeviceAlertPlayer:
    """Plays alert chimes through a selected sounddevice output."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        *,
        volume: float = 0.3,
        blocksize: int = 2048,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._volume = volume
        self._blocksize = blocksize
        self._logger = logger or logging.getLogger(__name__)
        self._sd = self._load_backend()

    def _load_backend(self):
        try:
            import sounddevice
        except (ImportError, OSError) as error:  # pragma: no cover - depends on audio env
            raise RewardDependencyError(
                f"sounddevice import failed ({error}). Install sounddevice and PortAudio."
            ) from error
        return sounddevice

    def play(self, identifier: str) -> None:
        wav = synthesize_alert(identifier, volume=self._volume)
        sd = self._sd
        pos = 0

        def callback(outdata, frames, time_info, status):
            nonlocal pos
            if status:
                self._logger.warning("Sounddevice status: %s", status)

            end = pos + frames
            chunk = wav[pos:end]

            if len(chunk) < frames:
                outdata[: len(chunk), 0] = chunk
                outdata[len(chunk) :, 0] = 0
                raise sd.CallbackStop()

            outdata[:, 0] = chunk
            pos = end

        try:
            with sd.OutputStream(
                channels=1,
                samplerate=SAMPLE_RATE_HZ,
                blocksize=self._blocksize,
                callback=callback,
                device=self._output_device_index,
            ):
                sd.sleep(int(len(wav) / SAMPLE_RATE_HZ * 1000) + 200)
        except Exception as error:
            raise RewardDeliveryError(f"Alert playback failed: {error}") from error
