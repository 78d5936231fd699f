from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import RewardConfigurationError


@dataclass(frozen=True)
class RewardConfig:
    sound_enabled: bool
    notifications_enabled: bool
    reward_enabled: bool

    base_url: str
    timeout_seconds: float
    api_token: Optional[str]

    output_device: Optional[int]
    volume: float

    user_id: Optional[str]

    def __post_init__(self) -> None:
        if self.reward_enabled and not self.base_url.strip():
            raise RewardConfigurationError("reward.base_url cannot be empty")
        if self.timeout_seconds <= 0:
            raise RewardConfigurationError(
                f"reward.timeout_seconds must be > 0, got: {self.timeout_seconds}"
            )
        if not 0.0 <= self.volume <= 1.0:
            raise RewardConfigurationError(
                f"alerts.volume must be in [0, 1], got: {self.volume}"
            )

    @classmethod
    def from_settings(
        cls,
        alerts,
        reward,
        *,
        user_id: str | None = None,
        api_token: str | None = None,
    ) -> "RewardConfig":
        return cls(
            sound_enabled=bool(alerts.sound_enabled),
            notifications_enabled=bool(alerts.notifications_enabled),
            reward_enabled=bool(reward.enabled),
            base_url=reward.base_url.strip().rstrip("/"),
            timeout_seconds=float(reward.timeout_seconds),
            api_token=(api_token or "").strip() or None,
            output_device=alerts.output_device,
            volume=float(alerts.volume),
            user_id=(user_id or "").strip() or None,
        )
