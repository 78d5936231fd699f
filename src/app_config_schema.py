"""Immutable settings dataclasses parsed from config.toml."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class SessionSettings:
    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    task_label: str = "General Focus"
    alert_sound: str = "classic_bell"


@dataclass(frozen=True)
class AlertSettings:
    sound_enabled: bool = True
    notifications_enabled: bool = True
    output_device: Optional[int] = None
    volume: float = 0.3


@dataclass(frozen=True)
class RewardSettings:
    enabled: bool = True
    base_url: str = "http://localhost:4000"
    timeout_seconds: float = 5.0


@dataclass(frozen=True)
class UIServerSettings:
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    session: SessionSettings
    alerts: AlertSettings
    reward: RewardSettings
    ui_server: UIServerSettings
    source_file: str


@dataclass(frozen=True)
class SecretConfig:
    user_id: Optional[str]
    reward_api_token: Optional[str]
