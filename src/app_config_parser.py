"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AlertSettings,
    AppConfig,
    AppConfigurationError,
    RewardSettings,
    SessionSettings,
    UIServerSettings,
)
from pomodoro.constants import ALERT_SOUNDS


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        session=_parse_session_settings(_section(raw, "session")),
        alerts=_parse_alert_settings(_section(raw, "alerts")),
        reward=_parse_reward_settings(_section(raw, "reward")),
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir),
        source_file=source_file,
    )


def _parse_session_settings(section: Mapping[str, Any]) -> SessionSettings:
    alert_sound = _as_str(
        section.get("alert_sound", "classic_bell"),
        "session.alert_sound",
    ).lower()
    if alert_sound not in ALERT_SOUNDS:
        allowed = ", ".join(ALERT_SOUNDS)
        raise AppConfigurationError(f"session.alert_sound must be one of: {allowed}")

    return SessionSettings(
        work_minutes=_as_positive_int(
            section.get("work_minutes", 25),
            "session.work_minutes",
        ),
        short_break_minutes=_as_positive_int(
            section.get("short_break_minutes", 5),
            "session.short_break_minutes",
        ),
        long_break_minutes=_as_positive_int(
            section.get("long_break_minutes", 15),
            "session.long_break_minutes",
        ),
        task_label=_as_str(
            section.get("task_label", "General Focus"),
            "session.task_label",
        ),
        alert_sound=alert_sound,
    )


def _parse_alert_settings(section: Mapping[str, Any]) -> AlertSettings:
    return AlertSettings(
        sound_enabled=_as_bool(section.get("sound_enabled", True), "alerts.sound_enabled"),
        notifications_enabled=_as_bool(
            section.get("notifications_enabled", True),
            "alerts.notifications_enabled",
        ),
        output_device=(
            _as_int(section.get("output_device"), "alerts.output_device")
            if "output_device" in section
            else None
        ),
        volume=_as_float(section.get("volume", 0.3), "alerts.volume"),
    )


def _parse_reward_settings(section: Mapping[str, Any]) -> RewardSettings:
    _forbid_secret_fields(section, "reward", ("user_id", "api_token"))
    return RewardSettings(
        enabled=_as_bool(section.get("enabled", True), "reward.enabled"),
        base_url=_as_str(
            section.get("base_url", "http://localhost:4000"),
            "reward.base_url",
        ),
        timeout_seconds=_as_float(
            section.get("timeout_seconds", 5.0),
            "reward.timeout_seconds",
        ),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text, 0)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_positive_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a number.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a number.") from error
    raise AppConfigurationError(f"{field} must be a number.")


def _resolve_path(base_dir: Path, raw_path: str) -> str:
    if not raw_path:
        return ""
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _forbid_secret_fields(
    section: Mapping[str, Any],
    section_name: str,
    fields: tuple[str, ...],
) -> None:
    for field in fields:
        if field in section:
            raise AppConfigurationError(
                f"{section_name}.{field} must be provided via environment, not config.toml."
            )
