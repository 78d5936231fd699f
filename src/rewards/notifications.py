"""Desktop notifications through plyer, gated by a one-time permission check."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .errors import RewardDeliveryError, RewardDependencyError

APP_NAME = "Focus Session"
NOTIFICATION_TIMEOUT_SECONDS = 5

PERMISSION_DEFAULT = "default"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"


class DesktopNotifier:
    """Shows transient alerts once permission has been granted.

    Permission is requested exactly once, at process start. A notifier that was
    denied stays silent for the rest of the session.
    """

    def __init__(
        self,
        *,
        enabled: bool = True,
        backend: Optional[Any] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._enabled = enabled
        self._backend = backend
        self._logger = logger or logging.getLogger(__name__)
        self._permission = PERMISSION_DEFAULT

    @property
    def permission(self) -> str:
        return self._permission

    @property
    def is_permitted(self) -> bool:
        return self._permission == PERMISSION_GRANTED

    def request_permission(self) -> str:
        if self._permission != PERMISSION_DEFAULT:
            return self._permission

        if not self._enabled:
            self._permission = PERMISSION_DENIED
            self._logger.info("Desktop notifications disabled by configuration")
            return self._permission

        try:
            if self._backend is None:
                self._backend = _load_plyer_notification()
        except RewardDependencyError as error:
            self._permission = PERMISSION_DENIED
            self._logger.warning("Desktop notifications unavailable: %s", error)
            return self._permission

        self._permission = PERMISSION_GRANTED
        self._logger.info("Desktop notifications enabled")
        return self._permission

    def notify(self, title: str, body: str) -> bool:
        """Show an alert; returns False when skipped for lack of permission."""
        if not self.is_permitted or self._backend is None:
            return False

        try:
            self._backend.notify(
                title=title,
                message=body,
                app_name=APP_NAME,
                timeout=NOTIFICATION_TIMEOUT_SECONDS,
            )
        except Exception as error:
            raise RewardDeliveryError(f"Notification failed: {error}") from error
        return True


def _load_plyer_notification():
    try:
        from plyer import notification
    except ImportError as error:  # pragma: no cover - depends on desktop env
        raise RewardDependencyError(
            f"plyer import failed ({error}). Install plyer."
        ) from error
    return notification
