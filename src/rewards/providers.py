"""Factory for building the reward dispatcher from configuration."""

from __future__ import annotations

import logging

from .audio import SoundDeviceAlertPlayer
from .client import RewardServiceClient
from .config import RewardConfig
from .dispatcher import RewardDispatcher
from .identity import StaticIdentityProvider
from .notifications import DesktopNotifier


def build_reward_dispatcher(
    config: RewardConfig,
    *,
    logger: logging.Logger,
) -> RewardDispatcher:
    """Initialize configured side effects and degrade gracefully on failures."""
    sound_player = None
    reward_client = None

    if config.sound_enabled:
        try:
            sound_player = SoundDeviceAlertPlayer(
                config.output_device,
                volume=config.volume,
                logger=logger.getChild("audio"),
            )
            logger.info("Alert sounds enabled")
        except Exception as error:
            logger.warning("Alert sounds unavailable: %s", error)

    notifier = DesktopNotifier(
        enabled=config.notifications_enabled,
        logger=logger.getChild("notifications"),
    )
    notifier.request_permission()

    if config.reward_enabled:
        reward_client = RewardServiceClient(
            config.base_url,
            timeout_seconds=config.timeout_seconds,
            api_token=config.api_token,
            logger=logger.getChild("client"),
        )
        if config.user_id is None:
            logger.info("Star awards enabled but no user is signed in (FOCUS_USER_ID)")
        else:
            logger.info("Star awards enabled for user %s", config.user_id)

    return RewardDispatcher(
        sound_player=sound_player,
        notifier=notifier,
        reward_client=reward_client,
        identity=StaticIdentityProvider(config.user_id),
        logger=logger,
    )
