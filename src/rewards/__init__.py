"""Completion side effects: alert sounds, notifications, and star awards."""

from .config import RewardConfig
from .dispatcher import RewardDispatcher, completion_notification
from .errors import (
    RewardConfigurationError,
    RewardDeliveryError,
    RewardDependencyError,
    RewardError,
)
from .identity import CurrentUser, IdentityProvider, StaticIdentityProvider
from .providers import build_reward_dispatcher

__all__ = [
    "CurrentUser",
    "IdentityProvider",
    "RewardConfig",
    "RewardConfigurationError",
    "RewardDeliveryError",
    "RewardDependencyError",
    "RewardDispatcher",
    "RewardError",
    "StaticIdentityProvider",
    "build_reward_dispatcher",
    "completion_notification",
]
