class RewardError(Exception):
    """Base exception for completion side effects."""


class RewardConfigurationError(RewardError):
    """Raised when reward dispatcher configuration is invalid."""


class RewardDependencyError(RewardError):
    """Raised when an optional dependency for a side effect is missing."""


class RewardDeliveryError(RewardError):
    """Raised when a side effect fails to reach its target."""
