"""Current-user lookup used to scope reward requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class CurrentUser:
    user_id: str


class IdentityProvider(Protocol):
    """Auth collaborator that may or may not know the signed-in user."""
    def current_user(self) -> Optional[CurrentUser]:
        ...


class StaticIdentityProvider:
    """Identity fixed for the whole process, typically from the environment."""
    def __init__(self, user_id: Optional[str] = None):
        cleaned = (user_id or "").strip()
        self._user = CurrentUser(user_id=cleaned) if cleaned else None

    def current_user(self) -> Optional[CurrentUser]:
        return self._user
