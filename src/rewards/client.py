"""HTTP client for the external progress service that awards stars."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .errors import RewardDeliveryError

AWARD_STAR_PATH = "/api/award-star"


class RewardServiceClient:
    """Posts one award request per completed work interval."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 5.0,
        api_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._api_token = api_token
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def award_url(self) -> str:
        return f"{self._base_url}{AWARD_STAR_PATH}"

    def award_star(self, user_id: str) -> None:
        headers = {"Content-Type": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        try:
            response = self._session.post(
                self.award_url,
                json={"userId": user_id},
                headers=headers,
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as error:
            raise RewardDeliveryError(f"Award request failed: {error}") from error

        self._logger.debug(
            "Award request accepted: user=%s status=%s",
            user_id,
            response.status_code,
        )

    def close(self) -> None:
        self._session.close()
