"""Access-token connector for the salary API.

Purpose
- Exchange the stored refresh token for a short-lived access token.
- Keep the bearer-token handling for the salary backend in one place.

This module is intentionally independent of FastAPI.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import requests
from dotenv import load_dotenv

load_dotenv(override=False)

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_TOKEN_API_URL = (
    "https://sleeve-stars-automation-2-32676f7875b4.herokuapp.com"
    "/welcome/refreshToken/request"
)


class AccessTokenError(RuntimeError):
    """Raised when the refresh-token exchange does not yield an access token."""


class AccessTokenClient:
    def __init__(
        self,
        *,
        refresh_token_url: str,
        refresh_token: str,
        api_auth_token: str,
        timeout_seconds: int | None = 30,
    ) -> None:
        self._refresh_token_url = refresh_token_url
        self._refresh_token = refresh_token
        self._api_auth_token = api_auth_token
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_env(cls) -> "AccessTokenClient":
        refresh_token = os.environ.get("REFRESH_TOKEN")
        api_auth_token = os.environ.get("API_AUTH_TOKEN")
        if not refresh_token or not api_auth_token:
            raise ValueError("Missing REFRESH_TOKEN or API_AUTH_TOKEN")

        refresh_token_url = (
            os.environ.get("REFRESH_TOKEN_API_URL") or DEFAULT_REFRESH_TOKEN_API_URL
        )
        timeout_seconds = int(os.environ.get("TOKEN_HTTP_TIMEOUT_SECONDS") or "30")

        return cls(
            refresh_token_url=refresh_token_url,
            refresh_token=refresh_token,
            api_auth_token=api_auth_token,
            timeout_seconds=timeout_seconds,
        )

    def _post_json(self, url: str, *, payload: dict[str, Any]) -> dict[str, Any]:
        resp = requests.request(
            "POST",
            url,
            headers={
                "Authorization": f"Bearer {self._api_auth_token}",
                "Content-Type": "application/json",
            },
            json=payload,
            timeout=self._timeout_seconds,
        )
        if resp.status_code >= 400:
            raise RuntimeError(f"HTTP {resp.status_code}: {resp.text}")
        return resp.json()

    def get_access_token(self) -> str:
        """Return a fresh access token. No retry on failure."""

        logger.info("Requesting access token...")
        try:
            data = self._post_json(
                self._refresh_token_url,
                payload={"refreshToken": self._refresh_token},
            )
            access_token = data.get("accessToken") if isinstance(data, dict) else None
            if not access_token:
                raise RuntimeError("Token response did not include accessToken")
        except Exception as e:
            logger.error(f"Error refreshing access token: {e}")
            raise AccessTokenError("Failed to refresh access token.") from e

        logger.info("Access token received")
        return access_token
