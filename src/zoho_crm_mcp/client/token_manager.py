"""
OAuth access-token refresh for a Zoho session.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from .errors import AuthenticationError, ConfigurationError, NetworkError
from .session import ZohoSession

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = (
    "Missing refresh token, client ID, or client secret. "
    "Set ZOHO_REFRESH_TOKEN, ZOHO_CLIENT_ID, and ZOHO_CLIENT_SECRET environment variables."
)


class TokenManager:
    """
    Exchanges the refresh token for a new access token.

    Refreshes are serialized. A caller hands in the token it saw rejected;
    if another caller already replaced it by the time the lock is held, the
    new token is returned without another round trip.
    """

    def __init__(self, session: ZohoSession, http_client: httpx.AsyncClient):
        self._session = session
        self._http = http_client
        self._lock = asyncio.Lock()

    async def refresh(self, stale_token: str | None = None) -> str:
        """
        Obtain a fresh access token and store it in the session.

        Args:
            stale_token: The token the caller observed as missing or rejected.
                None forces a network refresh.

        Returns:
            The access token now held by the session.

        Raises:
            ConfigurationError: refresh token, client ID or client secret is empty
            AuthenticationError: Zoho rejected the refresh
            NetworkError: the accounts server could not be reached
        """
        async with self._lock:
            current = self._session.access_token
            if stale_token is not None and current and current != stale_token:
                logger.debug("Access token already refreshed by a concurrent request")
                return current
            return await self._request_token()

    async def _request_token(self) -> str:
        state = self._session.get()
        if not (state.refresh_token and state.client_id and state.client_secret):
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)

        try:
            response = await self._http.post(
                f"{state.accounts_domain}/oauth/v2/token",
                data={
                    "refresh_token": state.refresh_token,
                    "client_id": state.client_id,
                    "client_secret": state.client_secret,
                    "grant_type": "refresh_token",
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f"Token refresh timed out: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Network error during token refresh: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise AuthenticationError(
                f"Token refresh failed: unexpected response (HTTP {response.status_code})",
                status_code=response.status_code,
                detail=response.text,
            ) from e

        if not isinstance(payload, dict):
            raise AuthenticationError(
                "Token refresh failed: unexpected response",
                status_code=response.status_code,
            )
        if payload.get("error"):
            raise AuthenticationError(
                f"Token refresh failed: {payload['error']}",
                status_code=response.status_code,
                detail=str(payload["error"]),
            )
        access_token = payload.get("access_token")
        if not access_token:
            raise AuthenticationError(
                "Token refresh failed: no access_token in response",
                status_code=response.status_code,
            )

        updates = {"access_token": access_token}
        if payload.get("api_domain"):
            updates["api_domain"] = str(payload["api_domain"]).rstrip("/")
        self._session.update(**updates)

        logger.info(
            "Refreshed Zoho access token (expires_in=%s)", payload.get("expires_in", "unknown")
        )
        return access_token
