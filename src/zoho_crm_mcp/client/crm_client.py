"""
ZohoCRMClient: owns the session, the HTTP client, the token manager and the
dispatcher for one Zoho account, and is the single boundary where failures
become tool error envelopes.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

import httpx

from zoho_crm_mcp.utils.response import build_error_response, build_tool_response

from .dispatcher import DEFAULT_API_VERSION, RequestDispatcher
from .session import ZohoSession
from .token_manager import TokenManager

if TYPE_CHECKING:
    from zoho_crm_mcp.credentials import CredentialManager

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ZohoCRMClient:
    def __init__(
        self,
        session: ZohoSession,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
        api_version: str = DEFAULT_API_VERSION,
    ):
        self.session = session
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self.tokens = TokenManager(session, self._http)
        self.dispatcher = RequestDispatcher(session, self.tokens, self._http, api_version)

    @classmethod
    def from_credentials(
        cls,
        credentials: CredentialManager,
        http_client: httpx.AsyncClient | None = None,
    ) -> ZohoCRMClient:
        """
        Build a client from process configuration.

        ZOHO_HTTP_TIMEOUT (seconds) and ZOHO_CRM_API_VERSION are read from
        the environment. A timeout of 0 or "none" disables it; invalid values
        fall back to the default.
        """
        timeout = _timeout_from_env()
        api_version = os.getenv("ZOHO_CRM_API_VERSION") or DEFAULT_API_VERSION
        return cls(
            ZohoSession.from_credentials(credentials),
            http_client=http_client,
            timeout=timeout,
            api_version=api_version,
        )

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """Dispatch one call; raises ZohoError on failure."""
        return await self.dispatcher.dispatch(path, method=method, body=body, query=query)

    async def call(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Dispatch one call and return a success or error envelope. Never raises."""
        try:
            data = await self.request(path, method=method, body=body, query=query)
        except Exception as e:
            logger.warning("Zoho call %s %s failed: %s", method, path, e, exc_info=True)
            return build_error_response(e)
        return build_tool_response(data)

    def photo_url(self, module: str, record_id: str) -> str:
        return self.dispatcher.build_url(f"{module}/{record_id}/photo")

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()


def _timeout_from_env() -> float | None:
    raw = os.getenv("ZOHO_HTTP_TIMEOUT", "").strip().lower()
    if not raw:
        return DEFAULT_TIMEOUT
    if raw == "none":
        return None
    try:
        timeout = float(raw)
        if timeout < 0:
            raise ValueError(raw)
    except ValueError:
        logger.warning("Ignoring invalid ZOHO_HTTP_TIMEOUT %r, using %ss", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    # 0 means no timeout
    return timeout or None
