"""
Request Dispatcher: every authenticated call to the Zoho CRM REST API.

One dispatch builds the URL, attaches the OAuth header, sends the request
and resolves the response into a value or a typed ``ZohoError``. A 401 is
answered with one token refresh and one more attempt, never more.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import AuthenticationError, NetworkError, ZohoAPIError
from .session import ZohoSession
from .token_manager import TokenManager

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2
DEFAULT_API_VERSION = "v7"


@dataclass
class RequestDescriptor:
    """One outbound call, as handed to the dispatcher."""

    path: str
    method: str = "GET"
    body: Any = None
    query: dict[str, Any] | None = None
    retried: bool = False


class RequestDispatcher:
    def __init__(
        self,
        session: ZohoSession,
        token_manager: TokenManager,
        http_client: httpx.AsyncClient,
        api_version: str = DEFAULT_API_VERSION,
    ):
        self._session = session
        self._tokens = token_manager
        self._http = http_client
        self.api_version = api_version

    def build_url(
        self,
        path: str,
        query: dict[str, Any] | None = None,
        api_domain: str | None = None,
    ) -> str:
        """Build ``<api_domain>/crm/<version>/<path>[?query]``."""
        domain = api_domain or self._session.get().api_domain
        url = f"{domain}/crm/{self.api_version}/{path.lstrip('/')}"
        # httpx renders booleans as lowercase true/false.
        params = {k: v for k, v in (query or {}).items() if v is not None}
        return str(httpx.URL(url, params=params))

    async def dispatch(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send one authenticated request and resolve its response.

        Args:
            path: API path relative to ``/crm/<version>/``, e.g. "Leads"
            method: HTTP method
            body: JSON-serializable request body, sent only when not None
            query: Query parameters, appended only when non-empty

        Returns:
            The parsed JSON body, or a synthetic success value for 204 and
            empty bodies.

        Raises:
            ConfigurationError: a refresh was needed but credentials are missing
            AuthenticationError: the refresh failed, or Zoho answered 401 twice
            ZohoAPIError: Zoho answered with any other non-2xx status
            NetworkError: the request did not complete
        """
        return await self.send(RequestDescriptor(path=path, method=method, body=body, query=query))

    async def send(self, request: RequestDescriptor) -> Any:
        if not self._session.access_token:
            await self._tokens.refresh(stale_token="")

        response: httpx.Response | None = None
        for attempt in range(MAX_ATTEMPTS):
            token = self._session.access_token
            response = await self._send_once(request, token)
            if response.status_code != 401:
                return _resolve(response)

            if attempt + 1 < MAX_ATTEMPTS:
                logger.info(
                    "Zoho rejected the access token for %s %s; refreshing and retrying",
                    request.method,
                    request.path,
                )
                await self._tokens.refresh(stale_token=token)
                request.retried = True

        detail = _error_detail(response)
        raise AuthenticationError(
            f"Zoho API error (401): {detail}",
            status_code=401,
            detail=detail,
        )

    async def _send_once(self, request: RequestDescriptor, token: str) -> httpx.Response:
        url = self.build_url(request.path, request.query)
        headers = {"Authorization": f"Zoho-oauthtoken {token}"}
        content = None
        if request.body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(request.body)

        try:
            return await self._http.request(request.method, url, headers=headers, content=content)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {request.method} {request.path}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Network error: {e}") from e


def _error_detail(response: httpx.Response) -> str:
    text = response.text
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text


def _resolve(response: httpx.Response) -> Any:
    status = response.status_code
    if status == 204:
        return {"status": "success", "message": "No content"}

    if not 200 <= status < 300:
        detail = _error_detail(response)
        raise ZohoAPIError(
            f"Zoho API error ({status}): {detail}",
            status_code=status,
            detail=detail,
        )

    text = response.text
    if not text:
        return {"status": "success"}

    try:
        return json.loads(text)
    except ValueError as e:
        raise ZohoAPIError(
            f"Zoho API error ({status}): response is not valid JSON",
            status_code=status,
            detail=text,
        ) from e
