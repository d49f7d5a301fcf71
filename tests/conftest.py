"""Shared fixtures: a Zoho API faked with httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Callable
from urllib.parse import parse_qs

import httpx
import pytest

from zoho_crm_mcp.client import SessionState, ZohoCRMClient, ZohoSession
from zoho_crm_mcp.credentials import CredentialManager

API_DOMAIN = "https://www.zohoapis.com"
ACCOUNTS_DOMAIN = "https://accounts.zoho.com"
TOKEN_URL = f"{ACCOUNTS_DOMAIN}/oauth/v2/token"


def make_state(**overrides: str) -> SessionState:
    fields = {
        "access_token": "valid-token",
        "refresh_token": "refresh-token",
        "client_id": "client-id",
        "client_secret": "client-secret",
        "api_domain": API_DOMAIN,
        "accounts_domain": ACCOUNTS_DOMAIN,
    }
    fields.update(overrides)
    return SessionState(**fields)


class FakeZoho:
    """
    Records every request and answers API calls from a queue of responses.

    Token refreshes are answered with ``token_response`` and counted
    separately; any API call beyond the queue gets ``{"data": []}``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.api_responses: list[httpx.Response] = []
        self.token_response: httpx.Response = httpx.Response(
            200,
            json={"access_token": "new-token", "expires_in": 3600, "token_type": "Bearer"},
        )

    def queue(self, *responses: httpx.Response) -> "FakeZoho":
        self.api_responses.extend(responses)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == TOKEN_URL:
            return self.token_response
        if self.api_responses:
            return self.api_responses.pop(0)
        return httpx.Response(200, json={"data": []})

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == TOKEN_URL]

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) != TOKEN_URL]

    @property
    def last(self) -> httpx.Request:
        return self.api_requests[-1]


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


def request_query(request: httpx.Request) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(request.url.query.decode()).items()}


def make_client(
    handler: Callable[[httpx.Request], Any],
    state: SessionState | None = None,
) -> ZohoCRMClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ZohoCRMClient(ZohoSession(state or make_state()), http_client=http)


@pytest.fixture
def fake_zoho() -> FakeZoho:
    return FakeZoho()


@pytest.fixture
def client(fake_zoho: FakeZoho) -> ZohoCRMClient:
    return make_client(fake_zoho.handler)


@pytest.fixture
def mock_credentials(tmp_path) -> CredentialManager:
    return CredentialManager.for_testing(
        {
            "access_token": "valid-token",
            "refresh_token": "refresh-token",
            "client_id": "client-id",
            "client_secret": "client-secret",
        },
        dotenv_path=tmp_path / ".env",
    )
