"""Tests for request dispatch, 401 retry and response resolution."""

import asyncio
import json

import httpx
import pytest

from conftest import API_DOMAIN, make_client, make_state, request_json
from zoho_crm_mcp.client import (
    MAX_ATTEMPTS,
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    NetworkError,
    ZohoAPIError,
)


class TestBuildUrl:
    def test_plain_path(self, client):
        assert client.dispatcher.build_url("Leads") == f"{API_DOMAIN}/crm/v7/Leads"

    def test_query_is_urlencoded(self, client):
        url = client.dispatcher.build_url(
            "Leads/search", {"criteria": "(Last_Name:equals:O'Brien)", "page": 2}
        )
        assert url.startswith(f"{API_DOMAIN}/crm/v7/Leads/search?")
        assert dict(httpx.URL(url).params) == {
            "criteria": "(Last_Name:equals:O'Brien)",
            "page": "2",
        }

    def test_reserved_characters_stay_inside_their_value(self, client):
        url = client.dispatcher.build_url("Leads/search", {"word": "R&D = 100%", "page": 1})

        assert dict(httpx.URL(url).params) == {"word": "R&D = 100%", "page": "1"}

    def test_empty_and_none_query_values_are_dropped(self, client):
        assert client.dispatcher.build_url("org", {}) == f"{API_DOMAIN}/crm/v7/org"
        assert client.dispatcher.build_url("org", {"type": None}) == f"{API_DOMAIN}/crm/v7/org"

    def test_booleans_are_lowercase(self, client):
        url = client.dispatcher.build_url("Leads", {"wf_trigger": False})
        assert url.endswith("?wf_trigger=false")

    def test_explicit_api_domain(self, client):
        url = client.dispatcher.build_url("Leads", api_domain="https://www.zohoapis.eu")
        assert url == "https://www.zohoapis.eu/crm/v7/Leads"


class TestTokenHandling:
    @pytest.mark.asyncio
    async def test_valid_token_issues_no_refresh(self, fake_zoho, client):
        await client.request("Leads")

        assert fake_zoho.token_requests == []
        assert fake_zoho.last.headers["Authorization"] == "Zoho-oauthtoken valid-token"

    @pytest.mark.asyncio
    async def test_empty_token_refreshes_once_before_first_attempt(self, fake_zoho):
        client = make_client(fake_zoho.handler, make_state(access_token=""))

        await client.request("Leads")

        assert len(fake_zoho.token_requests) == 1
        assert fake_zoho.requests[0] is fake_zoho.token_requests[0]
        assert fake_zoho.last.headers["Authorization"] == "Zoho-oauthtoken new-token"

    @pytest.mark.asyncio
    async def test_missing_credentials_surface_as_configuration_error(self, fake_zoho):
        client = make_client(
            fake_zoho.handler, make_state(access_token="", refresh_token="")
        )

        with pytest.raises(ConfigurationError):
            await client.request("Leads")
        assert fake_zoho.requests == []

    @pytest.mark.asyncio
    async def test_401_refreshes_and_retries_once(self, fake_zoho, client):
        fake_zoho.queue(
            httpx.Response(401, json={"code": "INVALID_TOKEN"}),
            httpx.Response(200, json={"data": [{"id": "1"}]}),
        )

        result = await client.request("Leads")

        assert result == {"data": [{"id": "1"}]}
        assert len(fake_zoho.token_requests) == 1
        assert len(fake_zoho.api_requests) == 2
        assert fake_zoho.api_requests[0].headers["Authorization"] == "Zoho-oauthtoken valid-token"
        assert fake_zoho.api_requests[1].headers["Authorization"] == "Zoho-oauthtoken new-token"

    @pytest.mark.asyncio
    async def test_second_401_is_fatal_and_no_third_attempt(self, fake_zoho, client):
        fake_zoho.queue(
            httpx.Response(401, json={"code": "INVALID_TOKEN"}),
            httpx.Response(401, json={"code": "INVALID_TOKEN"}),
            httpx.Response(200, json={"data": []}),
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await client.request("Leads")

        error = exc_info.value
        assert error.kind is ErrorKind.AUTHENTICATION
        assert error.status_code == 401
        assert str(error).startswith("Zoho API error (401): ")
        assert len(fake_zoho.api_requests) == MAX_ATTEMPTS == 2
        assert len(fake_zoho.token_requests) == 1

    @pytest.mark.asyncio
    async def test_refresh_failure_during_retry_propagates(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(401, text=""))
        fake_zoho.token_response = httpx.Response(200, json={"error": "invalid_client"})

        with pytest.raises(AuthenticationError, match="Token refresh failed: invalid_client"):
            await client.request("Leads")
        assert len(fake_zoho.api_requests) == 1

    @pytest.mark.asyncio
    async def test_concurrent_401s_share_one_refresh(self):
        token_calls = []

        async def handler(request):
            if request.url.path == "/oauth/v2/token":
                token_calls.append(request)
                await asyncio.sleep(0.01)
                return httpx.Response(200, json={"access_token": "new-token"})
            await asyncio.sleep(0)
            if request.headers["Authorization"] == "Zoho-oauthtoken expired":
                return httpx.Response(401, json={"code": "INVALID_TOKEN"})
            return httpx.Response(200, json={"data": []})

        client = make_client(handler, make_state(access_token="expired"))

        results = await asyncio.gather(*(client.request("Leads") for _ in range(4)))

        assert results == [{"data": []}] * 4
        assert len(token_calls) == 1


class TestResponseResolution:
    @pytest.mark.asyncio
    async def test_204_is_synthetic_success(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(204, content=b"ignored"))

        assert await client.request("Leads/1", "DELETE") == {
            "status": "success",
            "message": "No content",
        }

    @pytest.mark.asyncio
    async def test_empty_success_body(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(200, content=b""))

        assert await client.request("Leads") == {"status": "success"}

    @pytest.mark.asyncio
    async def test_json_error_body_is_pretty_printed(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(400, json={"code": "INVALID"}))

        with pytest.raises(ZohoAPIError) as exc_info:
            await client.request("Leads")

        expected = "Zoho API error (400): " + json.dumps({"code": "INVALID"}, indent=2)
        assert str(exc_info.value) == expected
        assert exc_info.value.status_code == 400
        assert exc_info.value.kind is ErrorKind.API

    @pytest.mark.asyncio
    async def test_text_error_body_is_verbatim(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(500, text="boom"))

        with pytest.raises(ZohoAPIError) as exc_info:
            await client.request("Leads")

        assert str(exc_info.value) == "Zoho API error (500): boom"

    @pytest.mark.asyncio
    async def test_rate_limit_is_not_retried(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(429, json={"code": "TOO_MANY_REQUESTS"}))

        with pytest.raises(ZohoAPIError) as exc_info:
            await client.request("Leads")

        assert exc_info.value.status_code == 429
        assert len(fake_zoho.api_requests) == 1
        assert fake_zoho.token_requests == []

    @pytest.mark.asyncio
    async def test_non_json_success_body_is_api_error(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(200, text="not json"))

        with pytest.raises(ZohoAPIError):
            await client.request("Leads")

    @pytest.mark.asyncio
    async def test_json_array_returned_unchanged(self, fake_zoho, client):
        payload = [{"id": "1", "Last_Name": "Smith"}, {"id": "2", "Last_Name": "Jones"}]
        fake_zoho.queue(httpx.Response(200, json=payload))

        assert await client.request("Leads") == payload


class TestRequestShape:
    @pytest.mark.asyncio
    async def test_body_is_sent_as_json(self, fake_zoho, client):
        await client.request("Leads", "POST", {"data": [{"Last_Name": "Smith"}]})

        request = fake_zoho.last
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        assert request_json(request) == {"data": [{"Last_Name": "Smith"}]}

    @pytest.mark.asyncio
    async def test_no_body_means_no_content_type(self, fake_zoho, client):
        await client.request("Leads")

        request = fake_zoho.last
        assert "Content-Type" not in request.headers
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_empty_dict_body_is_still_sent(self, fake_zoho, client):
        await client.request("actions/approvals/1/approve", "POST", {})

        assert request_json(fake_zoho.last) == {}

    @pytest.mark.asyncio
    async def test_retry_resends_the_same_body(self, fake_zoho, client):
        fake_zoho.queue(httpx.Response(401, text=""), httpx.Response(201, json={"data": []}))

        await client.request("Leads", "POST", {"data": [{"Last_Name": "Smith"}]})

        first, second = fake_zoho.api_requests
        assert first.content == second.content
        assert str(first.url) == str(second.url)


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_connect_error_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError) as exc_info:
            await client.request("Leads")
        assert exc_info.value.kind is ErrorKind.NETWORK

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError, match="timed out"):
            await client.request("Leads")
