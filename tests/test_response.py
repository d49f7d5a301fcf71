"""Tests for the response formatter and error mapper."""

import json

import pytest
from fastmcp.exceptions import ToolError

from zoho_crm_mcp.client import ConfigurationError, ZohoAPIError
from zoho_crm_mcp.utils.response import (
    CHARACTER_LIMIT,
    TRUNCATION_NOTICE,
    build_error_response,
    build_tool_response,
    format_response,
    to_tool_output,
    truncate_response,
)


class TestFormatResponse:
    def test_indented_json(self):
        assert format_response({"data": [1]}) == '{\n  "data": [\n    1\n  ]\n}'

    def test_non_ascii_is_kept(self):
        assert "Müller" in format_response({"Last_Name": "Müller"})

    def test_payload_at_limit_is_unmodified(self):
        # json.dumps adds two quote characters around a string.
        payload = "a" * (CHARACTER_LIMIT - 2)
        text = format_response(payload)

        assert len(text) == CHARACTER_LIMIT
        assert text == json.dumps(payload)

    def test_payload_one_over_limit_is_truncated(self):
        payload = "a" * (CHARACTER_LIMIT - 1)
        full = json.dumps(payload)
        assert len(full) == CHARACTER_LIMIT + 1

        text = format_response(payload)

        assert text == full[:CHARACTER_LIMIT] + TRUNCATION_NOTICE

    def test_notice_text(self):
        assert TRUNCATION_NOTICE == (
            "\n\n[Response truncated. Use pagination or filters to narrow results.]"
        )

    def test_truncate_short_text(self):
        assert truncate_response("short") == "short"


class TestEnvelopes:
    def test_success_envelope(self):
        envelope = build_tool_response([{"id": "1"}])

        assert envelope == {
            "content": [{"type": "text", "text": '[\n  {\n    "id": "1"\n  }\n]'}]
        }
        assert "isError" not in envelope

    def test_error_envelope_from_exception(self):
        envelope = build_error_response(ZohoAPIError("Zoho API error (500): boom"))

        assert envelope == {
            "content": [{"type": "text", "text": "Error: Zoho API error (500): boom"}],
            "isError": True,
        }

    def test_error_envelope_from_plain_value(self):
        envelope = build_error_response("something odd")
        assert envelope["content"][0]["text"] == "Error: something odd"
        assert envelope["isError"] is True

    def test_error_envelope_keeps_full_message(self):
        error = ConfigurationError("Missing refresh token, client ID, or client secret.")
        envelope = build_error_response(error)
        assert envelope["content"][0]["text"] == (
            "Error: Missing refresh token, client ID, or client secret."
        )


class TestToToolOutput:
    def test_success_returns_text(self):
        assert to_tool_output(build_tool_response({"a": 1})) == '{\n  "a": 1\n}'

    def test_error_raises_tool_error_with_text(self):
        with pytest.raises(ToolError) as exc_info:
            to_tool_output(build_error_response(ValueError("bad input")))

        assert str(exc_info.value) == "Error: bad input"
