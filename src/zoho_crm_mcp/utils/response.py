"""
Response Formatter and Error Mapper.

Turns client results into the text envelope MCP tools answer with, and
turns any failure into the matching error envelope. ``to_tool_output``
bridges both onto FastMCP: plain text for success, ``ToolError`` for errors.
"""

from __future__ import annotations

import json
from typing import Any

from fastmcp.exceptions import ToolError

CHARACTER_LIMIT = 100_000
TRUNCATION_NOTICE = "\n\n[Response truncated. Use pagination or filters to narrow results.]"


def truncate_response(text: str) -> str:
    """Cap ``text`` at CHARACTER_LIMIT characters, appending a notice when cut."""
    if len(text) <= CHARACTER_LIMIT:
        return text
    return text[:CHARACTER_LIMIT] + TRUNCATION_NOTICE


def format_response(data: Any) -> str:
    """Pretty-print ``data`` as JSON (indent 2) and truncate."""
    return truncate_response(json.dumps(data, indent=2, ensure_ascii=False))


def build_tool_response(data: Any) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": format_response(data)}]}


def build_error_response(error: Any) -> dict[str, Any]:
    """
    Map any failure value to an error envelope.

    Exceptions contribute their message; anything else its string form.
    """
    message = str(error)
    return {"content": [{"type": "text", "text": f"Error: {message}"}], "isError": True}


def to_tool_output(envelope: dict[str, Any]) -> str:
    """
    Unwrap an envelope for a FastMCP tool.

    Raises:
        ToolError: for error envelopes, carrying the envelope text verbatim
    """
    text = "".join(
        block.get("text", "") for block in envelope.get("content", []) if block.get("type") == "text"
    )
    if envelope.get("isError"):
        raise ToolError(text)
    return text
