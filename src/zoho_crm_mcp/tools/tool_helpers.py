"""
Shared pieces for the Zoho CRM tool families: MCP annotations and argument
checks that reject a call before any HTTP request is made.
"""

from __future__ import annotations

from collections.abc import Sized
from typing import Any

from zoho_crm_mcp.utils.response import build_error_response, to_tool_output


def tool_annotations(
    title: str,
    *,
    read_only: bool = False,
    destructive: bool = False,
    idempotent: bool = False,
    open_world: bool = False,
) -> dict[str, Any]:
    """MCP tool annotations. Only tools that reach outside the CRM set open_world."""
    return {
        "title": title,
        "readOnlyHint": read_only,
        "destructiveHint": destructive,
        "idempotentHint": idempotent,
        "openWorldHint": open_world,
    }


def reject(message: str) -> None:
    """Fail the current tool call with an error envelope."""
    to_tool_output(build_error_response(ValueError(message)))


def require_count(name: str, items: Sized | None, minimum: int = 1, maximum: int | None = None) -> None:
    count = len(items) if items is not None else 0
    if count < minimum or (maximum is not None and count > maximum):
        bound = f"{minimum}-{maximum}" if maximum is not None else f"at least {minimum}"
        reject(f"{name} must contain {bound} items (got {count})")


def require_range(name: str, value: int | None, minimum: int = 1, maximum: int | None = None) -> None:
    """Check an optional integer argument; None always passes."""
    if value is None:
        return
    if value < minimum or (maximum is not None and value > maximum):
        bound = f"between {minimum} and {maximum}" if maximum is not None else f">= {minimum}"
        reject(f"{name} must be {bound} (got {value})")


def paging(per_page: int | None, page: int | None) -> dict[str, Any]:
    """Validate per_page (1-200) and page (>= 1) and return them as query parameters."""
    require_range("per_page", per_page, 1, 200)
    require_range("page", page, 1)
    return {"per_page": per_page, "page": page}
