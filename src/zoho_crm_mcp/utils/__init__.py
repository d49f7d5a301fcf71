"""
Utility functions for the Zoho CRM MCP server.
"""

from .logging import configure_logging, get_logger
from .response import (
    CHARACTER_LIMIT,
    TRUNCATION_NOTICE,
    build_error_response,
    build_tool_response,
    format_response,
    to_tool_output,
    truncate_response,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "CHARACTER_LIMIT",
    "TRUNCATION_NOTICE",
    "build_error_response",
    "build_tool_response",
    "format_response",
    "to_tool_output",
    "truncate_response",
]
