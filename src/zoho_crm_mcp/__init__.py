"""
Zoho CRM MCP server - exposes Zoho CRM v7 REST operations as MCP tools.
"""

__version__ = "1.0.0"

from .tools import register_all_tools

__all__ = ["__version__", "register_all_tools"]
