"""
Records tools - read, write, search and convert Zoho CRM module records.
"""

from .records_tool import register_tools

__all__ = ["register_tools"]
