"""
Related-list tools - related records, notes and attachments.
"""

from .related_tool import register_tools

__all__ = ["register_tools"]
