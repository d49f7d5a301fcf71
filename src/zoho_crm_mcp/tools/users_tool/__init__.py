"""
Users tools - manage CRM users and read organization details.
"""

from .users_tool import register_tools

__all__ = ["register_tools"]
