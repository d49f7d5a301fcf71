"""
Operations tools - tags, blueprints, bulk jobs, notifications, email,
locking, sharing, approvals and other record-level actions.
"""

from .operations_tool import register_tools

__all__ = ["register_tools"]
