"""
Metadata tools - modules, fields, layouts, views and org-level settings.
"""

from .metadata_tool import register_tools

__all__ = ["register_tools"]
