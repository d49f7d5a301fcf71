"""
Zoho CRM metadata tools.

All of these are read-only GETs under ``settings/``. Module-scoped endpoints
take the module API name as the ``module`` query parameter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from fastmcp import FastMCP

from zoho_crm_mcp.utils.response import to_tool_output

from ..tool_helpers import tool_annotations

if TYPE_CHECKING:
    from zoho_crm_mcp.client import ZohoCRMClient


def _read(title: str) -> dict:
    return tool_annotations(title, read_only=True, idempotent=True)


def register_tools(mcp: FastMCP, client: ZohoCRMClient) -> None:
    """Register metadata tools with the MCP server."""

    @mcp.tool(annotations=_read("Get Modules"))
    async def zoho_get_modules() -> str:
        """
        List every module in the CRM (standard and custom) with its API name,
        labels and capabilities.
        """
        return to_tool_output(await client.call("settings/modules"))

    @mcp.tool(annotations=_read("Get Module Details"))
    async def zoho_get_module(module: str) -> str:
        """
        Fetch the metadata of one module.

        Args:
            module: Module API name (e.g., Leads, Contacts)
        """
        return to_tool_output(await client.call(f"settings/modules/{module}"))

    @mcp.tool(annotations=_read("Get Fields"))
    async def zoho_get_fields(module: str, type: Literal["all", "unused"] | None = None) -> str:
        """
        List the fields of a module with data types, picklist values and lookups.

        Args:
            module: Module API name
            type: Filter: all or unused fields
        """
        return to_tool_output(
            await client.call("settings/fields", query={"module": module, "type": type})
        )

    @mcp.tool(annotations=_read("Get Field Details"))
    async def zoho_get_field(module: str, field_id: str) -> str:
        """
        Fetch one field's metadata.

        Args:
            module: Module API name
            field_id: Field ID
        """
        return to_tool_output(
            await client.call(f"settings/fields/{field_id}", query={"module": module})
        )

    @mcp.tool(annotations=_read("Get Layouts"))
    async def zoho_get_layouts(module: str) -> str:
        """
        List the layouts of a module with their sections and fields.

        Args:
            module: Module API name
        """
        return to_tool_output(await client.call("settings/layouts", query={"module": module}))

    @mcp.tool(annotations=_read("Get Layout Details"))
    async def zoho_get_layout(module: str, layout_id: str) -> str:
        """
        Fetch one layout.

        Args:
            module: Module API name
            layout_id: Layout ID
        """
        return to_tool_output(
            await client.call(f"settings/layouts/{layout_id}", query={"module": module})
        )

    @mcp.tool(annotations=_read("Get Custom Views"))
    async def zoho_get_custom_views(module: str) -> str:
        """
        List the custom views (saved filters) of a module.

        Args:
            module: Module API name
        """
        return to_tool_output(
            await client.call("settings/custom_views", query={"module": module})
        )

    @mcp.tool(annotations=_read("Get Custom View Details"))
    async def zoho_get_custom_view(module: str, custom_view_id: str) -> str:
        """
        Fetch one custom view with its criteria.

        Args:
            module: Module API name
            custom_view_id: Custom view ID
        """
        return to_tool_output(
            await client.call(f"settings/custom_views/{custom_view_id}", query={"module": module})
        )

    @mcp.tool(annotations=_read("Get Related Lists"))
    async def zoho_get_related_lists(module: str) -> str:
        """
        List the related lists available on a module's records.

        Args:
            module: Module API name
        """
        return to_tool_output(
            await client.call("settings/related_lists", query={"module": module})
        )

    @mcp.tool(annotations=_read("Get Roles"))
    async def zoho_get_roles() -> str:
        """List the roles of the organization hierarchy."""
        return to_tool_output(await client.call("settings/roles"))

    @mcp.tool(annotations=_read("Get Profiles"))
    async def zoho_get_profiles() -> str:
        """List the permission profiles."""
        return to_tool_output(await client.call("settings/profiles"))

    @mcp.tool(annotations=_read("Get Territories"))
    async def zoho_get_territories() -> str:
        """List the sales territories."""
        return to_tool_output(await client.call("settings/territories"))

    @mcp.tool(annotations=_read("Get Pipelines"))
    async def zoho_get_pipelines(layout_id: str | None = None) -> str:
        """
        List deal pipelines and their stages.

        Args:
            layout_id: Layout ID to filter pipelines
        """
        return to_tool_output(
            await client.call("settings/pipeline", query={"layout_id": layout_id})
        )

    @mcp.tool(annotations=_read("Get Scoring Rules"))
    async def zoho_get_scoring_rules(module: str | None = None) -> str:
        """
        List scoring rules.

        Args:
            module: Module API name to filter
        """
        return to_tool_output(
            await client.call("settings/scoring_rules", query={"module": module})
        )

    @mcp.tool(annotations=_read("Get Wizards"))
    async def zoho_get_wizards(module: str | None = None) -> str:
        """
        List wizards (multi-step record forms).

        Args:
            module: Module API name to filter
        """
        return to_tool_output(await client.call("settings/wizards", query={"module": module}))

    @mcp.tool(annotations=_read("Get Assignment Rules"))
    async def zoho_get_assignment_rules(module: str | None = None) -> str:
        """
        List record assignment rules.

        Args:
            module: Module API name to filter
        """
        return to_tool_output(
            await client.call("settings/assignment_rules", query={"module": module})
        )
