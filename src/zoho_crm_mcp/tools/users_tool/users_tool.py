"""
Zoho CRM user and organization tools.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from fastmcp import FastMCP

from zoho_crm_mcp.utils.response import to_tool_output

from ..tool_helpers import paging, reject, tool_annotations

if TYPE_CHECKING:
    from zoho_crm_mcp.client import ZohoCRMClient

UserType = Literal[
    "AllUsers",
    "ActiveUsers",
    "DeactiveUsers",
    "ConfirmedUsers",
    "NotConfirmedUsers",
    "DeletedUsers",
    "ActiveConfirmedUsers",
    "AdminUsers",
    "ActiveConfirmedAdmins",
    "CurrentUser",
]


def register_tools(mcp: FastMCP, client: ZohoCRMClient) -> None:
    """Register user tools with the MCP server."""

    @mcp.tool(annotations=tool_annotations("Get Users", read_only=True, idempotent=True))
    async def zoho_get_users(
        type: UserType | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> str:
        """
        List users of the CRM organization.

        Args:
            type: User type filter (e.g., ActiveUsers, AdminUsers, CurrentUser)
            per_page: Records per page (1-200)
            page: Page number
        """
        query = {"type": type, **paging(per_page, page)}
        return to_tool_output(await client.call("users", query=query))

    @mcp.tool(annotations=tool_annotations("Get User Details", read_only=True, idempotent=True))
    async def zoho_get_user(user_id: str) -> str:
        """
        Fetch one user.

        Args:
            user_id: User ID
        """
        return to_tool_output(await client.call(f"users/{user_id}"))

    @mcp.tool(annotations=tool_annotations("Create User"))
    async def zoho_create_user(
        last_name: str,
        email: str,
        role: str,
        profile: str,
        first_name: str | None = None,
    ) -> str:
        """
        Invite a new user to the organization.

        Args:
            last_name: Last name
            email: Email address the invitation is sent to
            role: Role ID
            profile: Profile ID
            first_name: First name
        """
        user: dict[str, Any] = {
            "last_name": last_name,
            "email": email,
            "role": role,
            "profile": profile,
        }
        if first_name is not None:
            user["first_name"] = first_name
        return to_tool_output(await client.call("users", "POST", {"users": [user]}))

    @mcp.tool(annotations=tool_annotations("Update User", idempotent=True))
    async def zoho_update_user(user_id: str, fields: dict[str, Any]) -> str:
        """
        Update a user's details.

        Args:
            user_id: User ID
            fields: Fields to update (role, profile, first_name, last_name, etc.)
        """
        if not fields:
            reject("fields must not be empty")
        body = {"users": [{"id": user_id, **fields}]}
        return to_tool_output(await client.call(f"users/{user_id}", "PUT", body))

    @mcp.tool(annotations=tool_annotations("Delete User", destructive=True, idempotent=True))
    async def zoho_delete_user(user_id: str, transfer_to: str | None = None) -> str:
        """
        Delete a user, optionally transferring their records first.

        Args:
            user_id: User ID to delete
            transfer_to: User ID to transfer records to
        """
        return to_tool_output(
            await client.call(
                f"users/{user_id}", "DELETE", query={"transfer_and_delete": transfer_to}
            )
        )

    @mcp.tool(
        annotations=tool_annotations("Get Organization Details", read_only=True, idempotent=True)
    )
    async def zoho_get_organization() -> str:
        """Fetch organization details: name, time zone, currency, edition and limits."""
        return to_tool_output(await client.call("org"))

    @mcp.tool(annotations=tool_annotations("Search Users", read_only=True, idempotent=True))
    async def zoho_search_users(
        criteria: str,
        type: Literal["AllUsers", "ActiveUsers", "DeactiveUsers"] | None = None,
    ) -> str:
        """
        Search users.

        Args:
            criteria: Search criteria, e.g. (email:equals:jane@example.com)
            type: User type filter
        """
        return to_tool_output(
            await client.call("users/search", query={"criteria": criteria, "type": type})
        )
