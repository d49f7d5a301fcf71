"""
Zoho CRM tool implementations for FastMCP.

Usage:
    from fastmcp import FastMCP
    from zoho_crm_mcp.tools import register_all_tools
    from zoho_crm_mcp.credentials import CredentialManager

    mcp = FastMCP("my-server")
    credentials = CredentialManager()
    register_all_tools(mcp, credentials=credentials)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from fastmcp import FastMCP

from zoho_crm_mcp.client import ZohoCRMClient

from .metadata_tool import register_tools as register_metadata
from .operations_tool import register_tools as register_operations
from .records_tool import register_tools as register_records
from .related_tool import register_tools as register_related
from .users_tool import register_tools as register_users

if TYPE_CHECKING:
    from zoho_crm_mcp.credentials import CredentialManager


def register_all_tools(
    mcp: FastMCP,
    credentials: Optional[CredentialManager] = None,
    client: Optional[ZohoCRMClient] = None,
) -> List[str]:
    """
    Register all Zoho CRM tools with a FastMCP server.

    Args:
        mcp: FastMCP server instance
        credentials: CredentialManager used to build the client when none is given.
                     Defaults to reading the environment and .env.
        client: Shared client for every tool; built from credentials when omitted

    Returns:
        List of registered tool names
    """
    if client is None:
        if credentials is None:
            from zoho_crm_mcp.credentials import CredentialManager

            credentials = CredentialManager()
        client = ZohoCRMClient.from_credentials(credentials)

    register_records(mcp, client)
    register_metadata(mcp, client)
    register_related(mcp, client)
    register_users(mcp, client)
    register_operations(mcp, client)

    return [
        # Records
        "zoho_get_records",
        "zoho_get_record",
        "zoho_create_records",
        "zoho_update_records",
        "zoho_upsert_records",
        "zoho_delete_records",
        "zoho_search_records",
        "zoho_coql_query",
        "zoho_get_deleted_records",
        "zoho_get_record_count",
        "zoho_convert_lead",
        # Metadata
        "zoho_get_modules",
        "zoho_get_module",
        "zoho_get_fields",
        "zoho_get_field",
        "zoho_get_layouts",
        "zoho_get_layout",
        "zoho_get_custom_views",
        "zoho_get_custom_view",
        "zoho_get_related_lists",
        "zoho_get_roles",
        "zoho_get_profiles",
        "zoho_get_territories",
        "zoho_get_pipelines",
        "zoho_get_scoring_rules",
        "zoho_get_wizards",
        "zoho_get_assignment_rules",
        # Related lists
        "zoho_get_related_records",
        "zoho_update_related_records",
        "zoho_delink_related_records",
        "zoho_get_notes",
        "zoho_create_note",
        "zoho_update_note",
        "zoho_delete_note",
        "zoho_get_attachments",
        "zoho_delete_attachment",
        # Users
        "zoho_get_users",
        "zoho_get_user",
        "zoho_create_user",
        "zoho_update_user",
        "zoho_delete_user",
        "zoho_get_organization",
        "zoho_search_users",
        # Operations
        "zoho_get_tags",
        "zoho_create_tags",
        "zoho_update_tag",
        "zoho_delete_tag",
        "zoho_add_tags_to_records",
        "zoho_remove_tags_from_records",
        "zoho_get_blueprint",
        "zoho_update_blueprint",
        "zoho_bulk_read_create_job",
        "zoho_bulk_read_get_job",
        "zoho_bulk_write_create_job",
        "zoho_bulk_write_get_job",
        "zoho_enable_notifications",
        "zoho_get_notification_details",
        "zoho_disable_notifications",
        "zoho_get_timeline",
        "zoho_get_activities",
        "zoho_send_email",
        "zoho_lock_record",
        "zoho_unlock_record",
        "zoho_share_record",
        "zoho_get_shared_details",
        "zoho_composite_request",
        "zoho_get_record_photo_url",
        "zoho_get_currencies",
        "zoho_get_approvals",
        "zoho_approve_record",
        "zoho_change_owner",
    ]
