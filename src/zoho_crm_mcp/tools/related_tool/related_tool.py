"""
Zoho CRM related-list tools.

Related records live under ``<module>/<record_id>/<related_list>``; notes and
attachments are related lists with their own write endpoints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from zoho_crm_mcp.utils.response import to_tool_output

from ..tool_helpers import paging, reject, require_count, tool_annotations

if TYPE_CHECKING:
    from zoho_crm_mcp.client import ZohoCRMClient


def register_tools(mcp: FastMCP, client: ZohoCRMClient) -> None:
    """Register related-list tools with the MCP server."""

    @mcp.tool(annotations=tool_annotations("Get Related Records", read_only=True, idempotent=True))
    async def zoho_get_related_records(
        module: str,
        record_id: str,
        related_list: str,
        fields: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> str:
        """
        Fetch records related to a record through a related list, e.g. the
        Contacts of an Account or the Deals of a Contact.

        Args:
            module: Parent module API name (e.g., Accounts)
            record_id: Parent record ID
            related_list: Related list API name (e.g., Contacts, Notes, Deals)
            fields: Comma-separated field API names
            per_page: Records per page (1-200)
            page: Page number
        """
        query = {"fields": fields, **paging(per_page, page)}
        return to_tool_output(
            await client.call(f"{module}/{record_id}/{related_list}", query=query)
        )

    @mcp.tool(annotations=tool_annotations("Update Related Records", idempotent=True))
    async def zoho_update_related_records(
        module: str,
        record_id: str,
        related_list: str,
        records: list[dict[str, Any]],
    ) -> str:
        """
        Associate records with a parent record, or update the relation fields.

        Args:
            module: Parent module API name
            record_id: Parent record ID
            related_list: Related list API name
            records: Related records to update/associate (1-100, each with "id")
        """
        require_count("records", records, 1, 100)
        return to_tool_output(
            await client.call(
                f"{module}/{record_id}/{related_list}", "PUT", {"data": records}
            )
        )

    @mcp.tool(
        annotations=tool_annotations("Delink Related Records", destructive=True, idempotent=True)
    )
    async def zoho_delink_related_records(
        module: str,
        record_id: str,
        related_list: str,
        ids: str,
    ) -> str:
        """
        Remove the association between a record and related records. The
        related records themselves are kept.

        Args:
            module: Parent module API name
            record_id: Parent record ID
            related_list: Related list API name
            ids: Comma-separated related record IDs to delink
        """
        if not ids.strip():
            reject("ids must not be empty")
        return to_tool_output(
            await client.call(
                f"{module}/{record_id}/{related_list}", "DELETE", query={"ids": ids}
            )
        )

    @mcp.tool(annotations=tool_annotations("Get Notes", read_only=True, idempotent=True))
    async def zoho_get_notes(
        module: str | None = None,
        record_id: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
        fields: str | None = None,
    ) -> str:
        """
        Fetch notes: of one record when module and record_id are both given,
        otherwise all notes.

        Args:
            module: Module API name (if fetching notes for a specific record)
            record_id: Record ID (if fetching notes for a specific record)
            per_page: Records per page (1-200)
            page: Page number
            fields: Comma-separated field API names
        """
        query = {**paging(per_page, page), "fields": fields}
        path = f"{module}/{record_id}/Notes" if module and record_id else "Notes"
        return to_tool_output(await client.call(path, query=query))

    @mcp.tool(annotations=tool_annotations("Create Note"))
    async def zoho_create_note(
        module: str,
        record_id: str,
        note_content: str,
        note_title: str | None = None,
    ) -> str:
        """
        Attach a note to a record.

        Args:
            module: Module API name
            record_id: Record ID to attach the note to
            note_content: Note content/body
            note_title: Note title
        """
        note = {
            "Note_Title": note_title or "",
            "Note_Content": note_content,
            "Parent_Id": {"id": record_id},
            "se_module": module,
        }
        return to_tool_output(
            await client.call(f"{module}/{record_id}/Notes", "POST", {"data": [note]})
        )

    @mcp.tool(annotations=tool_annotations("Update Note", idempotent=True))
    async def zoho_update_note(
        module: str,
        record_id: str,
        note_id: str,
        note_title: str | None = None,
        note_content: str | None = None,
    ) -> str:
        """
        Change a note's title and/or content.

        Args:
            module: Module API name
            record_id: Parent record ID
            note_id: Note ID
            note_title: Updated note title
            note_content: Updated note content
        """
        note: dict[str, Any] = {"id": note_id}
        if note_title is not None:
            note["Note_Title"] = note_title
        if note_content is not None:
            note["Note_Content"] = note_content
        return to_tool_output(
            await client.call(f"{module}/{record_id}/Notes/{note_id}", "PUT", {"data": [note]})
        )

    @mcp.tool(annotations=tool_annotations("Delete Note", destructive=True, idempotent=True))
    async def zoho_delete_note(module: str, record_id: str, note_id: str) -> str:
        """
        Delete a note.

        Args:
            module: Module API name
            record_id: Parent record ID
            note_id: Note ID to delete
        """
        return to_tool_output(
            await client.call(f"{module}/{record_id}/Notes/{note_id}", "DELETE")
        )

    @mcp.tool(annotations=tool_annotations("Get Attachments", read_only=True, idempotent=True))
    async def zoho_get_attachments(module: str, record_id: str) -> str:
        """
        List the attachments of a record.

        Args:
            module: Module API name
            record_id: Record ID
        """
        return to_tool_output(await client.call(f"{module}/{record_id}/Attachments"))

    @mcp.tool(
        annotations=tool_annotations("Delete Attachment", destructive=True, idempotent=True)
    )
    async def zoho_delete_attachment(module: str, record_id: str, attachment_id: str) -> str:
        """
        Delete an attachment from a record.

        Args:
            module: Module API name
            record_id: Record ID
            attachment_id: Attachment ID to delete
        """
        return to_tool_output(
            await client.call(f"{module}/{record_id}/Attachments/{attachment_id}", "DELETE")
        )
