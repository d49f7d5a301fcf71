"""
Zoho CRM record tools: CRUD, upsert, search, COQL, deleted records, counts
and lead conversion.

API Reference: https://www.zoho.com/crm/developer/docs/api/v7/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from fastmcp import FastMCP

from zoho_crm_mcp.utils.response import to_tool_output

from ..tool_helpers import paging, reject, require_count, tool_annotations

if TYPE_CHECKING:
    from zoho_crm_mcp.client import ZohoCRMClient

MAX_RECORDS_PER_CALL = 100


def register_tools(mcp: FastMCP, client: ZohoCRMClient) -> None:
    """Register record tools with the MCP server."""

    @mcp.tool(annotations=tool_annotations("Get Records", read_only=True, idempotent=True))
    async def zoho_get_records(
        module: str,
        fields: str,
        per_page: int | None = None,
        page: int | None = None,
        page_token: str | None = None,
        sort_by: Literal["id", "Created_Time", "Modified_Time"] | None = None,
        sort_order: Literal["asc", "desc"] | None = None,
        cvid: str | None = None,
    ) -> str:
        """
        List records of a module.

        Args:
            module: Module API name (e.g., Leads, Contacts, Deals)
            fields: Comma-separated field API names to return (required by the API)
            per_page: Records per page (1-200)
            page: Page number (pages beyond 2,000 records need page_token)
            page_token: Token from a previous response's info.next_page_token
            sort_by: Field to sort by
            sort_order: Sort direction
            cvid: Custom view ID to list records from

        Returns:
            JSON with data (records) and info (pagination)
        """
        query = {
            "fields": fields,
            **paging(per_page, page),
            "page_token": page_token,
            "sort_by": sort_by,
            "sort_order": sort_order,
            "cvid": cvid,
        }
        return to_tool_output(await client.call(module, query=query))

    @mcp.tool(annotations=tool_annotations("Get Record", read_only=True, idempotent=True))
    async def zoho_get_record(module: str, record_id: str, fields: str | None = None) -> str:
        """
        Fetch a single record by ID.

        Args:
            module: Module API name
            record_id: Record ID
            fields: Optional comma-separated field API names
        """
        return to_tool_output(
            await client.call(f"{module}/{record_id}", query={"fields": fields})
        )

    @mcp.tool(annotations=tool_annotations("Create Records"))
    async def zoho_create_records(
        module: str,
        records: list[dict[str, Any]],
        trigger: list[Literal["approval", "workflow", "blueprint"]] | None = None,
    ) -> str:
        """
        Create up to 100 records in a module.

        Args:
            module: Module API name
            records: Records as field API name -> value maps
                (e.g., {"Last_Name": "Smith", "Company": "Acme"})
            trigger: Automation to run on insert; omitted means Zoho's default

        Returns:
            Per-record status with the IDs of created records
        """
        require_count("records", records, 1, MAX_RECORDS_PER_CALL)
        body: dict[str, Any] = {"data": records}
        if trigger is not None:
            body["trigger"] = trigger
        return to_tool_output(await client.call(module, "POST", body))

    @mcp.tool(annotations=tool_annotations("Update Records", idempotent=True))
    async def zoho_update_records(
        module: str,
        records: list[dict[str, Any]],
        trigger: list[Literal["approval", "workflow", "blueprint"]] | None = None,
    ) -> str:
        """
        Update up to 100 existing records. Each record must carry its "id".

        Args:
            module: Module API name
            records: Records with "id" plus the fields to change
            trigger: Automation to run on update
        """
        require_count("records", records, 1, MAX_RECORDS_PER_CALL)
        if any(not record.get("id") for record in records):
            reject('every record must include an "id"')
        body: dict[str, Any] = {"data": records}
        if trigger is not None:
            body["trigger"] = trigger
        return to_tool_output(await client.call(module, "PUT", body))

    @mcp.tool(annotations=tool_annotations("Upsert Records", idempotent=True))
    async def zoho_upsert_records(
        module: str,
        records: list[dict[str, Any]],
        duplicate_check_fields: list[str] | None = None,
    ) -> str:
        """
        Insert records, or update them when a duplicate already exists.

        Args:
            module: Module API name
            records: Records to insert or update (max 100)
            duplicate_check_fields: Field API names used to detect duplicates
                (defaults to the module's unique fields)
        """
        require_count("records", records, 1, MAX_RECORDS_PER_CALL)
        body: dict[str, Any] = {"data": records}
        if duplicate_check_fields:
            body["duplicate_check_fields"] = duplicate_check_fields
        return to_tool_output(await client.call(f"{module}/upsert", "POST", body))

    @mcp.tool(
        annotations=tool_annotations("Delete Records", destructive=True, idempotent=True)
    )
    async def zoho_delete_records(
        module: str,
        record_ids: list[str],
        wf_trigger: bool | None = None,
    ) -> str:
        """
        Move up to 100 records to the recycle bin.

        Args:
            module: Module API name
            record_ids: IDs of the records to delete
            wf_trigger: Whether workflow rules run on delete
        """
        require_count("record_ids", record_ids, 1, MAX_RECORDS_PER_CALL)
        query = {"ids": ",".join(record_ids), "wf_trigger": wf_trigger}
        return to_tool_output(await client.call(module, "DELETE", query=query))

    @mcp.tool(annotations=tool_annotations("Search Records", read_only=True, idempotent=True))
    async def zoho_search_records(
        module: str,
        criteria: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        word: str | None = None,
        fields: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> str:
        """
        Search records. Provide at least one of criteria, email, phone or word.

        Args:
            module: Module API name
            criteria: Criteria expression, e.g. ((Last_Name:equals:Smith)and(City:equals:Austin))
            email: Match any email field
            phone: Match any phone field
            word: Match any text field
            fields: Optional comma-separated field API names
            per_page: Records per page (1-200)
            page: Page number
        """
        if not any((criteria, email, phone, word)):
            reject("Provide at least one of: criteria, email, phone, word")
        query = {
            "criteria": criteria,
            "email": email,
            "phone": phone,
            "word": word,
            "fields": fields,
            **paging(per_page, page),
        }
        return to_tool_output(await client.call(f"{module}/search", query=query))

    @mcp.tool(annotations=tool_annotations("COQL Query", read_only=True, idempotent=True))
    async def zoho_coql_query(select_query: str) -> str:
        """
        Run a CRM Object Query Language SELECT statement.

        Args:
            select_query: e.g. "select Last_Name, Email from Leads where City = 'Austin' limit 50"
        """
        if not select_query.strip():
            reject("select_query must not be empty")
        return to_tool_output(await client.call("coql", "POST", {"select_query": select_query}))

    @mcp.tool(
        annotations=tool_annotations("Get Deleted Records", read_only=True, idempotent=True)
    )
    async def zoho_get_deleted_records(
        module: str,
        type: Literal["all", "recycle", "permanent"] | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> str:
        """
        List deleted records of a module.

        Args:
            module: Module API name
            type: all, recycle (still in the recycle bin) or permanent
            per_page: Records per page (1-200)
            page: Page number
        """
        query = {"type": type, **paging(per_page, page)}
        return to_tool_output(await client.call(f"{module}/deleted", query=query))

    @mcp.tool(annotations=tool_annotations("Get Record Count", read_only=True, idempotent=True))
    async def zoho_get_record_count(
        module: str,
        criteria: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        word: str | None = None,
        cvid: str | None = None,
    ) -> str:
        """
        Count the records of a module, optionally filtered.

        Args:
            module: Module API name
            criteria: Optional criteria expression
            email: Optional email filter
            phone: Optional phone filter
            word: Optional keyword filter
            cvid: Optional custom view ID
        """
        query = {
            "criteria": criteria,
            "email": email,
            "phone": phone,
            "word": word,
            "cvid": cvid,
        }
        return to_tool_output(await client.call(f"{module}/actions/count", query=query))

    @mcp.tool(annotations=tool_annotations("Convert Lead"))
    async def zoho_convert_lead(
        lead_id: str,
        overwrite: bool | None = None,
        notify_lead_owner: bool | None = None,
        notify_new_entity_owner: bool | None = None,
        account_id: str | None = None,
        contact_id: str | None = None,
        assign_to: str | None = None,
        deal: dict[str, Any] | None = None,
    ) -> str:
        """
        Convert a lead into a contact, an account and optionally a deal.

        Args:
            lead_id: Lead record ID
            overwrite: Overwrite existing account/contact fields with lead data
            notify_lead_owner: Email the lead owner about the conversion
            notify_new_entity_owner: Email the owner of the new records
            account_id: Existing account to associate instead of creating one
            contact_id: Existing contact to associate instead of creating one
            assign_to: User ID that will own the new records
            deal: Optional deal to create (e.g. {"Deal_Name": "...", "Stage": "..."})
        """
        conversion: dict[str, Any] = {}
        if overwrite is not None:
            conversion["overwrite"] = overwrite
        if notify_lead_owner is not None:
            conversion["notify_lead_owner"] = notify_lead_owner
        if notify_new_entity_owner is not None:
            conversion["notify_new_entity_owner"] = notify_new_entity_owner
        if account_id:
            conversion["Accounts"] = {"id": account_id}
        if contact_id:
            conversion["Contacts"] = {"id": contact_id}
        if assign_to:
            conversion["assign_to"] = {"id": assign_to}
        if deal:
            conversion["Deals"] = deal
        return to_tool_output(
            await client.call(f"Leads/{lead_id}/actions/convert", "POST", {"data": [conversion]})
        )
