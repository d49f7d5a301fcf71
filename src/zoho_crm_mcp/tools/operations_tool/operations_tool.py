"""
Zoho CRM operations tools.

API Reference: https://www.zoho.com/crm/developer/docs/api/v7/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from fastmcp import FastMCP

from zoho_crm_mcp.utils.response import build_tool_response, to_tool_output

from ..tool_helpers import paging, reject, require_count, require_range, tool_annotations

if TYPE_CHECKING:
    from zoho_crm_mcp.client import ZohoCRMClient

COMPOSITE_METHODS = ("GET", "POST", "PUT", "DELETE")
ACTIVITY_MODULES = {"tasks": "Tasks", "events": "Events", "calls": "Calls"}


def _mail_recipients(emails: list[str]) -> list[dict[str, str]]:
    return [{"email": email, "user_name": email} for email in emails]


def register_tools(mcp: FastMCP, client: ZohoCRMClient) -> None:
    """Register operations tools with the MCP server."""

    # ---- Tags ----

    @mcp.tool(annotations=tool_annotations("Get Tags", read_only=True, idempotent=True))
    async def zoho_get_tags(module: str) -> str:
        """
        List the tags of a module.

        Args:
            module: Module API name
        """
        return to_tool_output(await client.call("settings/tags", query={"module": module}))

    @mcp.tool(annotations=tool_annotations("Create Tags"))
    async def zoho_create_tags(module: str, tags: list[str]) -> str:
        """
        Create tags for a module.

        Args:
            module: Module API name
            tags: Tag names to create (1-50)
        """
        require_count("tags", tags, 1, 50)
        body = {"tags": [{"name": name} for name in tags]}
        return to_tool_output(
            await client.call("settings/tags", "POST", body, query={"module": module})
        )

    @mcp.tool(annotations=tool_annotations("Update Tag", idempotent=True))
    async def zoho_update_tag(tag_id: str, module: str, new_name: str) -> str:
        """
        Rename a tag.

        Args:
            tag_id: Tag ID
            module: Module API name
            new_name: New tag name
        """
        return to_tool_output(
            await client.call(
                f"settings/tags/{tag_id}",
                "PUT",
                {"tags": [{"name": new_name}]},
                query={"module": module},
            )
        )

    @mcp.tool(annotations=tool_annotations("Delete Tag", destructive=True, idempotent=True))
    async def zoho_delete_tag(tag_id: str) -> str:
        """
        Delete a tag.

        Args:
            tag_id: Tag ID to delete
        """
        return to_tool_output(await client.call(f"settings/tags/{tag_id}", "DELETE"))

    @mcp.tool(annotations=tool_annotations("Add Tags to Records", idempotent=True))
    async def zoho_add_tags_to_records(
        module: str, record_ids: list[str], tag_names: list[str]
    ) -> str:
        """
        Tag records. Tags that do not exist yet are created.

        Args:
            module: Module API name
            record_ids: Record IDs (1-100)
            tag_names: Tag names to add (1-10)
        """
        require_count("record_ids", record_ids, 1, 100)
        require_count("tag_names", tag_names, 1, 10)
        body = {"data": [{"id": rid} for rid in record_ids], "tag_names": tag_names}
        return to_tool_output(await client.call(f"{module}/actions/add_tags", "POST", body))

    @mcp.tool(annotations=tool_annotations("Remove Tags from Records", idempotent=True))
    async def zoho_remove_tags_from_records(
        module: str, record_ids: list[str], tag_names: list[str]
    ) -> str:
        """
        Remove tags from records.

        Args:
            module: Module API name
            record_ids: Record IDs (1-100)
            tag_names: Tag names to remove (1-10)
        """
        require_count("record_ids", record_ids, 1, 100)
        require_count("tag_names", tag_names, 1, 10)
        body = {"data": [{"id": rid} for rid in record_ids], "tag_names": tag_names}
        return to_tool_output(await client.call(f"{module}/actions/remove_tags", "POST", body))

    # ---- Blueprint ----

    @mcp.tool(annotations=tool_annotations("Get Blueprint", read_only=True, idempotent=True))
    async def zoho_get_blueprint(module: str, record_id: str) -> str:
        """
        Fetch the blueprint (process flow) of a record: its current state and
        the transitions available from it.

        Args:
            module: Module API name
            record_id: Record ID
        """
        return to_tool_output(await client.call(f"{module}/{record_id}/actions/blueprint"))

    @mcp.tool(annotations=tool_annotations("Update Blueprint Transition"))
    async def zoho_update_blueprint(
        module: str,
        record_id: str,
        transition_id: str,
        data: dict[str, Any] | None = None,
    ) -> str:
        """
        Execute a blueprint transition on a record.

        Args:
            module: Module API name
            record_id: Record ID
            transition_id: Transition ID (from zoho_get_blueprint)
            data: Field values the transition requires
        """
        body = {"blueprint": [{"transition_id": transition_id, "data": data or {}}]}
        return to_tool_output(
            await client.call(f"{module}/{record_id}/actions/blueprint", "PUT", body)
        )

    # ---- Bulk ----

    @mcp.tool(annotations=tool_annotations("Create Bulk Read Job"))
    async def zoho_bulk_read_create_job(
        module: str,
        fields: list[str] | None = None,
        criteria: dict[str, Any] | None = None,
        page: int | None = None,
    ) -> str:
        """
        Start an asynchronous export of a module's records (up to 200,000 per
        page) as a CSV file. Poll zoho_bulk_read_get_job for the download URL.

        Args:
            module: Module API name
            fields: Field API names to export
            criteria: Filter criteria object, e.g.
                {"field": {"api_name": "Lead_Status"}, "comparator": "equal", "value": "Contacted"}
            page: Page number
        """
        require_range("page", page, 1)
        query: dict[str, Any] = {"module": {"api_name": module}}
        if fields:
            query["file_type"] = "csv"
            query["fields"] = [{"api_name": name} for name in fields]
        if criteria:
            query["criteria"] = criteria
        if page:
            query["page"] = page
        return to_tool_output(await client.call("bulk-read", "POST", {"query": query}))

    @mcp.tool(
        annotations=tool_annotations("Get Bulk Read Job Status", read_only=True, idempotent=True)
    )
    async def zoho_bulk_read_get_job(job_id: str) -> str:
        """
        Check a bulk read job. Completed jobs include the download URL.

        Args:
            job_id: Bulk read job ID
        """
        return to_tool_output(await client.call(f"bulk-read/{job_id}"))

    @mcp.tool(annotations=tool_annotations("Create Bulk Write Job"))
    async def zoho_bulk_write_create_job(
        module: str,
        file_id: str,
        operation: Literal["insert", "update", "upsert"],
        find_by: str | None = None,
    ) -> str:
        """
        Start an asynchronous import from a file already uploaded to Zoho's
        bulk upload endpoint.

        Args:
            module: Module API name
            file_id: Uploaded file ID
            operation: insert, update or upsert
            find_by: Field API name used to match existing records (update/upsert)
        """
        resource: dict[str, Any] = {
            "type": "data",
            "module": {"api_name": module},
            "file_id": file_id,
        }
        if find_by:
            resource["find_by"] = find_by
        body = {"operation": operation, "resource": [resource]}
        return to_tool_output(await client.call("bulk-write", "POST", body))

    @mcp.tool(
        annotations=tool_annotations("Get Bulk Write Job Status", read_only=True, idempotent=True)
    )
    async def zoho_bulk_write_get_job(job_id: str) -> str:
        """
        Check a bulk write job.

        Args:
            job_id: Bulk write job ID
        """
        return to_tool_output(await client.call(f"bulk-write/{job_id}"))

    # ---- Notifications ----

    @mcp.tool(annotations=tool_annotations("Enable Notifications (Watch)", idempotent=True))
    async def zoho_enable_notifications(
        channel_id: str,
        events: list[str],
        notify_url: str,
        token: str | None = None,
        channel_expiry: str | None = None,
    ) -> str:
        """
        Subscribe a webhook to record changes.

        Args:
            channel_id: Unique channel ID (numeric string)
            events: Event types like "Leads.create", "Deals.edit", "Contacts.all"
            notify_url: Webhook URL that receives the notifications
            token: Verification token echoed back in each notification
            channel_expiry: Expiry datetime in ISO 8601 format (max one day ahead)
        """
        require_count("events", events, 1)
        watch: dict[str, Any] = {
            "channel_id": channel_id,
            "events": events,
            "notify_url": notify_url,
        }
        if token:
            watch["token"] = token
        if channel_expiry:
            watch["channel_expiry"] = channel_expiry
        return to_tool_output(await client.call("actions/watch", "POST", {"watch": [watch]}))

    @mcp.tool(
        annotations=tool_annotations("Get Notification Details", read_only=True, idempotent=True)
    )
    async def zoho_get_notification_details(channel_ids: str | None = None) -> str:
        """
        List active notification channels.

        Args:
            channel_ids: Comma-separated channel IDs
        """
        return to_tool_output(
            await client.call("actions/watch", query={"channel_ids": channel_ids})
        )

    @mcp.tool(
        annotations=tool_annotations("Disable Notifications", destructive=True, idempotent=True)
    )
    async def zoho_disable_notifications(
        channel_ids: list[str], events: list[str] | None = None
    ) -> str:
        """
        Unsubscribe channels, entirely or from specific events.

        Args:
            channel_ids: Channel IDs to disable
            events: Specific events to disable; all events when omitted
        """
        require_count("channel_ids", channel_ids, 1)
        watch = []
        for channel_id in channel_ids:
            item: dict[str, Any] = {"channel_id": channel_id}
            if events:
                item["events"] = events
            watch.append(item)
        return to_tool_output(await client.call("actions/watch", "PATCH", {"watch": watch}))

    # ---- Timeline and activities ----

    @mcp.tool(annotations=tool_annotations("Get Record Timeline", read_only=True, idempotent=True))
    async def zoho_get_timeline(
        module: str,
        record_id: str,
        per_page: int | None = None,
        page_token: str | None = None,
    ) -> str:
        """
        Fetch the audit timeline of a record: field updates, automation and
        related-record activity.

        Args:
            module: Module API name
            record_id: Record ID
            per_page: Records per page (1-200)
            page_token: Page token for pagination
        """
        require_range("per_page", per_page, 1, 200)
        query = {"per_page": per_page, "page_token": page_token}
        return to_tool_output(await client.call(f"{module}/{record_id}/__timeline", query=query))

    @mcp.tool(annotations=tool_annotations("Get Activities", read_only=True, idempotent=True))
    async def zoho_get_activities(
        type: Literal["tasks", "events", "calls"] | None = None,
        per_page: int | None = None,
        page: int | None = None,
        fields: str | None = None,
        sort_by: str | None = None,
        sort_order: Literal["asc", "desc"] | None = None,
    ) -> str:
        """
        List activities: tasks, events and calls, or one kind of them.

        Args:
            type: Activity type filter
            per_page: Records per page (1-200)
            page: Page number
            fields: Comma-separated field API names
            sort_by: Field to sort by
            sort_order: Sort direction
        """
        module = ACTIVITY_MODULES.get(type or "", "Activities")
        query = {
            **paging(per_page, page),
            "fields": fields,
            "sort_by": sort_by,
            "sort_order": sort_order,
        }
        return to_tool_output(await client.call(module, query=query))

    # ---- Email ----

    @mcp.tool(annotations=tool_annotations("Send Email", open_world=True))
    async def zoho_send_email(
        module: str,
        record_id: str,
        from_email: str,
        to_emails: list[str],
        subject: str,
        content: str,
        cc: list[str] | None = None,
        bcc: list[str] | None = None,
        mail_format: Literal["text", "html"] | None = None,
    ) -> str:
        """
        Send an email from the CRM, logged against a record.

        Args:
            module: Module API name (e.g., Leads, Contacts)
            record_id: Record ID
            from_email: Sender address (must be configured in the CRM)
            to_emails: Recipient addresses
            subject: Email subject
            content: Email body (HTML supported)
            cc: CC addresses
            bcc: BCC addresses
            mail_format: text or html (default html)
        """
        require_count("to_emails", to_emails, 1)
        mail: dict[str, Any] = {
            "from": {"user_name": from_email, "email": from_email},
            "to": _mail_recipients(to_emails),
            "subject": subject,
            "content": content,
            "mail_format": mail_format or "html",
        }
        if cc:
            mail["cc"] = _mail_recipients(cc)
        if bcc:
            mail["bcc"] = _mail_recipients(bcc)
        return to_tool_output(
            await client.call(f"{module}/{record_id}/actions/send_mail", "POST", {"data": [mail]})
        )

    # ---- Locking ----

    @mcp.tool(annotations=tool_annotations("Lock Record", idempotent=True))
    async def zoho_lock_record(
        module: str, record_id: str, locked_reason: str | None = None
    ) -> str:
        """
        Lock a record. Only admins and the lock owner can edit it afterwards.

        Args:
            module: Module API name
            record_id: Record ID
            locked_reason: Reason for locking
        """
        lock: dict[str, Any] = {}
        if locked_reason:
            lock["$locked_reason"] = locked_reason
        return to_tool_output(
            await client.call(f"{module}/{record_id}/Locking", "POST", {"data": [lock]})
        )

    @mcp.tool(annotations=tool_annotations("Unlock Record", idempotent=True))
    async def zoho_unlock_record(module: str, record_id: str, lock_id: str) -> str:
        """
        Unlock a previously locked record.

        Args:
            module: Module API name
            record_id: Record ID
            lock_id: Lock ID
        """
        return to_tool_output(
            await client.call(f"{module}/{record_id}/Locking/{lock_id}", "DELETE")
        )

    # ---- Sharing ----

    @mcp.tool(annotations=tool_annotations("Share Record", idempotent=True))
    async def zoho_share_record(
        module: str,
        record_id: str,
        user_id: str,
        permission: Literal["read-only", "read-write", "full-access"],
    ) -> str:
        """
        Share a record with a user.

        Args:
            module: Module API name
            record_id: Record ID
            user_id: User ID to share with
            permission: Permission level
        """
        share = {
            "share_related_records": False,
            "shared_to": {"id": user_id, "type": "users"},
            "permission": permission,
        }
        return to_tool_output(
            await client.call(f"{module}/{record_id}/actions/share", "POST", {"data": [share]})
        )

    @mcp.tool(
        annotations=tool_annotations("Get Shared Record Details", read_only=True, idempotent=True)
    )
    async def zoho_get_shared_details(module: str, record_id: str) -> str:
        """
        Show who a record is shared with and at what permission.

        Args:
            module: Module API name
            record_id: Record ID
        """
        return to_tool_output(await client.call(f"{module}/{record_id}/actions/share"))

    # ---- Composite ----

    @mcp.tool(annotations=tool_annotations("Composite API Request"))
    async def zoho_composite_request(requests: list[dict[str, Any]]) -> str:
        """
        Execute up to 5 API calls in a single request.

        Args:
            requests: Sub-requests, each with:
                method: GET, POST, PUT or DELETE
                url: API path (e.g., /crm/v7/Leads)
                reference_id: Unique reference ID for this sub-request
                body: Optional request body (for POST/PUT)
        """
        require_count("requests", requests, 1, 5)
        for index, sub_request in enumerate(requests):
            if sub_request.get("method") not in COMPOSITE_METHODS:
                reject(f"requests[{index}].method must be one of: {', '.join(COMPOSITE_METHODS)}")
            if not sub_request.get("url") or not sub_request.get("reference_id"):
                reject(f"requests[{index}] needs url and reference_id")
        return to_tool_output(await client.call("composite", "POST", {"__request": requests}))

    # ---- Misc ----

    @mcp.tool(annotations=tool_annotations("Get Record Photo URL", read_only=True, idempotent=True))
    async def zoho_get_record_photo_url(module: str, record_id: str) -> str:
        """
        Get the URL of a record's photo (e.g., a Contact or Lead photo). No
        request is made; fetching the image needs an Authorization header.

        Args:
            module: Module API name
            record_id: Record ID
        """
        return to_tool_output(
            build_tool_response(
                {
                    "photo_url": client.photo_url(module, record_id),
                    "note": "Use this URL with an Authorization header to fetch the image.",
                }
            )
        )

    @mcp.tool(annotations=tool_annotations("Get Currencies", read_only=True, idempotent=True))
    async def zoho_get_currencies() -> str:
        """List the currencies configured in the CRM, with exchange rates."""
        return to_tool_output(await client.call("org/currencies"))

    @mcp.tool(annotations=tool_annotations("Get Approval Records", read_only=True, idempotent=True))
    async def zoho_get_approvals() -> str:
        """List records awaiting the current user's approval."""
        return to_tool_output(await client.call("actions/approvals"))

    @mcp.tool(annotations=tool_annotations("Approve/Reject Record"))
    async def zoho_approve_record(
        record_id: str,
        action: Literal["approve", "reject", "delegate"],
        comments: str | None = None,
    ) -> str:
        """
        Approve, reject or delegate a record pending approval.

        Args:
            record_id: Record ID
            action: Approval action
            comments: Comments for the approval/rejection
        """
        body: dict[str, Any] = {}
        if comments:
            body["comments"] = comments
        return to_tool_output(
            await client.call(f"actions/approvals/{record_id}/{action}", "POST", body)
        )

    @mcp.tool(annotations=tool_annotations("Change Record Owner", idempotent=True))
    async def zoho_change_owner(
        module: str,
        record_ids: list[str],
        owner_id: str,
        notify: bool | None = None,
    ) -> str:
        """
        Transfer ownership of records to another user.

        Args:
            module: Module API name
            record_ids: Record IDs (1-100)
            owner_id: New owner user ID
            notify: Notify the new owner
        """
        require_count("record_ids", record_ids, 1, 100)
        body: dict[str, Any] = {
            "data": [{"id": rid, "Owner": {"id": owner_id}} for rid in record_ids]
        }
        if notify is not None:
            body["notify"] = notify
        return to_tool_output(await client.call(module, "PUT", body))
