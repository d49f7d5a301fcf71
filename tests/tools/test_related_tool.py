"""Tests for the Zoho CRM related-list tools."""

from unittest.mock import MagicMock

import pytest
from fastmcp.exceptions import ToolError

from conftest import FakeZoho, make_client, request_json, request_query
from zoho_crm_mcp.tools.related_tool import register_tools


class TestRelatedTools:
    def setup_method(self):
        self.mcp = MagicMock()
        self.fns = []
        self.mcp.tool.return_value = lambda fn: self.fns.append(fn) or fn
        self.zoho = FakeZoho()
        register_tools(self.mcp, make_client(self.zoho.handler))

    def _fn(self, name):
        return next(f for f in self.fns if f.__name__ == name)

    @pytest.mark.asyncio
    async def test_get_related_records(self):
        await self._fn("zoho_get_related_records")(
            module="Accounts", record_id="1", related_list="Contacts", fields="Email", page=3
        )

        request = self.zoho.last
        assert request.url.path == "/crm/v7/Accounts/1/Contacts"
        assert request_query(request) == {"fields": "Email", "page": "3"}

    @pytest.mark.asyncio
    async def test_update_related_records(self):
        await self._fn("zoho_update_related_records")(
            module="Deals", record_id="1", related_list="Contact_Roles", records=[{"id": "2"}]
        )

        assert self.zoho.last.method == "PUT"
        assert request_json(self.zoho.last) == {"data": [{"id": "2"}]}

    @pytest.mark.asyncio
    async def test_delink_related_records(self):
        await self._fn("zoho_delink_related_records")(
            module="Accounts", record_id="1", related_list="Contacts", ids="2,3"
        )

        assert self.zoho.last.method == "DELETE"
        assert request_query(self.zoho.last) == {"ids": "2,3"}

    @pytest.mark.asyncio
    async def test_delink_requires_ids(self):
        with pytest.raises(ToolError):
            await self._fn("zoho_delink_related_records")(
                module="Accounts", record_id="1", related_list="Contacts", ids=" "
            )

    @pytest.mark.asyncio
    async def test_get_notes_for_record(self):
        await self._fn("zoho_get_notes")(module="Leads", record_id="9", per_page=5)

        assert self.zoho.last.url.path == "/crm/v7/Leads/9/Notes"
        assert request_query(self.zoho.last) == {"per_page": "5"}

    @pytest.mark.asyncio
    async def test_get_all_notes(self):
        await self._fn("zoho_get_notes")()
        assert self.zoho.last.url.path == "/crm/v7/Notes"

    @pytest.mark.asyncio
    async def test_create_note(self):
        await self._fn("zoho_create_note")(
            module="Leads", record_id="9", note_content="Called back"
        )

        request = self.zoho.last
        assert request.method == "POST"
        assert request.url.path == "/crm/v7/Leads/9/Notes"
        assert request_json(request) == {
            "data": [
                {
                    "Note_Title": "",
                    "Note_Content": "Called back",
                    "Parent_Id": {"id": "9"},
                    "se_module": "Leads",
                }
            ]
        }

    @pytest.mark.asyncio
    async def test_update_note_sends_only_given_fields(self):
        await self._fn("zoho_update_note")(
            module="Leads", record_id="9", note_id="5", note_title="New title"
        )

        request = self.zoho.last
        assert request.url.path == "/crm/v7/Leads/9/Notes/5"
        assert request_json(request) == {"data": [{"id": "5", "Note_Title": "New title"}]}

    @pytest.mark.asyncio
    async def test_delete_note(self):
        await self._fn("zoho_delete_note")(module="Leads", record_id="9", note_id="5")

        assert self.zoho.last.method == "DELETE"
        assert self.zoho.last.url.path == "/crm/v7/Leads/9/Notes/5"

    @pytest.mark.asyncio
    async def test_attachments(self):
        await self._fn("zoho_get_attachments")(module="Deals", record_id="4")
        assert self.zoho.last.url.path == "/crm/v7/Deals/4/Attachments"

        await self._fn("zoho_delete_attachment")(module="Deals", record_id="4", attachment_id="6")
        assert self.zoho.last.method == "DELETE"
        assert self.zoho.last.url.path == "/crm/v7/Deals/4/Attachments/6"
