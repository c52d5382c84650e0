"""End-to-end tests through the FastMCP server with an in-memory client."""

import json

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from tests.conftest import REMOTE_ERROR
from tools.mcp_server import create_server


EXPECTED_TOOLS = {
    "list-odoo-models",
    "get-model-fields",
    "get-model-records",
    "search-model",
    "search-records",
    "count-records",
    "get-record",
    "get-related-models",
    "get-model-methods",
}


@pytest.fixture
def server(explorer):
    return create_server(explorer)


def _only_text(result):
    assert len(result.content) == 1
    block = result.content[0]
    assert block.type == "text"
    return block.text


class TestToolSurface:
    @pytest.mark.asyncio
    async def test_all_tools_registered(self, server):
        async with Client(server) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == EXPECTED_TOOLS

    @pytest.mark.asyncio
    async def test_search_records_schema(self, server):
        async with Client(server) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        schema = tools["search-records"].inputSchema
        assert schema["required"] == ["model"]
        assert set(schema["properties"]) == {"model", "domain", "fields", "limit", "offset", "order"}


class TestScenario:
    @pytest.mark.asyncio
    async def test_search_and_count_partners(self, server, fake_odoo):
        async with Client(server) as client:
            search = _only_text(await client.call_tool("search-records", {"model": "res.partner"}))
            count = _only_text(await client.call_tool("count-records", {"model": "res.partner"}))

        assert "Found 2 record(s)" in search
        records = [json.loads(chunk) for chunk in search.split("\n\n", 1)[1].split("\n---\n")]
        assert records == [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]
        assert "Found 2 record(s) in res.partner." in count
        assert "matching the domain filter" not in count
        assert len(fake_odoo.login_calls) == 1

    @pytest.mark.asyncio
    async def test_get_model_fields_suffixes(self, server):
        async with Client(server) as client:
            text = _only_text(await client.call_tool("get-model-fields", {"model": "res.partner"}))

        assert "parent_id: Related Company (many2one) → res.partner" in text
        assert "name: Name (char) [required]" in text

    @pytest.mark.asyncio
    async def test_get_record_not_found(self, server):
        async with Client(server) as client:
            text = _only_text(await client.call_tool("get-record", {"model": "res.partner", "record_id": 99}))

        assert text == "No record found with ID 99 in model res.partner"

    @pytest.mark.asyncio
    async def test_search_records_with_mixed_domain(self, server, fake_odoo):
        domain = ["|", ["name", "=", "Bob"], ["active", "=", True]]
        async with Client(server) as client:
            await client.call_tool("search-records", {"model": "res.partner", "domain": domain, "limit": 0})

        assert fake_odoo.last_call()[5:] == [domain, {"limit": 1}]


class TestErrorPolicy:
    @pytest.mark.asyncio
    async def test_list_models_fails_hard(self, server, fake_odoo):
        fake_odoo.errors["search_read"] = REMOTE_ERROR

        async with Client(server) as client:
            with pytest.raises(ToolError):
                await client.call_tool("list-odoo-models", {})

    @pytest.mark.asyncio
    async def test_search_records_degrades_to_text(self, server, fake_odoo):
        fake_odoo.errors["search_read"] = REMOTE_ERROR

        async with Client(server) as client:
            text = _only_text(await client.call_tool("search-records", {"model": "res.partner"}))

        assert text.startswith("Error searching records in")

    @pytest.mark.asyncio
    async def test_login_failure_fails_degrading_tool_too(self, server, fake_odoo):
        fake_odoo.errors["login"] = REMOTE_ERROR

        async with Client(server) as client:
            with pytest.raises(ToolError):
                await client.call_tool("count-records", {"model": "res.partner"})
