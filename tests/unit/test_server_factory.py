"""
Tests for the MCP server wiring and the metadata tools
"""

import json

import pytest
from fastmcp import Client, FastMCP
from fastmcp.exceptions import ToolError

from d365_metadata.server_factory import ServerFactory


def tool_text(result):
    return result.content[0].text


@pytest.mark.unit
class TestServerFactory:
    async def test_registers_metadata_tools(self, metadata_file):
        mcp = ServerFactory.create_configured_server(metadata_file)

        assert isinstance(mcp, FastMCP)
        async with Client(mcp) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == {
            "list_entities",
            "search_entities",
            "show_entity",
            "export_entity_markdown",
        }


@pytest.mark.unit
class TestMetadataTools:
    @pytest.fixture
    def mcp(self, metadata_file):
        return ServerFactory.create_configured_server(metadata_file)

    async def test_list_entities(self, mcp):
        async with Client(mcp) as client:
            result = await client.call_tool("list_entities", {})

        assert json.loads(tool_text(result)) == {
            "entities": ["Account", "contact", "CustomerGroup"],
            "total": 3,
        }

    async def test_search_entities(self, mcp):
        async with Client(mcp) as client:
            result = await client.call_tool("search_entities", {"query": "cust"})

        assert json.loads(tool_text(result)) == {
            "entities": ["CustomerGroup"],
            "query": "cust",
            "total": 1,
        }

    async def test_show_entity_any_casing(self, mcp, sample_entities):
        async with Client(mcp) as client:
            result = await client.call_tool("show_entity", {"entity_name": "ACCOUNT"})

        assert json.loads(tool_text(result)) == sample_entities[0]

    async def test_show_entity_not_found(self, mcp):
        async with Client(mcp) as client:
            with pytest.raises(ToolError, match='Entity "xyz" not found.'):
                await client.call_tool("show_entity", {"entity_name": "xyz"})

    async def test_export_entity_markdown(self, mcp):
        async with Client(mcp) as client:
            result = await client.call_tool("export_entity_markdown", {"entity_name": "account"})

        markdown = tool_text(result)
        assert markdown.startswith("# Entity: Account\n")
        assert "## Keys" in markdown

    async def test_export_entity_markdown_not_found(self, mcp):
        async with Client(mcp) as client:
            with pytest.raises(ToolError, match='Entity "xyz" not found.'):
                await client.call_tool("export_entity_markdown", {"entity_name": "xyz"})

    @pytest.mark.parametrize(
        "tool, arguments",
        [
            ("list_entities", {}),
            ("search_entities", {"query": "a"}),
            ("show_entity", {"entity_name": "Account"}),
            ("export_entity_markdown", {"entity_name": "Account"}),
        ],
    )
    async def test_missing_metadata_file(self, tmp_path, tool, arguments):
        mcp = ServerFactory.create_configured_server(tmp_path / "missing.json")

        async with Client(mcp) as client:
            with pytest.raises(ToolError, match="Failed to read metadata JSON"):
                await client.call_tool(tool, arguments)
