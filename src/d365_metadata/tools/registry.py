"""
Tool Registry for the D365 metadata MCP server

Registers the list/show/search/export queries as MCP tools.
"""

import json
from fastmcp import FastMCP
from fastmcp.exceptions import FastMCPError
import structlog

from ..services.metadata import IMetadataService, EntityNotFoundError

logger = structlog.get_logger(__name__)


class ToolRegistry:
    """Centralized tool registration"""

    @staticmethod
    def register_all_tools(mcp: FastMCP, metadata_service: IMetadataService) -> None:
        """Register all metadata query tools"""
        logger.info("Registering metadata tools")

        @mcp.tool
        async def list_entities() -> str:
            """
            List every entity type in the fetched D365 metadata.

            Returns a JSON object with the entity names sorted case-insensitively.
            """
            try:
                names = await metadata_service.list_entities()
                return json.dumps({"entities": names, "total": len(names)}, indent=2)
            except Exception as e:
                logger.error("Entity listing failed", error=str(e))
                raise FastMCPError(f"Failed to list entities: {e}")

        @mcp.tool
        async def search_entities(query: str) -> str:
            """
            Search entity names by partial, case-insensitive match.

            Args:
                query: Part of the entity name (Account, Customer, Ledger, etc.)
            """
            try:
                names = await metadata_service.search_entities(query)
                return json.dumps({"entities": names, "query": query, "total": len(names)}, indent=2)
            except Exception as e:
                logger.error("Entity search failed", error=str(e))
                raise FastMCPError(f"Failed to search entities: {e}")

        @mcp.tool
        async def show_entity(entity_name: str) -> str:
            """
            Get keys, properties and navigation properties of one entity.

            Args:
                entity_name: Exact entity name, any casing
            """
            try:
                entity = await metadata_service.show_entity(entity_name)
            except Exception as e:
                logger.error("Entity lookup failed", entity_name=entity_name, error=str(e))
                raise FastMCPError(f"Failed to show entity: {e}")
            if entity is None:
                raise FastMCPError(f'Entity "{entity_name}" not found.')
            return json.dumps(entity, indent=2)

        @mcp.tool
        async def export_entity_markdown(entity_name: str) -> str:
            """
            Render one entity as a Markdown document.

            Args:
                entity_name: Exact entity name, any casing
            """
            try:
                return await metadata_service.render_entity_markdown(entity_name)
            except EntityNotFoundError as e:
                raise FastMCPError(str(e))
            except Exception as e:
                logger.error("Markdown export failed", entity_name=entity_name, error=str(e))
                raise FastMCPError(f"Failed to export entity: {e}")

        logger.info("All metadata tools registered")
