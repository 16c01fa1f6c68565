"""
Server Factory for the D365 metadata MCP server
"""

from pathlib import Path
from typing import Union
import structlog
from fastmcp import FastMCP

from . import __version__
from .factories import ServiceFactory
from .tools import ToolRegistry

logger = structlog.get_logger(__name__)


class ServerFactory:
    """Factory for creating configured MCP server instances"""

    @staticmethod
    def create_configured_server(metadata_path: Union[str, Path]) -> FastMCP:
        """
        Create an MCP server answering queries over the JSON document at ``metadata_path``.

        Returns:
            FastMCP server with the metadata tools registered
        """
        logger.info("Creating D365 metadata MCP server", metadata_path=str(metadata_path))

        mcp = FastMCP(name="D365-Metadata", version=__version__)
        metadata_service = ServiceFactory.create_metadata_service(metadata_path)
        ToolRegistry.register_all_tools(mcp, metadata_service)

        return mcp
