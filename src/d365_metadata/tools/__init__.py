"""
MCP tools exposing the metadata query layer
"""

from .registry import ToolRegistry

__all__ = ["ToolRegistry"]
