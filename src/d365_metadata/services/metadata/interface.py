"""
Metadata Service Interface

Defines contract for read-only queries over the normalized metadata
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Any, List, Optional, Union


class EntityNotFoundError(LookupError):
    """Requested entity is not present in the metadata document"""

    def __init__(self, entity_name: str):
        super().__init__(f'Entity "{entity_name}" not found.')
        self.entity_name = entity_name


class IMetadataService(ABC):
    """Interface for metadata query services"""

    @abstractmethod
    async def list_entities(self) -> List[str]:
        """
        List all entity names.

        Returns:
            Entity names sorted case-insensitively
        """
        pass

    @abstractmethod
    async def show_entity(self, entity_name: str) -> Optional[Dict[str, Any]]:
        """
        Find one entity by case-insensitive exact name.

        Args:
            entity_name: Entity name in any casing

        Returns:
            Entity descriptor or None if not found
        """
        pass

    @abstractmethod
    async def search_entities(self, query: str) -> List[str]:
        """
        Find entity names containing ``query`` (case-insensitive).

        Args:
            query: Partial entity name

        Returns:
            Matching names, sorted like list_entities
        """
        pass

    @abstractmethod
    async def render_entity_markdown(self, entity_name: str) -> str:
        """
        Render one entity as a Markdown document.

        Raises:
            EntityNotFoundError: If the entity does not exist
        """
        pass

    @abstractmethod
    async def export_entity_to_markdown(
        self, entity_name: str, output_path: Union[str, Path]
    ) -> Path:
        """
        Write the Markdown rendering of one entity to ``output_path``.

        Returns:
            Path of the written file

        Raises:
            EntityNotFoundError: If the entity does not exist
        """
        pass
