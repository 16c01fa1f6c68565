"""
Metadata Service Implementation

Read-only query layer over the normalized metadata document. Each call
re-reads the document through the repository.
"""

from pathlib import Path
from typing import Dict, Any, List, Optional, Union
import structlog

from .interface import IMetadataService, EntityNotFoundError
from .markdown import render_entity_markdown
from ...repositories import IMetadataRepository

logger = structlog.get_logger(__name__)


def sort_entity_names(names: List[str]) -> List[str]:
    """Case-insensitive ordering, ties broken by the original spelling"""
    return sorted(names, key=lambda name: (name.lower(), name))


class MetadataService(IMetadataService):
    """Metadata query service using the repository pattern"""

    def __init__(self, metadata_repository: IMetadataRepository):
        self.repository = metadata_repository

    async def _entity_names(self) -> List[str]:
        entities = await self.repository.load_entities()
        return [str(entity.get("name")) for entity in entities]

    async def list_entities(self) -> List[str]:
        logger.debug("Listing all entities")
        return sort_entity_names(await self._entity_names())

    async def show_entity(self, entity_name: str) -> Optional[Dict[str, Any]]:
        logger.debug("Getting entity metadata", entity_name=entity_name)

        wanted = entity_name.lower()
        for entity in await self.repository.load_entities():
            name = entity.get("name")
            if isinstance(name, str) and name.lower() == wanted:
                return entity

        logger.debug("Entity not found", entity_name=entity_name)
        return None

    async def search_entities(self, query: str) -> List[str]:
        logger.debug("Searching entities", query=query)

        needle = query.lower()
        return [name for name in await self.list_entities() if needle in name.lower()]

    async def render_entity_markdown(self, entity_name: str) -> str:
        entity = await self.show_entity(entity_name)
        if entity is None:
            raise EntityNotFoundError(entity_name)
        return render_entity_markdown(entity)

    async def export_entity_to_markdown(
        self, entity_name: str, output_path: Union[str, Path]
    ) -> Path:
        markdown = await self.render_entity_markdown(entity_name)

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8")

        logger.info("Entity exported to Markdown", entity_name=entity_name, path=str(path))
        return path
