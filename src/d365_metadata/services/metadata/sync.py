"""
Metadata fetch pipeline

fetch -> raw XML snapshot -> XML parse -> normalize -> JSON document
"""

import time
from typing import Dict, Any
import structlog

from ...client import IMetadataClient
from ...parsing import normalize_metadata, parse_metadata_xml
from ...repositories import IMetadataRepository

logger = structlog.get_logger(__name__)


class MetadataSyncService:
    """Downloads metadata and persists both the raw and normalized forms"""

    def __init__(self, client: IMetadataClient, repository: IMetadataRepository):
        self.client = client
        self.repository = repository

    async def fetch_and_store(self, metadata_url: str) -> Dict[str, Any]:
        """
        Run the full pipeline once.

        The raw XML is always written once downloaded. The JSON document is
        only written when parsing and normalization succeed.

        Returns:
            Summary with entity count, file paths and timing
        """
        sync_start = time.time()
        logger.info("Starting metadata synchronization", url=metadata_url)

        metadata_xml = await self.client.fetch_metadata(metadata_url)
        raw_path = await self.repository.save_raw_metadata(metadata_xml)

        tree = parse_metadata_xml(metadata_xml)
        logger.debug("Parsed metadata tree", tree=tree)

        document = normalize_metadata(tree)
        output_path = await self.repository.save_metadata(document)

        stats = {
            "entity_count": len(document["entities"]),
            "xml_size_bytes": len(metadata_xml),
            "raw_path": str(raw_path),
            "output_path": str(output_path),
            "duration_seconds": time.time() - sync_start,
        }

        logger.info("Metadata synchronization completed",
                    entities=stats["entity_count"],
                    duration_seconds=stats["duration_seconds"])
        return stats
