"""
Service Factory

Creates service instances using repository and client dependencies.
"""

from pathlib import Path
from typing import Optional, Union
import httpx
import structlog

from ..auth import IAuthProvider
from ..client import D365MetadataClient
from ..repositories import JsonMetadataRepository
from ..services.metadata import MetadataService, MetadataSyncService

logger = structlog.get_logger(__name__)


class ServiceFactory:
    """Factory for creating service instances with proper dependency injection"""

    @staticmethod
    def create_metadata_service(metadata_path: Union[str, Path]) -> MetadataService:
        """Create the query service over the JSON document at ``metadata_path``"""
        logger.debug("Creating metadata service", metadata_path=str(metadata_path))
        return MetadataService(JsonMetadataRepository(metadata_path))

    @staticmethod
    def create_sync_service(
        auth_provider: IAuthProvider,
        metadata_path: Union[str, Path],
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> MetadataSyncService:
        """
        Create the fetch pipeline.

        Args:
            auth_provider: Source of the bearer token
            metadata_path: Destination of the normalized JSON
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        logger.debug("Creating metadata sync service", metadata_path=str(metadata_path))
        client = D365MetadataClient(auth_provider, timeout=timeout, transport=transport)
        return MetadataSyncService(client, JsonMetadataRepository(metadata_path))
