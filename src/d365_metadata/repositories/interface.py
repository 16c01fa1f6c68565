"""
Metadata Repository Interface

Defines contract for storage of the raw and normalized metadata documents
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Any, List


class MetadataFileError(Exception):
    """Metadata JSON is missing, unreadable or not in the expected shape"""
    pass


class IMetadataRepository(ABC):
    """Interface for metadata storage repositories"""

    @abstractmethod
    async def save_raw_metadata(self, metadata_xml: str) -> Path:
        """
        Persist the raw $metadata XML next to the normalized document.

        Returns:
            Path of the written XML file
        """
        pass

    @abstractmethod
    async def save_metadata(self, document: Dict[str, List[Dict[str, Any]]]) -> Path:
        """
        Persist the normalized ``{"entities": [...]}`` document.

        Returns:
            Path of the written JSON file
        """
        pass

    @abstractmethod
    async def load_entities(self) -> List[Dict[str, Any]]:
        """
        Read the entity descriptors from storage.

        Raises:
            MetadataFileError: If the document cannot be read
        """
        pass

    @abstractmethod
    def get_repository_info(self) -> Dict[str, Any]:
        """
        Get repository implementation information.

        Returns:
            Repository metadata (type, paths, etc.)
        """
        pass
