"""
Metadata Client Interface

Defines contract for clients that download OData metadata documents
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class MetadataFetchError(Exception):
    """Network or HTTP failure while downloading metadata"""

    def __init__(self, message: str, status_code: Optional[int] = None, response_text: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class IMetadataClient(ABC):
    """Interface for OData metadata clients"""

    @abstractmethod
    async def fetch_metadata(self, metadata_url: str) -> str:
        """
        Download the raw $metadata XML.

        Args:
            metadata_url: Full URL of the $metadata document

        Returns:
            Response body as text

        Raises:
            MetadataFetchError: On transport errors or non-2xx responses
        """
        pass

    @abstractmethod
    def get_client_info(self) -> Dict[str, Any]:
        """
        Get client implementation information.

        Returns:
            Client metadata (type, timeout, auth provider, etc.)
        """
        pass
