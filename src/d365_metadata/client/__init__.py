"""
D365 Client module

HTTP client for downloading the OData $metadata document.
"""

from .interface import IMetadataClient, MetadataFetchError
from .d365_client import D365MetadataClient

__all__ = [
    "IMetadataClient",
    "MetadataFetchError",
    "D365MetadataClient",
]
