"""Metadata service implementations"""

from .interface import IMetadataService, EntityNotFoundError
from .service import MetadataService
from .sync import MetadataSyncService

__all__ = [
    "IMetadataService",
    "EntityNotFoundError",
    "MetadataService",
    "MetadataSyncService",
]
