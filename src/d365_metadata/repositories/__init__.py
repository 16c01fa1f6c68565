"""Metadata storage implementations"""

from .interface import IMetadataRepository, MetadataFileError
from .json_repository import JsonMetadataRepository

__all__ = [
    "IMetadataRepository",
    "MetadataFileError",
    "JsonMetadataRepository",
]
