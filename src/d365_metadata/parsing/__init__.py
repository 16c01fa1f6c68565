"""Metadata XML parsing and normalization"""

from .xml_tree import MetadataFormatError, parse_metadata_xml
from .normalizer import as_list, normalize_metadata

__all__ = [
    "MetadataFormatError",
    "parse_metadata_xml",
    "as_list",
    "normalize_metadata",
]
