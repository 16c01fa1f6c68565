"""
JSON file metadata repository

Stores the normalized metadata as a JSON document and the raw XML snapshot as
``raw_metadata.xml`` in the same directory. Nothing is cached: every load
re-reads the file.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Union
import structlog

from .interface import IMetadataRepository, MetadataFileError

logger = structlog.get_logger(__name__)

RAW_METADATA_FILENAME = "raw_metadata.xml"


class JsonMetadataRepository(IMetadataRepository):
    """File-backed repository for the normalized metadata document"""

    def __init__(self, metadata_path: Union[str, Path]):
        self.metadata_path = Path(metadata_path)

    @property
    def raw_metadata_path(self) -> Path:
        return self.metadata_path.parent / RAW_METADATA_FILENAME

    async def save_raw_metadata(self, metadata_xml: str) -> Path:
        path = self.raw_metadata_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(metadata_xml, encoding="utf-8")
        logger.info("Raw metadata saved", path=str(path), size_bytes=len(metadata_xml))
        return path

    async def save_metadata(self, document: Dict[str, List[Dict[str, Any]]]) -> Path:
        self.metadata_path.parent.mkdir(parents=True, exist_ok=True)
        with self.metadata_path.open("w", encoding="utf-8") as fh:
            json.dump(document, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
        logger.info("Metadata JSON saved",
                    path=str(self.metadata_path),
                    entities=len(document.get("entities", [])))
        return self.metadata_path

    async def load_entities(self) -> List[Dict[str, Any]]:
        try:
            with self.metadata_path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError as e:
            raise MetadataFileError(
                f"Failed to read metadata JSON: {self.metadata_path} does not exist"
            ) from e
        except (OSError, json.JSONDecodeError) as e:
            raise MetadataFileError(f"Failed to read metadata JSON: {e}") from e

        entities = data.get("entities") if isinstance(data, dict) else None
        if not isinstance(entities, list):
            raise MetadataFileError(
                f"Failed to read metadata JSON: {self.metadata_path} has no entities list"
            )

        logger.debug("Metadata JSON loaded", path=str(self.metadata_path), entities=len(entities))
        return entities

    def get_repository_info(self) -> Dict[str, Any]:
        return {
            "type": "json_file",
            "metadata_path": str(self.metadata_path),
            "raw_metadata_path": str(self.raw_metadata_path),
            "exists": self.metadata_path.exists(),
        }
