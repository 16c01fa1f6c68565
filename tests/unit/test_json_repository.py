"""
Tests for the JSON file repository
"""

import json
import pytest

from d365_metadata.repositories import JsonMetadataRepository, MetadataFileError


@pytest.mark.unit
class TestJsonMetadataRepository:
    async def test_save_metadata_creates_directories(self, tmp_path, sample_entities):
        repository = JsonMetadataRepository(tmp_path / "nested" / "out" / "metadata.json")

        path = await repository.save_metadata({"entities": sample_entities})

        assert path.exists()
        text = path.read_text(encoding="utf-8")
        assert text.startswith('{\n  "entities": [')
        assert json.loads(text) == {"entities": sample_entities}

    async def test_raw_metadata_is_sibling_file(self, tmp_path):
        repository = JsonMetadataRepository(tmp_path / "out" / "metadata.json")

        path = await repository.save_raw_metadata("<Edmx/>")

        assert path == tmp_path / "out" / "raw_metadata.xml"
        assert path.read_text(encoding="utf-8") == "<Edmx/>"

    async def test_load_entities(self, metadata_file):
        entities = await JsonMetadataRepository(metadata_file).load_entities()

        assert [e["name"] for e in entities] == ["Account", "contact", "CustomerGroup"]

    async def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "metadata.json"
        path.write_text("{not json")

        with pytest.raises(MetadataFileError, match="Failed to read metadata JSON"):
            await JsonMetadataRepository(path).load_entities()

    @pytest.mark.parametrize("content", ['{"items": []}', "[]", '{"entities": {}}'])
    async def test_load_wrong_shape(self, tmp_path, content):
        path = tmp_path / "metadata.json"
        path.write_text(content)

        with pytest.raises(MetadataFileError, match="no entities list"):
            await JsonMetadataRepository(path).load_entities()

    def test_repository_info(self, metadata_file):
        info = JsonMetadataRepository(metadata_file).get_repository_info()

        assert info["type"] == "json_file"
        assert info["exists"] is True
        assert info["raw_metadata_path"].endswith("raw_metadata.xml")
