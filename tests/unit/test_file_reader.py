import json
import os

import pytest

from flowkpi.common.exceptions import LoadError
from flowkpi.loader import FileReader, load_document


class TestFileReader:
    def test_read_json_file_success(self, tmp_path):
        """Test successful JSON file reading."""
        content = {"flow": {"onboarding": {"$contentActions": []}}}
        json_file = tmp_path / "flow.json"
        json_file.write_text(json.dumps(content))

        assert FileReader.read_file(json_file) == content

    def test_read_yaml_file_success(self, tmp_path):
        """Test successful YAML file reading."""
        yaml_file = tmp_path / "flow.yaml"
        yaml_file.write_text("flow:\n  onboarding:\n    $tags:\n      - entry\n")

        data = FileReader.read_file(yaml_file)
        assert data == {"flow": {"onboarding": {"$tags": ["entry"]}}}

    def test_top_level_list(self, tmp_path):
        json_file = tmp_path / "states.json"
        json_file.write_text('[{"$id": "a", "is_root": true}]')
        assert load_document(json_file) == [{"$id": "a", "is_root": True}]

    def test_relative_path(self, tmp_path, monkeypatch):
        (tmp_path / "flow.json").write_text("{}")
        monkeypatch.chdir(tmp_path)
        assert load_document("flow.json") == {}

    def test_file_not_found_error(self, tmp_path):
        """Test FileReader raises LoadError for missing files."""
        with pytest.raises(LoadError, match="File not found") as exc_info:
            FileReader.read_file(tmp_path / "missing.json")
        assert exc_info.value.file_path.endswith("missing.json")

    def test_unsupported_format_error(self, tmp_path):
        """Test FileReader raises LoadError for unsupported extensions."""
        txt_file = tmp_path / "flow.txt"
        txt_file.write_text("{}")
        with pytest.raises(LoadError, match="Unsupported file format"):
            FileReader.read_file(txt_file)

    def test_invalid_json_syntax_error(self, tmp_path):
        """Test FileReader reports the position of JSON syntax errors."""
        json_file = tmp_path / "broken.json"
        json_file.write_text('{"flow": [}')
        with pytest.raises(LoadError, match="Error parsing JSON") as exc_info:
            FileReader.read_file(json_file)
        assert exc_info.value.context["line"] == 1

    def test_invalid_yaml_syntax_error(self, tmp_path):
        yaml_file = tmp_path / "broken.yml"
        yaml_file.write_text("flow: [unclosed")
        with pytest.raises(LoadError, match="Error parsing YAML"):
            FileReader.read_file(yaml_file)

    def test_encoding_error(self, tmp_path):
        json_file = tmp_path / "latin1.json"
        json_file.write_bytes('{"name": "café"}'.encode("latin-1"))
        with pytest.raises(LoadError, match="Encoding error"):
            FileReader.read_file(json_file)

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores file permissions"
    )
    def test_permission_denied_error(self, tmp_path):
        json_file = tmp_path / "locked.json"
        json_file.write_text("{}")
        json_file.chmod(0)
        try:
            with pytest.raises(LoadError, match="Permission denied"):
                FileReader.read_file(json_file)
        finally:
            json_file.chmod(0o644)
