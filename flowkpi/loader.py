"""Flow document loader for FlowKPI.

Reads a flow document from disk. This is the only part of the package that
performs I/O; the analysis engine works on already parsed documents.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from flowkpi.common.exceptions import LoadError

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yml", ".yaml")


class FileReader:
    """Simple file reading abstraction with format detection."""

    @staticmethod
    def read_file(file_path: str | Path) -> Any:
        """
        Read and parse file content based on extension.

        Returns:
            Parsed document (any JSON value)

        Raises:
            LoadError: For I/O or parsing errors
        """
        file_path = Path(file_path)
        if not file_path.is_absolute():
            file_path = file_path.resolve()

        if not file_path.exists():
            raise LoadError(f"File not found: {file_path}", file_path=str(file_path))

        suffix = file_path.suffix.lower()
        if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
            raise LoadError(
                f"Unsupported file format: {file_path.suffix}", file_path=str(file_path)
            )

        logger.debug("Reading flow document from %s", file_path)
        try:
            with open(file_path, encoding="utf-8") as f:
                if suffix in YAML_SUFFIXES:
                    try:
                        return FileReader._parse_yaml(f)
                    except YAMLError as e:
                        raise LoadError(
                            f"Error parsing YAML in {file_path}: {e}", file_path=str(file_path)
                        ) from e
                try:
                    return FileReader._parse_json(f)
                except json.JSONDecodeError as e:
                    raise LoadError(
                        f"Error parsing JSON in {file_path}: {e}",
                        file_path=str(file_path),
                        context={"line": e.lineno, "column": e.colno},
                    ) from e

        except PermissionError as e:
            raise LoadError(
                f"Permission denied reading {file_path}", file_path=str(file_path)
            ) from e
        except UnicodeDecodeError as e:
            raise LoadError(
                f"Encoding error reading {file_path}: {e}", file_path=str(file_path)
            ) from e

    @staticmethod
    def _parse_yaml(file_handle) -> Any:
        """Parse YAML content."""
        yaml = YAML(typ="safe", pure=True)
        return yaml.load(file_handle)

    @staticmethod
    def _parse_json(file_handle) -> Any:
        """Parse JSON content."""
        return json.load(file_handle)


def load_document(file_path: str | Path) -> Any:
    """
    Load a flow document from a JSON or YAML file.

    Args:
        file_path: Path to the flow document

    Returns:
        Parsed document, ready for ``analyze_flow``

    Raises:
        LoadError: If the file cannot be read or parsed
    """
    return FileReader.read_file(file_path)
