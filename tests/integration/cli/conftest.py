"""Shared fixtures for CLI integration tests."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from flowkpi.constants import ENV_MIN_SEVERITY, ENV_OUTPUT_FORMAT


@pytest.fixture(scope="module")
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's FLOWKPI_* settings out of CLI tests."""
    monkeypatch.delenv(ENV_OUTPUT_FORMAT, raising=False)
    monkeypatch.delenv(ENV_MIN_SEVERITY, raising=False)


@pytest.fixture
def support_flow_file(write_document, support_flow_document) -> Path:
    return write_document(support_flow_document, "support.json")


@pytest.fixture
def empty_flow_file(write_document) -> Path:
    return write_document({"flow": {}}, "empty.json")


@pytest.fixture
def broken_flow_file(tmp_path: Path) -> Path:
    file_path = tmp_path / "broken.json"
    file_path.write_text('{"flow": ', encoding="utf-8")
    return file_path


def parse_json_output(output: str) -> dict:
    """Parse JSON output from a command."""
    return json.loads(output)
