"""Tests for CLI error reports."""

from flowkpi.cli.utils import error_report
from flowkpi.common.exceptions import FlowKPIError, LoadError, OutputError


class TestErrorReport:
    def test_plain_exception(self):
        assert error_report("Failed to analyze flow: boom", ValueError("boom")) == {
            "error": "Failed to analyze flow: boom"
        }

    def test_load_error_with_context(self):
        error = LoadError("Error parsing JSON", file_path="/tmp/flow.json", context={"line": 3})

        assert error_report(str(error), error) == {
            "error": "Error parsing JSON",
            "file": "/tmp/flow.json",
            "context": {"line": 3},
        }

    def test_output_error_without_context(self):
        error = OutputError("Permission denied", file_path="/tmp/out.json")

        assert error_report("Failed", error) == {"error": "Failed", "file": "/tmp/out.json"}

    def test_base_error_has_no_file(self):
        error = FlowKPIError("bad", context={"state": "menu"})

        assert error_report("bad", error) == {"error": "bad", "context": {"state": "menu"}}

    def test_markup_in_message_is_kept_verbatim(self):
        error = LoadError("File not found: [/x].json", file_path="[/x].json")

        assert error_report(str(error), error)["file"] == "[/x].json"
