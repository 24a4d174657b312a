"""CLI utilities package.

This package provides utilities for CLI commands including:
- CLIContext: Context management for commands
- KPIFormatter: Rich tables for KPI records, risks and graph summaries
- Decorators: Command error reporting
- Helper functions: Report writing
"""

import json
import logging
from pathlib import Path
from typing import Any

from flowkpi.cli.utils.context import CLIContext
from flowkpi.cli.utils.decorators import error_report, handle_cli_errors
from flowkpi.cli.utils.format import GraphDescription, KPIFormatter, RiskReport
from flowkpi.cli.utils.printer import CliPrinter
from flowkpi.common.exceptions import OutputError

logger = logging.getLogger(__name__)

__all__ = [
    # Context
    "CLIContext",
    "CliPrinter",
    # Formatters
    "KPIFormatter",
    # TypedDicts for type hints
    "GraphDescription",
    "RiskReport",
    # Decorators
    "error_report",
    "handle_cli_errors",
    # Helper functions
    "safe_write_file",
    "write_json_report",
]


def safe_write_file(file_path: Path, content: str) -> None:
    """Safely write content to file with error handling.

    Args:
        file_path: Path to output file
        content: Content to write

    Raises:
        OutputError: If writing fails
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Writing output to %s", file_path)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("Wrote %d characters to %s", len(content), file_path)

    except PermissionError as e:
        raise OutputError(
            f"Permission denied writing to {file_path}", file_path=str(file_path)
        ) from e

    except OSError as e:
        raise OutputError(f"Failed to write to {file_path}: {e}", file_path=str(file_path)) from e


def write_json_report(file_path: Path, data: Any) -> None:
    """Write data as indented JSON."""
    safe_write_file(file_path, json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n")
