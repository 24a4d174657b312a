"""
CLI Context for FlowKPI.

Provides centralized flow document loading and output management for all
CLI commands.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from flowkpi.cli.utils.decorators import error_report
from flowkpi.cli.utils.printer import CliPrinter
from flowkpi.common.exceptions import LoadError
from flowkpi.loader import load_document


@dataclass
class CLIContext:
    """
    Context object for CLI commands.

    Created once by the app callback and passed to every command through
    Typer's context injection.

    Attributes:
        console: Rich console for output
        verbose: Enable verbose output (ignored when json_mode is True)
        printer: CLI printer for formatted output (always initialized)
        source: Path of the last loaded flow document
        json_mode: When True, suppress all non-JSON output (set by commands)
    """

    console: Console
    verbose: bool = False
    printer: CliPrinter = field(init=False)
    source: str = ""
    json_mode: bool = False

    def __post_init__(self):
        self.printer = CliPrinter(console=self.console, verbose=self.verbose)

    def set_json_mode(self, json_mode: bool) -> None:
        """Switch JSON mode on the context and its printer."""
        self.json_mode = json_mode
        self.printer.json_mode = json_mode

    def _should_print_verbose(self) -> bool:
        return self.verbose and not self.json_mode

    def print_verbose(self, message: str, **kwargs) -> None:
        """Print a message only if verbose mode is enabled and not in JSON mode."""
        if self._should_print_verbose():
            self.console.print(message, **kwargs)

    def print_progress(self, message: str) -> None:
        """Print a progress message (only in verbose mode, not in JSON mode)."""
        if self._should_print_verbose():
            self.printer.show_progress(message)

    def print_error(self, message: str) -> None:
        """Print an error message (always prints unless in JSON mode)."""
        if not self.json_mode:
            self.printer.print_error(message)

    def print_success(self, message: str) -> None:
        """Print a success message (always prints unless in JSON mode)."""
        if not self.json_mode:
            self.printer.show_success(message)

    def print_json(self, data: Any) -> None:
        """Print data as JSON (always prints, even in JSON mode)."""
        self.printer.print_json(data=data)

    def report_error(self, message: str, error: BaseException) -> None:
        """Report a failed command as a JSON error object or as text.

        Verbose text output also lists the file and context of FlowKPI errors.
        """
        report = error_report(message, error)
        if self.json_mode:
            self.print_json(data=report)
            return

        self.print_error(message)
        if self.verbose:
            if "file" in report:
                self.console.print(f"     file: {escape(report['file'])}")
            for key, value in report.get("context", {}).items():
                self.console.print(f"     {key}: {escape(str(value))}")

    def load_document_or_exit(self, source: Path | str) -> Any:
        """
        Load a flow document and exit on failure.

        Args:
            source: Path to a JSON or YAML flow document

        Returns:
            Parsed document (only if successful; otherwise exits)

        Raises:
            typer.Exit: If loading fails
        """
        self.source = str(source)
        self.print_verbose(f"[dim]Loading flow from: {escape(str(source))}[/dim]")

        try:
            document = load_document(source)
        except LoadError as e:
            self.report_error(str(e), e)
            raise typer.Exit(code=1) from e

        self.print_verbose("[green]✓ Flow loaded successfully[/green]")
        return document
