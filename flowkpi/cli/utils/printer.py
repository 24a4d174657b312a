"""CLI Printer for consistent output formatting."""

from typing import Any

from rich.console import Console
from rich.markup import escape

from flowkpi.cli.utils.format import KPIFormatter
from flowkpi.models import KPIResult, RiskFactor, RiskSeverity


class CliPrinter:
    """Centralized printer for CLI output.

    Handles every printing operation of the CLI so that verbose and JSON
    modes behave the same way across commands.
    """

    def __init__(self, console: Console, verbose: bool = False, json_mode: bool = False):
        """Initialize printer with console and mode settings.

        Args:
            console: Rich console for output
            verbose: Whether to show detailed output
            json_mode: Whether to output in JSON format (can be set later)
        """
        self.console = console
        self.verbose = verbose
        self.json_mode = json_mode

    def print_kpi_report(self, kpis: KPIResult, json_mode: bool | None = None) -> None:
        """Print a KPI record.

        Args:
            kpis: KPI record to print
            json_mode: If True, output as JSON. If None, uses self.json_mode
        """
        json_mode = json_mode if json_mode is not None else self.json_mode

        if json_mode:
            self.console.print_json(data=kpis.to_dict())
            return

        self.console.print(KPIFormatter.global_table(kpis))
        for table in KPIFormatter.group_tables(kpis):
            self.console.print(table)

    def print_risks(
        self,
        risks: list[RiskFactor],
        min_severity: RiskSeverity,
        json_mode: bool | None = None,
    ) -> None:
        """Print risk findings at or above a severity.

        Args:
            risks: Findings already filtered by severity
            min_severity: Threshold used for filtering
            json_mode: If True, output as JSON. If None, uses self.json_mode
        """
        json_mode = json_mode if json_mode is not None else self.json_mode

        if json_mode:
            self.console.print_json(data=KPIFormatter.build_risk_report(risks, min_severity))
        elif not risks:
            self.show_success(f"No risk factors at severity {min_severity.value} or above")
        else:
            self.console.print(KPIFormatter.risk_table(risks))

    def print_graph(self, summary: dict[str, Any], json_mode: bool | None = None) -> None:
        """Print the graph view of a quick-analysis summary.

        Args:
            summary: Output of ``quick_analyze``
            json_mode: If True, output as JSON. If None, uses self.json_mode
        """
        json_mode = json_mode if json_mode is not None else self.json_mode
        description = KPIFormatter.build_graph_description(summary)

        if json_mode:
            self.console.print_json(data=description)
            return

        self.console.print(KPIFormatter.format_graph_summary(description))
        if description["stateConnections"]:
            self.console.print(KPIFormatter.connections_table(description))
        if description["variableUsage"]:
            self.console.print(KPIFormatter.variables_table(description))

    def show_progress(self, message: str) -> None:
        """Show progress message if verbose mode is enabled."""
        if self.verbose:
            self.console.print(f"🔄 {escape(message)}")

    def show_success(self, message: str) -> None:
        """Show success message with green checkmark."""
        self.console.print(f"✅ {escape(message)}")

    def print_json(self, data: Any) -> None:
        """Print data as JSON."""
        self.console.print_json(data=data, default=str)

    def print_error(self, message: str) -> None:
        """Print error message with red formatting."""
        self.console.print(f"[red]❌ Error:[/red] {escape(message)}")
