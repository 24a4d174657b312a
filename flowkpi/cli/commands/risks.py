"""Risks command for listing heuristic risk findings."""

from pathlib import Path
from typing import Annotated

import typer

from flowkpi.cli.utils import handle_cli_errors
from flowkpi.constants import get_min_severity, get_output_format
from flowkpi.models import RiskSeverity
from flowkpi.pipeline import run_analysis


@handle_cli_errors("Failed to collect risk factors")
def risks_command(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="Flow document (JSON or YAML)")],
    severity: Annotated[
        RiskSeverity | None,
        typer.Option(
            "--severity",
            "-s",
            case_sensitive=False,
            help="Minimum severity level to report",
        ),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output in JSON format")
    ] = False,
):
    """List risk factors found in scripts, HTTP calls and orphan states."""
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output or get_output_format() == "json")

    min_severity = severity or RiskSeverity(get_min_severity())
    document = cli_ctx.load_document_or_exit(source)

    cli_ctx.print_progress("Analyzing flow...")
    metrics = run_analysis(document).metrics
    risks = [risk for risk in metrics.risk_factors if risk.severity.rank >= min_severity.rank]
    cli_ctx.print_verbose(
        f"[dim]{len(risks)} of {len(metrics.risk_factors)} finding(s) at "
        f"{min_severity.value} or above[/dim]"
    )

    cli_ctx.printer.print_risks(risks, min_severity)
