"""Analyze command for computing the KPI report of a flow."""

from pathlib import Path
from typing import Annotated

import typer

from flowkpi.cli.utils import handle_cli_errors, write_json_report
from flowkpi.constants import get_output_format
from flowkpi.pipeline import analyze_flow


@handle_cli_errors("Failed to analyze flow")
def analyze_command(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="Flow document (JSON or YAML)")],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output in JSON format")
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the JSON report to a file"),
    ] = None,
):
    """Compute the KPI report of a bot flow."""
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output or get_output_format() == "json")

    document = cli_ctx.load_document_or_exit(source)

    cli_ctx.print_progress("Calculating KPIs...")
    kpis = analyze_flow(document)

    if output:
        write_json_report(output, kpis.to_dict())
        cli_ctx.print_success(f"KPI report written to {output}")
        return

    cli_ctx.printer.print_kpi_report(kpis)
