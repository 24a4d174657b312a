"""KPI formatting utilities for CLI output.

This module turns KPI records, risk findings and quick-analysis summaries
into rich tables. All methods return renderables rather than printing
directly.
"""

from typing import Any, TypedDict

from rich.markup import escape
from rich.table import Table

from flowkpi.models import KPIResult, RiskFactor, RiskSeverity


class RiskReport(TypedDict):
    """Type definition for the risks JSON output."""

    minSeverity: str
    total: int
    riskFactors: list[dict[str, Any]]


class GraphDescription(TypedDict):
    """Type definition for the graph JSON output."""

    totalStates: int
    rootStates: list[str]
    orphanStates: list[str]
    stateConnections: dict[str, list[str]]
    endpoints: list[str]
    variableUsage: dict[str, dict[str, list[str]]]
    complexity: float
    clusters: int
    branchingFactor: float
    dynamicContentRate: float


# (attribute, label, unit)
GLOBAL_ROWS = (
    ("health_score", "Health score", ""),
    ("complexity_index", "Complexity index", "/10"),
    ("external_dependency_index", "External dependency", "%"),
    ("maintainability_score", "Maintainability", "%"),
    ("branching_factor", "Branching factor", ""),
    ("flow_cohesion", "Flow cohesion", ""),
    ("dynamic_content_rate", "Dynamic content", "%"),
    ("dead_code_potential", "Dead code potential", ""),
    ("total_states", "Total states", ""),
    ("orphan_states", "Orphan states", ""),
    ("clusters", "Clusters", ""),
)

GROUP_ROWS = {
    "http_actions": (
        "HTTP calls",
        (
            ("count", "Count", ""),
            ("integration_health", "Integration health", "%"),
            ("diversity_of_endpoints", "Distinct endpoints", ""),
            ("security_rate", "Security", "%"),
            ("reutilization_rate", "Calls per endpoint", ""),
            ("performance_risk", "Performance risk", ""),
        ),
    ),
    "script_actions": (
        "Scripts",
        (
            ("count", "Count", ""),
            ("average_risk_score", "Average risk score", "/10"),
            ("dead_code_rate", "Dead code", "%"),
            ("coupling_rate", "Coupling", "%"),
            ("duplicated_code_rate", "Duplicated code", "%"),
            ("naming_consistency", "Naming consistency", "%"),
        ),
    ),
    "interaction_actions": (
        "Interactions",
        (
            ("count", "Count", ""),
            ("richness_score", "Richness", ""),
            ("input_robustness", "Input robustness", "%"),
            ("navigation_clarity", "Navigation clarity", ""),
            ("dead_ends_rate", "Dead ends", "%"),
            ("consistency_score", "Consistency", "%"),
        ),
    ),
    "variable_actions": (
        "Variables",
        (
            ("count", "Count", ""),
            ("orphan_rate", "Orphan variables", "%"),
            ("average_lifecycle", "Average lifecycle", ""),
            ("condition_complexity", "Condition complexity", ""),
            ("magic_variables_rate", "Magic variables", "%"),
        ),
    ),
}

SEVERITY_STYLES = {
    RiskSeverity.HIGH: "bold red",
    RiskSeverity.MEDIUM: "yellow",
    RiskSeverity.LOW: "dim",
}


def format_value(value: Any, unit: str = "") -> str:
    """Format a metric value for display."""
    if isinstance(value, float):
        text = f"{value:.2f}".rstrip("0").rstrip(".")
    else:
        text = str(value)
    return f"{text}{unit}"


class KPIFormatter:
    """Formatter for KPI records, risk findings and graph summaries.

    All methods return rich renderables and do not print directly.
    """

    @staticmethod
    def global_table(kpis: KPIResult) -> Table:
        """Build the table of global KPIs."""
        table = Table(title="Flow KPIs", show_header=True, header_style="bold cyan")
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        for attribute, label, unit in GLOBAL_ROWS:
            table.add_row(label, format_value(getattr(kpis, attribute), unit))
        return table

    @staticmethod
    def group_tables(kpis: KPIResult) -> list[Table]:
        """Build one table per action category."""
        tables = []
        for attribute, (title, rows) in GROUP_ROWS.items():
            group = getattr(kpis, attribute)
            table = Table(title=title, show_header=False)
            table.add_column("Metric")
            table.add_column("Value", justify="right")
            for field_name, label, unit in rows:
                table.add_row(label, format_value(getattr(group, field_name), unit))
            if attribute == "variable_actions":
                distribution = group.source_distribution
                table.add_row(
                    "Sources (input / context)",
                    f"{format_value(distribution.input, '%')} / "
                    f"{format_value(distribution.context, '%')}",
                )
            tables.append(table)
        return tables

    @staticmethod
    def build_risk_report(risks: list[RiskFactor], min_severity: RiskSeverity) -> RiskReport:
        return {
            "minSeverity": min_severity.value,
            "total": len(risks),
            "riskFactors": [risk.to_dict() for risk in risks],
        }

    @staticmethod
    def risk_table(risks: list[RiskFactor]) -> Table:
        """Build the risk findings table, one row per finding."""
        table = Table(title="Risk factors", show_header=True, header_style="bold cyan")
        table.add_column("Severity")
        table.add_column("Type")
        table.add_column("Location")
        table.add_column("Description")
        table.add_column("Recommendation")
        for risk in risks:
            style = SEVERITY_STYLES[risk.severity]
            table.add_row(
                f"[{style}]{risk.severity.value}[/{style}]",
                risk.kind.value,
                escape(risk.location),
                escape(risk.description),
                risk.recommendation,
            )
        return table

    @staticmethod
    def build_graph_description(summary: dict[str, Any]) -> GraphDescription:
        """Pick the graph-related entries of a quick-analysis summary."""
        return {
            "totalStates": summary["totalStates"],
            "rootStates": summary["rootStates"],
            "orphanStates": summary["orphanStates"],
            "stateConnections": summary["stateConnections"],
            "endpoints": summary["endpoints"],
            "variableUsage": summary["variableUsage"],
            "complexity": summary["complexity"],
            "clusters": summary["clusters"],
            "branchingFactor": summary["branchingFactor"],
            "dynamicContentRate": summary["dynamicContentRate"],
        }

    @staticmethod
    def connections_table(description: GraphDescription) -> Table:
        """Build the state connection table, marking roots and orphans."""
        roots = set(description["rootStates"])
        orphans = set(description["orphanStates"])

        table = Table(title="State connections", show_header=True, header_style="bold cyan")
        table.add_column("State")
        table.add_column("Targets")
        table.add_column("Status")
        for state_id, targets in description["stateConnections"].items():
            if state_id in roots:
                status = "[green]root[/green]"
            elif state_id in orphans:
                status = "[red]orphan[/red]"
            else:
                status = ""
            table.add_row(escape(state_id), escape(", ".join(targets)) or "-", status)
        return table

    @staticmethod
    def variables_table(description: GraphDescription) -> Table:
        table = Table(title="Variables", show_header=True, header_style="bold cyan")
        table.add_column("Variable")
        table.add_column("Defined in")
        table.add_column("Used in")
        for name, usage in description["variableUsage"].items():
            table.add_row(
                escape(name),
                escape(", ".join(usage["defined"])) or "-",
                escape(", ".join(usage["used"])) or "-",
            )
        return table

    @staticmethod
    def format_graph_summary(description: GraphDescription) -> str:
        """Format the headline figures of the graph as markup text."""
        lines = [
            f"[bold]States:[/bold] {description['totalStates']}",
            f"[bold]Roots:[/bold] {escape(', '.join(description['rootStates'])) or 'none'}",
            f"[bold]Orphans:[/bold] {escape(', '.join(description['orphanStates'])) or 'none'}",
            f"[bold]Clusters:[/bold] {description['clusters']}",
            f"[bold]Branching factor:[/bold] {format_value(description['branchingFactor'])}",
            f"[bold]Complexity:[/bold] {format_value(description['complexity'], '/10')}",
        ]
        if description["endpoints"]:
            lines.append("[bold]Endpoints:[/bold]")
            lines.extend(f"  • {escape(endpoint)}" for endpoint in description["endpoints"])
        return "\n".join(lines)
