"""Analysis pipeline for FlowKPI.

Composes Normalizer -> FlowAnalyzer -> KPICalculator. Every call builds its
own pipeline objects, so concurrent analyses share nothing.

Usage:
    from flowkpi.pipeline import analyze_flow, build_analysis_record

    kpis = analyze_flow(document)
    record = build_analysis_record("Support bot", document)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from flowkpi.analysis import FlowAnalyzer
from flowkpi.kpi import KPICalculator
from flowkpi.models import FlowAnalysisRecord, FlowMetrics, KPIResult, State
from flowkpi.normalizer import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlowAnalysis:
    """Everything one pipeline run produced.

    Attributes:
        states: Canonical states
        metrics: Structural snapshot
        kpis: KPI record
    """

    states: tuple[State, ...]
    metrics: FlowMetrics
    kpis: KPIResult


def run_analysis(document: Any) -> FlowAnalysis:
    """Run the full pipeline and keep the intermediate results."""
    states = normalize(document)
    metrics = FlowAnalyzer(states).analyze()
    kpis = KPICalculator(states, metrics).calculate()

    logger.info(
        "Analyzed flow: %d state(s), %d orphan(s), %d risk factor(s)",
        metrics.total_states,
        len(metrics.orphan_states),
        len(metrics.risk_factors),
    )
    return FlowAnalysis(states=states, metrics=metrics, kpis=kpis)


def analyze_flow(document: Any) -> KPIResult:
    """Derive the KPI record of a parsed flow document.

    Never raises for JSON-valid input: unknown shapes normalize to no states,
    which yields the all-zero record.

    Args:
        document: Parsed JSON value

    Returns:
        KPIResult for the flow
    """
    return run_analysis(document).kpis


def quick_analyze(document: Any) -> dict[str, Any]:
    """Structural metrics plus the headline figures, as one JSON-ready dict."""
    analysis = run_analysis(document)
    summary = analysis.metrics.to_dict()
    summary["complexity"] = analysis.kpis.complexity_index
    summary["clusters"] = analysis.kpis.clusters
    summary["branchingFactor"] = analysis.kpis.branching_factor
    summary["dynamicContentRate"] = analysis.kpis.dynamic_content_rate
    return summary


def default_analysis_name() -> str:
    return f"Flow Analysis {datetime.now().isoformat()}"


def build_analysis_record(name: str | None, document: Any) -> FlowAnalysisRecord:
    """Build the record handed to the storage collaborator.

    Args:
        name: Display name; a timestamped default is used when empty
        document: Parsed JSON value, stored verbatim

    Returns:
        FlowAnalysisRecord with the canonical states and KPIs
    """
    analysis = run_analysis(document)
    return FlowAnalysisRecord(
        name=name if name and name.strip() else default_analysis_name(),
        original_json=document,
        parsed_data=[state.to_dict() for state in analysis.states],
        kpis=analysis.kpis,
    )
