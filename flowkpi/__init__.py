"""
FlowKPI: KPI derivation for conversational bot flows.

FlowKPI reads the JSON description of a bot flow (a directed graph of
states with entering, content and leaving actions and conditional outputs),
normalizes it into a canonical graph model and derives the structural and
quality KPIs shown on the flow dashboard.

Core Components:
    - normalize: Document -> canonical states
    - FlowAnalyzer: Reachability, connections, variables, risk factors
    - KPICalculator: Global scores and per-action-category metrics
    - analyze_flow: The whole pipeline in one call

Example Usage:
    ```python
    from flowkpi import analyze_flow, load_document

    document = load_document("path/to/flow.json")
    kpis = analyze_flow(document)
    print(kpis.health_score, kpis.complexity_index)
    print(kpis.to_dict())
    ```
"""

__version__ = "0.1.0"

from .analysis import FlowAnalyzer
from .common.exceptions import FlowKPIError, LoadError
from .kpi import KPICalculator
from .loader import load_document
from .models import (
    Action,
    ActionType,
    Condition,
    DocumentShape,
    FlowAnalysisRecord,
    FlowMetrics,
    KPIResult,
    Output,
    RiskFactor,
    RiskKind,
    RiskSeverity,
    State,
)
from .normalizer import detect_shape, normalize
from .pipeline import analyze_flow, build_analysis_record, quick_analyze, run_analysis

__all__ = [
    # Core functionality
    "analyze_flow",
    "build_analysis_record",
    "quick_analyze",
    "run_analysis",
    "normalize",
    "detect_shape",
    "load_document",
    "FlowAnalyzer",
    "KPICalculator",
    "__version__",
    # Data types and results
    "Action",
    "ActionType",
    "Condition",
    "DocumentShape",
    "FlowAnalysisRecord",
    "FlowMetrics",
    "KPIResult",
    "Output",
    "RiskFactor",
    "RiskKind",
    "RiskSeverity",
    "State",
    # Errors
    "FlowKPIError",
    "LoadError",
]
