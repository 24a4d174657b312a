"""FlowKPI flow analysis module.

Provides structural analysis of canonical flow states. The FlowAnalyzer is
the entry point; the sub-analyzers are exposed for focused use and tests.

Usage:
    from flowkpi.analysis import FlowAnalyzer

    analyzer = FlowAnalyzer(states)
    metrics = analyzer.analyze()
"""

from .analyzer import FlowAnalyzer
from .graph import GraphAnalyzer
from .risk import RiskAnalyzer
from .variables import VariableAnalyzer

__all__ = ["FlowAnalyzer", "GraphAnalyzer", "RiskAnalyzer", "VariableAnalyzer"]
