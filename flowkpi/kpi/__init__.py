"""FlowKPI KPI calculation module.

Usage:
    from flowkpi.kpi import KPICalculator

    kpis = KPICalculator(states).calculate()
"""

from .calculator import KPICalculator
from .groups import (
    HttpMetricsCalculator,
    InteractionMetricsCalculator,
    ScriptMetricsCalculator,
    VariableMetricsCalculator,
)

__all__ = [
    "KPICalculator",
    "HttpMetricsCalculator",
    "InteractionMetricsCalculator",
    "ScriptMetricsCalculator",
    "VariableMetricsCalculator",
]
