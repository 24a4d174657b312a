"""
FlowKPI models package.

This package is the single source of truth for the canonical flow model,
analysis snapshots, KPI records and enums used throughout FlowKPI.

Usage:
    from flowkpi.models import (
        State,
        Action,
        FlowMetrics,
        KPIResult,
        RiskKind,
    )
"""

from .analysis import FlowMetrics, RiskFactor, VariableUsage
from .enums import ActionType, ConditionSource, DocumentShape, RiskKind, RiskSeverity
from .flow import Action, Condition, Output, State, StateAction
from .kpi import (
    HttpActionMetrics,
    InteractionActionMetrics,
    KPIResult,
    ScriptActionMetrics,
    SourceDistribution,
    VariableActionMetrics,
)
from .record import FlowAnalysisRecord

__all__ = [
    # Enums
    "ActionType",
    "ConditionSource",
    "DocumentShape",
    "RiskKind",
    "RiskSeverity",
    # Canonical flow model
    "Action",
    "Condition",
    "Output",
    "State",
    "StateAction",
    # Analysis snapshot
    "FlowMetrics",
    "RiskFactor",
    "VariableUsage",
    # KPI records
    "HttpActionMetrics",
    "InteractionActionMetrics",
    "KPIResult",
    "ScriptActionMetrics",
    "SourceDistribution",
    "VariableActionMetrics",
    "FlowAnalysisRecord",
]
