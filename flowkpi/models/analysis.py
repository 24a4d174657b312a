"""Analysis data models for FlowKPI.

This module defines the output structures of the flow analyzers, providing
clear separation between graph analysis and KPI calculation.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .enums import RiskKind, RiskSeverity
from .flow import State, StateAction

__all__ = [
    "FlowMetrics",
    "RiskFactor",
    "VariableUsage",
]


@dataclass(frozen=True)
class RiskFactor:
    """A heuristic finding about a state or action."""

    kind: RiskKind
    severity: RiskSeverity
    location: str
    description: str
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to dictionary for JSON serialization."""
        return {
            "type": self.kind.value,
            "severity": self.severity.value,
            "location": self.location,
            "description": self.description,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class VariableUsage:
    """States that define and use a variable, in discovery order."""

    defined: tuple[str, ...] = ()
    used: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {"defined": list(self.defined), "used": list(self.used)}


def _frozen_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class FlowMetrics:
    """Read-only snapshot of the structural analysis of one flow.

    Attributes:
        total_states: Number of states in the flow
        root_states: States flagged as entry points
        orphan_states: States unreachable from any root, in input order
        actions_by_type: Actions grouped by type, tagged with their state
        state_connections: State id to destination ids (outputs, then default)
        variable_usage: Variable name to defining and using states
        endpoints: Distinct URIs called by HTTP actions
        risk_factors: Heuristic findings
    """

    total_states: int = 0
    root_states: tuple[State, ...] = ()
    orphan_states: tuple[State, ...] = ()
    actions_by_type: Mapping[str, tuple[StateAction, ...]] = field(default_factory=_frozen_mapping)
    state_connections: Mapping[str, tuple[str, ...]] = field(default_factory=_frozen_mapping)
    variable_usage: Mapping[str, VariableUsage] = field(default_factory=_frozen_mapping)
    endpoints: frozenset[str] = frozenset()
    risk_factors: tuple[RiskFactor, ...] = ()

    def actions_of(self, action_type: str) -> tuple[StateAction, ...]:
        """Get all actions of a type (empty when the flow has none)."""
        return self.actions_by_type.get(action_type, ())

    def all_actions(self) -> tuple[StateAction, ...]:
        """Get every action of the flow, grouped by type."""
        return tuple(action for actions in self.actions_by_type.values() for action in actions)

    @property
    def orphan_ids(self) -> list[str]:
        return [state.id for state in self.orphan_states]

    @property
    def root_ids(self) -> list[str]:
        return [state.id for state in self.root_states]

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to dictionary for JSON serialization."""
        return {
            "totalStates": self.total_states,
            "rootStates": self.root_ids,
            "orphanStates": self.orphan_ids,
            "actionsByType": {
                action_type: len(actions) for action_type, actions in self.actions_by_type.items()
            },
            "stateConnections": {
                state_id: list(targets) for state_id, targets in self.state_connections.items()
            },
            "variableUsage": {
                name: usage.to_dict() for name, usage in self.variable_usage.items()
            },
            "endpoints": sorted(self.endpoints),
            "riskFactors": [risk.to_dict() for risk in self.risk_factors],
        }
