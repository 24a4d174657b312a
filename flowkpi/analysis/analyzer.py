"""Main FlowAnalyzer for FlowKPI.

Orchestrates sub-analyzers to build the structural snapshot of a flow:
- GraphAnalyzer: roots, reachability, orphans, connections, actions, endpoints
- VariableAnalyzer: variable definitions and uses
- RiskAnalyzer: heuristic risk factors

Usage:
    from flowkpi.analysis import FlowAnalyzer

    metrics = FlowAnalyzer(states).analyze()
"""

from types import MappingProxyType

from flowkpi.models import FlowMetrics, State

from .graph import GraphAnalyzer
from .risk import RiskAnalyzer
from .variables import VariableAnalyzer


class FlowAnalyzer:
    """Unified flow analyzer orchestrating scope-specific sub-analyzers.

    Holds no state beyond the memoized snapshot for its own input.

    Attributes:
        states: Canonical states of the flow
    """

    def __init__(self, states: tuple[State, ...]):
        """Initialize FlowAnalyzer with canonical states.

        Args:
            states: Output of the normalizer
        """
        self.states = tuple(states)
        self._metrics: FlowMetrics | None = None

    def analyze(self) -> FlowMetrics:
        """Run all analysis phases.

        Returns:
            Read-only FlowMetrics snapshot
        """
        if self._metrics is not None:
            return self._metrics

        # Phase 1: Graph analysis (flow-wide)
        graph = GraphAnalyzer(self.states)

        # Phase 2: Variable tracking (per action and condition)
        usage = VariableAnalyzer(self.states).get_usage()

        # Phase 3: Risk factors (per action, then per orphan state)
        risks = RiskAnalyzer(self.states, graph.orphan_states).get_risks()

        self._metrics = FlowMetrics(
            total_states=len(self.states),
            root_states=graph.root_states,
            orphan_states=graph.orphan_states,
            actions_by_type=MappingProxyType(graph.actions_by_type),
            state_connections=MappingProxyType(graph.connections),
            variable_usage=MappingProxyType(usage),
            endpoints=graph.endpoints,
            risk_factors=tuple(risks),
        )
        return self._metrics
