"""KPI calculator for FlowKPI.

Derives the dashboard KPIs of one flow from its canonical states and the
FlowMetrics snapshot. Health score and complexity index are computed from
the states directly; everything else reads the snapshot.

Usage:
    from flowkpi.kpi import KPICalculator

    kpis = KPICalculator(states).calculate()
"""

from flowkpi.analysis import FlowAnalyzer
from flowkpi.common.text import has_template, text_of
from flowkpi.constants import (
    CLUSTER_DIVISOR,
    CLUSTER_MAX,
    CLUSTER_MIN,
    COMPLEXITY_CAP,
    COMPLEXITY_CONDITION_WEIGHT,
    COMPLEXITY_CUSTOM_ACTION_SCALE,
    COMPLEXITY_CUSTOM_ACTION_WEIGHT,
    COMPLEXITY_STATE_WEIGHT,
)
from flowkpi.models import ActionType, FlowMetrics, KPIResult, State

from .groups import (
    HttpMetricsCalculator,
    InteractionMetricsCalculator,
    ScriptMetricsCalculator,
    VariableMetricsCalculator,
    percent,
)


class KPICalculator:
    """Calculates every KPI for one flow.

    Attributes:
        states: Canonical states of the flow
        metrics: Structural snapshot (computed from the states when omitted)
    """

    def __init__(self, states: tuple[State, ...], metrics: FlowMetrics | None = None):
        self.states = tuple(states)
        self.metrics = metrics if metrics is not None else FlowAnalyzer(self.states).analyze()

    def calculate(self) -> KPIResult:
        """Calculate all KPIs.

        Returns:
            KPIResult; the all-zero record when the flow has no states
        """
        if not self.states:
            return KPIResult.empty()

        clusters = self.estimate_clusters()
        orphan_count = len(self.metrics.orphan_states)

        return KPIResult(
            # Global KPIs
            health_score=self.health_score(),
            complexity_index=self.complexity_index(),
            external_dependency_index=self.external_dependency_index(),
            maintainability_score=self.maintainability_score(),
            branching_factor=self.branching_factor(),
            flow_cohesion=clusters,
            dynamic_content_rate=self.dynamic_content_rate(),
            dead_code_potential=orphan_count,
            # Structure metrics
            total_states=len(self.states),
            orphan_states=orphan_count,
            clusters=clusters,
            # Action-specific metrics
            http_actions=HttpMetricsCalculator(self.metrics).calculate(),
            script_actions=ScriptMetricsCalculator(self.metrics).calculate(),
            interaction_actions=InteractionMetricsCalculator(self.metrics).calculate(),
            variable_actions=VariableMetricsCalculator(self.metrics, self.states).calculate(),
        )

    # =========================================================================
    # Global KPIs
    # =========================================================================

    def health_score(self) -> float:
        """1 - invalid/total, where invalid states have a blank id."""
        total = len(self.states)
        if total == 0:
            return 0.0
        invalid = sum(1 for state in self.states if not state.is_valid)
        return max(0.0, min(1.0, 1 - invalid / total))

    def complexity_index(self) -> float:
        """Weighted mix of size, condition density and custom action usage, capped at 10."""
        total = len(self.states)
        if total == 0:
            return 0.0
        conditions = sum(len(state.conditions) for state in self.states)
        with_custom = sum(1 for state in self.states if state.custom_actions)

        avg_conditions = conditions / total
        custom_actions_rate = with_custom / total
        return min(
            COMPLEXITY_CAP,
            total * COMPLEXITY_STATE_WEIGHT
            + avg_conditions * COMPLEXITY_CONDITION_WEIGHT
            + custom_actions_rate * COMPLEXITY_CUSTOM_ACTION_SCALE * COMPLEXITY_CUSTOM_ACTION_WEIGHT,
        )

    def external_dependency_index(self) -> float:
        """Percentage of states calling HTTP endpoints or running scripts."""
        if not self.states:
            return 0.0
        dependent = {
            action.state_id
            for action_type in (ActionType.PROCESS_HTTP, ActionType.EXECUTE_SCRIPT)
            for action in self.metrics.actions_of(action_type)
        }
        return percent(len(dependent), len(self.states))

    def maintainability_score(self) -> float:
        """Average of action title coverage and state tag coverage, as a percentage."""
        if not self.states:
            return 0.0
        actions = [action for state in self.states for action in state.all_actions]
        titled = sum(1 for action in actions if action.has_title)
        tagged = sum(1 for state in self.states if state.tags)

        title_score = titled / len(actions) if actions else 1.0
        tag_score = tagged / len(self.states)
        return ((title_score + tag_score) / 2) * 100

    def branching_factor(self) -> float:
        """Average outgoing transitions per state, counting default outputs."""
        if not self.states:
            return 0.0
        return sum(state.transition_count for state in self.states) / len(self.states)

    def estimate_clusters(self) -> int:
        """Size-based cluster estimate: states // 8, clamped to [1, 10].

        This is a proxy, not graph clustering.
        """
        if not self.states:
            return 0
        return max(CLUSTER_MIN, min(CLUSTER_MAX, len(self.states) // CLUSTER_DIVISOR))

    def dynamic_content_rate(self) -> float:
        """Percentage of messages whose content interpolates variables."""
        messages = self.metrics.actions_of(ActionType.SEND_MESSAGE)
        if not messages:
            return 0.0
        dynamic = 0
        for action in messages:
            content = action.settings.get("content") or action.settings.get("rawContent")
            if has_template(text_of(content)):
                dynamic += 1
        return percent(dynamic, len(messages))
