"""Variable usage analysis for FlowKPI.

Tracks where each variable is defined and used:
- Definitions: ``outputVariable`` of any action, ``settings.variable`` of
  ``SetVariable`` actions
- Uses: ``inputVariables``, ``{{name}}`` references inside serialized
  settings, and ``<source>.<variable>`` for every output condition

Reference scanning is textual, so it over-matches on substrings and misses
dynamically built names.
"""

from flowkpi.common.text import find_template_references
from flowkpi.models import Action, ActionType, State, VariableUsage


class VariableAnalyzer:
    """Builds the variable usage map for a flow."""

    def __init__(self, states: tuple[State, ...]):
        self.states = states
        self._defined: dict[str, list[str]] = {}
        self._used: dict[str, list[str]] = {}

    def get_usage(self) -> dict[str, VariableUsage]:
        """Run the scan and return variable name -> usage, in discovery order."""
        self._defined = {}
        self._used = {}

        for state in self.states:
            for action in state.all_actions:
                self._scan_action(state.id, action)
            for condition in state.conditions:
                self._use(condition.qualified_name, state.id)

        # Both maps share keys and insertion order
        return {
            name: VariableUsage(defined=tuple(defined), used=tuple(self._used[name]))
            for name, defined in self._defined.items()
        }

    def _scan_action(self, state_id: str, action: Action) -> None:
        if action.output_variable:
            self._define(action.output_variable, state_id)

        if action.type == ActionType.SET_VARIABLE:
            variable = action.settings.get("variable")
            if isinstance(variable, str) and variable:
                self._define(variable, state_id)

        for name in action.input_variables:
            self._use(name, state_id)

        for name in find_template_references(action.settings):
            self._use(name, state_id)

    def _define(self, name: str, state_id: str) -> None:
        self._defined.setdefault(name, []).append(state_id)
        self._used.setdefault(name, [])

    def _use(self, name: str, state_id: str) -> None:
        self._defined.setdefault(name, [])
        self._used.setdefault(name, []).append(state_id)
