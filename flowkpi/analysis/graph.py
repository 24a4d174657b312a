"""Graph analysis for FlowKPI.

Handles flow-wide structural analysis including:
- Root state detection
- Reachability (breadth-first from every root) and orphan detection
- Connection map
- Action categorization by type
- External endpoint extraction
"""

from collections import deque
from functools import cached_property

from flowkpi.models import ActionType, State, StateAction


class GraphAnalyzer:
    """Analyzes the transition graph formed by states and their outputs.

    Results are memoized for this instance only; build a new analyzer for
    every flow.
    """

    def __init__(self, states: tuple[State, ...]):
        """Initialize with the canonical states of one flow."""
        self.states = states

    @cached_property
    def _index(self) -> dict[str, State]:
        # First state wins when ids repeat
        index: dict[str, State] = {}
        for state in self.states:
            index.setdefault(state.id, state)
        return index

    # =========================================================================
    # Reachability
    # =========================================================================

    @cached_property
    def root_states(self) -> tuple[State, ...]:
        """States flagged as entry points."""
        return tuple(state for state in self.states if state.is_root)

    @cached_property
    def reachable_ids(self) -> frozenset[str]:
        """Ids reachable from any root through outputs and default outputs."""
        visited: set[str] = set()
        queue = deque(state.id for state in self.root_states)

        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)

            state = self._index.get(current)
            if state is None:
                continue
            for target in state.targets():
                if target not in visited:
                    queue.append(target)

        return frozenset(visited)

    @cached_property
    def orphan_states(self) -> tuple[State, ...]:
        """States not reachable from any root, in input order.

        With no root at all every state is an orphan.
        """
        reachable = self.reachable_ids
        return tuple(state for state in self.states if state.id not in reachable)

    # =========================================================================
    # Connections and Actions
    # =========================================================================

    @cached_property
    def connections(self) -> dict[str, tuple[str, ...]]:
        """Map each state id to its destination ids (outputs, then default)."""
        return {state.id: tuple(state.targets()) for state in self.states}

    @cached_property
    def actions_by_type(self) -> dict[str, tuple[StateAction, ...]]:
        """Group every action by type, tagged with its owning state id."""
        grouped: dict[str, list[StateAction]] = {}
        for state in self.states:
            for action in state.all_actions:
                grouped.setdefault(action.type, []).append(StateAction(state.id, action))
        return {action_type: tuple(actions) for action_type, actions in grouped.items()}

    @cached_property
    def endpoints(self) -> frozenset[str]:
        """Distinct URIs called by HTTP actions."""
        return frozenset(
            action.uri
            for action in self.actions_by_type.get(ActionType.PROCESS_HTTP, ())
            if action.uri
        )
