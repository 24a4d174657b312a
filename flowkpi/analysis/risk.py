"""Risk analysis for FlowKPI.

Heuristic static checks, each independent of the others:
- HIGH_RISK_SCRIPT: every script, graded by length and variable contract
- PERFORMANCE_RISK: synchronous HTTP calls
- SECURITY_RISK: HTTP calls without an Authorization header
- DEAD_CODE: states unreachable from any root
"""

from flowkpi.common.text import count_lines, has_authorization_header
from flowkpi.constants import (
    SCRIPT_HIGH_RISK_LINES,
    SCRIPT_MEDIUM_RISK_LINES,
    UNTITLED_HTTP_LABEL,
    UNTITLED_SCRIPT_LABEL,
)
from flowkpi.models import (
    Action,
    ActionType,
    RiskFactor,
    RiskKind,
    RiskSeverity,
    State,
)


class RiskAnalyzer:
    """Identifies risk factors in the actions and structure of a flow.

    Findings for actions come first, state by state and action by action in
    phase order; dead-code findings for orphan states are appended last.
    """

    def __init__(self, states: tuple[State, ...], orphan_states: tuple[State, ...]):
        """Initialize with the flow states and the orphans found by graph analysis."""
        self.states = states
        self.orphan_states = orphan_states

    def get_risks(self) -> list[RiskFactor]:
        """Run all risk checks."""
        risks: list[RiskFactor] = []

        for state in self.states:
            for action in state.all_actions:
                if action.type == ActionType.EXECUTE_SCRIPT:
                    risks.append(self._check_script(state, action))
                elif action.type == ActionType.PROCESS_HTTP:
                    risks.extend(self._check_http(state, action))

        risks.extend(self._check_dead_code())
        return risks

    def _check_script(self, state: State, action: Action) -> RiskFactor:
        """Grade a script by line count and by its input/output contract."""
        lines = count_lines(action.settings.get("source"))
        has_input = len(action.input_variables) > 0
        has_output = bool(action.output_variable)

        if lines > SCRIPT_HIGH_RISK_LINES or not has_input or not has_output:
            severity = RiskSeverity.HIGH
            description = f"Complex script ({lines} lines)"
            if not has_input:
                description += ", no inputs"
            if not has_output:
                description += ", no output"
        elif lines > SCRIPT_MEDIUM_RISK_LINES:
            severity = RiskSeverity.MEDIUM
            description = f"Medium script ({lines} lines)"
        else:
            severity = RiskSeverity.LOW
            description = f"Custom script detected ({lines} lines)"

        return RiskFactor(
            kind=RiskKind.HIGH_RISK_SCRIPT,
            severity=severity,
            location=_location(state, action, UNTITLED_SCRIPT_LABEL),
            description=description,
            recommendation="Review script complexity and document its inputs and output",
        )

    def _check_http(self, state: State, action: Action) -> list[RiskFactor]:
        """Flag synchronous and unauthenticated HTTP calls."""
        risks: list[RiskFactor] = []
        location = _location(state, action, UNTITLED_HTTP_LABEL)

        if not action.settings.get("async"):
            risks.append(RiskFactor(
                kind=RiskKind.PERFORMANCE_RISK,
                severity=RiskSeverity.MEDIUM,
                location=location,
                description="Synchronous HTTP call may block the conversation",
                recommendation="Consider making the call asynchronous or adding a timeout",
            ))

        if not has_authorization_header(action.settings.get("headers")):
            risks.append(RiskFactor(
                kind=RiskKind.SECURITY_RISK,
                severity=RiskSeverity.MEDIUM,
                location=location,
                description="HTTP call without authentication detected",
                recommendation="Check whether this endpoint requires authentication",
            ))

        return risks

    def _check_dead_code(self) -> list[RiskFactor]:
        """One finding per state unreachable from any root."""
        return [
            RiskFactor(
                kind=RiskKind.DEAD_CODE,
                severity=RiskSeverity.LOW,
                location=state.id,
                description=f"State '{state.id}' is unreachable from any root state",
                recommendation="Remove the orphan state or connect it to the flow",
            )
            for state in self.orphan_states
        ]


def _location(state: State, action: Action, fallback: str) -> str:
    return f"{state.id} - {action.title or fallback}"
