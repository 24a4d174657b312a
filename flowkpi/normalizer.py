"""Flow document normalizer for FlowKPI.

Converts an uploaded flow document into the canonical, ordered tuple of
``State`` records. Two document shapes are known:

1. Flow-map: ``{"flow": {state_id: {"$contentActions": [...], ...}}}``
2. Flat-array (legacy): ``{"states": [{"$id": ..., "outputs": [...]}]}``
   or the bare list of states.

The shape is resolved once here; nothing downstream looks at raw documents.
Normalization is total: values of the wrong type are treated as absent and
missing collections default to empty.

Usage:
    from flowkpi.normalizer import normalize

    states = normalize(document)
"""

import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from flowkpi.constants import (
    FLAT_ARRAY_KEY,
    FLOW_MAP_KEY,
    ROOT_STATE_ID,
    ROOT_STATE_TOKENS,
)
from flowkpi.models import Action, Condition, DocumentShape, Output, State

logger = logging.getLogger(__name__)


def is_root_state_id(state_id: str) -> bool:
    """Heuristic entry point detection for flow-map documents.

    The flow-map shape carries no explicit root flag, so well-known ids
    (``onboarding``) and id fragments (``inicio``, ``start``) mark entry points.
    Matching is case-sensitive.
    """
    return state_id == ROOT_STATE_ID or any(token in state_id for token in ROOT_STATE_TOKENS)


def detect_shape(document: Any) -> DocumentShape:
    """Detect which known shape a parsed JSON document has."""
    if isinstance(document, Mapping):
        if FLOW_MAP_KEY in document:
            return DocumentShape.FLOW_MAP
        if _is_sequence(document.get(FLAT_ARRAY_KEY)):
            return DocumentShape.FLAT_ARRAY
        return DocumentShape.UNKNOWN
    if _is_sequence(document):
        return DocumentShape.FLAT_ARRAY
    return DocumentShape.UNKNOWN


class FlowNormalizer:
    """Builds canonical states from one parsed flow document.

    Attributes:
        document: The parsed JSON document (never modified)
        shape: The detected document shape
    """

    def __init__(self, document: Any):
        self.document = document
        self.shape = detect_shape(document)

    def normalize(self) -> tuple[State, ...]:
        """Build the canonical states for the document."""
        if self.shape == DocumentShape.FLOW_MAP:
            states = self._normalize_flow_map(self.document[FLOW_MAP_KEY])
        elif self.shape == DocumentShape.FLAT_ARRAY:
            raw_states = (
                self.document[FLAT_ARRAY_KEY]
                if isinstance(self.document, Mapping)
                else self.document
            )
            states = self._normalize_flat_array(raw_states)
        else:
            states = ()

        logger.debug("Normalized %s document into %d state(s)", self.shape.value, len(states))
        return states

    # =========================================================================
    # Shape Readers
    # =========================================================================

    def _normalize_flow_map(self, flow: Any) -> tuple[State, ...]:
        """Build one state per key of the flow mapping, in mapping order."""
        if not isinstance(flow, Mapping):
            return ()

        states = []
        for key, raw in flow.items():
            state_id = str(key)
            raw = _as_mapping(raw)
            states.append(State(
                id=state_id,
                title=_as_optional_text(raw.get("$title")),
                tags=_as_text_tuple(raw.get("$tags")),
                is_root=is_root_state_id(state_id),
                entering_actions=self._actions(raw.get("$enteringCustomActions")),
                content_actions=self._actions(raw.get("$contentActions")),
                leaving_actions=self._actions(raw.get("$leavingCustomActions")),
                outputs=self._outputs(raw.get("$conditionOutputs")),
                default_output=self._optional_output(raw.get("$defaultOutput")),
                position=_as_position(raw.get("$position")),
            ))
        return tuple(states)

    def _normalize_flat_array(self, raw_states: Sequence) -> tuple[State, ...]:
        """Build states from pre-shaped state objects, skipping non-objects."""
        states = []
        for raw in raw_states:
            if not isinstance(raw, Mapping):
                continue
            states.append(State(
                id=_as_text(raw.get("$id")),
                title=_as_optional_text(raw.get("$title")),
                tags=_as_text_tuple(raw.get("$tags")),
                is_root=raw.get("is_root") is True,
                entering_actions=self._actions(raw.get("enteringCustomActions")),
                content_actions=self._actions(raw.get("actions")),
                leaving_actions=self._actions(raw.get("leavingCustomActions")),
                outputs=self._outputs(raw.get("outputs")),
                default_output=self._optional_output(raw.get("defaultOutput")),
                position=_as_position(raw.get("$position")),
            ))
        return tuple(states)

    # =========================================================================
    # Element Readers
    # =========================================================================

    def _actions(self, raw_actions: Any) -> tuple[Action, ...]:
        if not _is_sequence(raw_actions):
            return ()
        return tuple(
            self._action(raw) for raw in raw_actions if isinstance(raw, Mapping)
        )

    def _action(self, raw: Mapping) -> Action:
        return Action(
            type=_as_text(raw.get("type")),
            title=_as_optional_text(raw.get("$title")),
            settings=copy.deepcopy(dict(_as_mapping(raw.get("settings")))),
            input_variables=_as_text_tuple(raw.get("inputVariables")),
            output_variable=_as_optional_text(raw.get("outputVariable")) or None,
            id=_as_optional_text(raw.get("$id")),
            raw=copy.deepcopy(dict(raw)),
        )

    def _outputs(self, raw_outputs: Any) -> tuple[Output, ...]:
        if not _is_sequence(raw_outputs):
            return ()
        return tuple(
            self._output(raw) for raw in raw_outputs if isinstance(raw, Mapping)
        )

    def _optional_output(self, raw: Any) -> Output | None:
        if not isinstance(raw, Mapping):
            return None
        return self._output(raw)

    def _output(self, raw: Mapping) -> Output:
        raw_conditions = raw.get("conditions")
        conditions: tuple[Condition, ...] = ()
        if _is_sequence(raw_conditions):
            conditions = tuple(
                self._condition(c) for c in raw_conditions if isinstance(c, Mapping)
            )
        return Output(target_state_id=_as_text(raw.get("stateId")), conditions=conditions)

    def _condition(self, raw: Mapping) -> Condition:
        values = raw.get("values")
        return Condition(
            source=_as_text(raw.get("source")),
            variable=_as_text(raw.get("variable")),
            comparison=_as_text(raw.get("comparison")),
            values=tuple(copy.deepcopy(list(values))) if _is_sequence(values) else (),
        )


def normalize(document: Any) -> tuple[State, ...]:
    """Normalize a parsed flow document into canonical states.

    Args:
        document: Parsed JSON value, in any of the known shapes

    Returns:
        Ordered tuple of states (empty for unknown shapes)
    """
    return FlowNormalizer(document).normalize()


# =============================================================================
# Coercion Helpers
# =============================================================================


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _as_mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _as_text(value: Any) -> str:
    """Coerce ids and names to text; missing or structured values become ``""``."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_text_tuple(value: Any) -> tuple[str, ...]:
    if not _is_sequence(value):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _as_position(value: Any) -> tuple[float, float] | None:
    if not isinstance(value, Mapping):
        return None
    x, y = value.get("x"), value.get("y")
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in (x, y)):
        return None
    return (float(x), float(y))
