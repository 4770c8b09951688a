"""Step validation engine (Domain Service).

Pure functions over `(step_type, config)`; safe to call on every keystroke.
Validity never depends on node position or on other nodes. Graph-level checks
(empty campaign, ambiguous entry point) live in `workflow_compiler`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from campaign_builder.domain.services.step_validation_rules import (
    DELAY_FIELD_BOUNDS,
    get_step_contract,
)
from campaign_builder.domain.value_objects.step_type import StepType
from campaign_builder.domain.value_objects.step_validity import StepValidity

if TYPE_CHECKING:
    from campaign_builder.domain.entities.node import Node
    from campaign_builder.domain.entities.workflow import WorkflowGraph

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_field_valid(value: Any) -> bool:
    """A required value is invalid if None, blank text, an empty list or NaN."""

    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    if isinstance(value, (list, tuple)) and not value:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return True


def coerce_delay_value(value: Any) -> int:
    """Read a delay unit the way the settings form does.

    Integers pass through, floats are truncated, numeric strings use their leading
    integer; anything else (None, bool, NaN, free text) counts as 0.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def _delay_missing_fields(config: Mapping[str, Any]) -> tuple[str, ...]:
    values = {bound.key: coerce_delay_value(config.get(bound.key)) for bound in DELAY_FIELD_BOUNDS}

    out_of_range = tuple(
        bound.key
        for bound in DELAY_FIELD_BOUNDS
        if not bound.minimum <= values[bound.key] <= bound.maximum
    )
    if out_of_range:
        return out_of_range

    if any(value > 0 for value in values.values()):
        return ()

    # All-zero delay: every unit is flagged so the form can highlight all three inputs.
    return tuple(bound.key for bound in DELAY_FIELD_BOUNDS)


def is_delay_valid(config: Mapping[str, Any] | None) -> bool:
    return not _delay_missing_fields(config or {})


def compute_validity(
    step_type: StepType | str,
    config: Mapping[str, Any] | None,
) -> StepValidity:
    """Compute validity for one step.

    Raises:
        NotFoundError: unregistered step type (programming error).
    """

    contract = get_step_contract(step_type)
    data: Mapping[str, Any] = config or {}

    if contract.special_rule == "delay_window":
        missing = _delay_missing_fields(data)
    else:
        missing = tuple(key for key in contract.required_fields if not is_field_valid(data.get(key)))

    return StepValidity(valid=not missing, missing_fields=missing)


def compute_node_validity(node: Node) -> StepValidity:
    return compute_validity(node.type, node.config)


def validate_workflow(graph: WorkflowGraph) -> dict[str, StepValidity]:
    """Per-node validity keyed by node id, in node insertion order."""

    return {node.id: compute_node_validity(node) for node in graph.nodes}
