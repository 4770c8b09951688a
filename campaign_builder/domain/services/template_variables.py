"""Template variable vocabulary for free-text step fields.

Placeholders such as `{{first_name}}` are resolved by the execution runtime at send
time. Nothing here evaluates them, and `insert_variable` never checks a name against
the vocabulary.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from campaign_builder.domain.services.step_catalog import get_step_definition
from campaign_builder.domain.value_objects.step_type import StepCategory, StepType

LEAD_VARIABLES: tuple[str, ...] = (
    "first_name",
    "last_name",
    "company_name",
    "title",
    "industry",
    "email",
    "phone",
)

_TEMPLATE_VARIABLES: Mapping[StepCategory, tuple[str, ...]] = MappingProxyType(
    {
        StepCategory.LINKEDIN: LEAD_VARIABLES,
        StepCategory.EMAIL: LEAD_VARIABLES,
        StepCategory.WHATSAPP: LEAD_VARIABLES,
        StepCategory.VOICE: LEAD_VARIABLES,
        StepCategory.LEADS: LEAD_VARIABLES,
        StepCategory.INSTAGRAM: (*LEAD_VARIABLES, "instagram_username"),
        StepCategory.UTILITY: (),
        StepCategory.START: (),
        StepCategory.END: (),
    }
)


def format_placeholder(variable_name: str) -> str:
    return "{{" + variable_name + "}}"


def insert_variable(current_text: str | None, variable_name: str) -> str:
    """Append `{{variable_name}}` to the current field value (None counts as "")."""

    return (current_text or "") + format_placeholder(variable_name)


def get_template_variables(category: StepCategory | str) -> tuple[str, ...]:
    return _TEMPLATE_VARIABLES[StepCategory(category)]


def all_template_variables() -> Mapping[StepCategory, tuple[str, ...]]:
    return _TEMPLATE_VARIABLES


def variables_for_step(step_type: StepType | str) -> tuple[str, ...]:
    return get_template_variables(get_step_definition(step_type).category)
