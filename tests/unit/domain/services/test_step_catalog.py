"""StepCatalog unit tests.

Coverage:
- every StepType is registered exactly once
- declaration order is the curated palette order (never sorted)
- unknown types raise NotFoundError
- default config is handed out as a private copy
"""

from __future__ import annotations

import pytest

from campaign_builder.domain.exceptions import NotFoundError
from campaign_builder.domain.services.step_catalog import (
    LINKEDIN_CONNECT_ADVISORY,
    get_step_definition,
    list_by_category,
    list_step_definitions,
    palette_categories,
)
from campaign_builder.domain.value_objects.step_type import StepCategory, StepType


def test_every_step_type_is_registered_once() -> None:
    types = [definition.type for definition in list_step_definitions()]

    assert len(types) == len(set(types))
    assert set(types) == set(StepType)


def test_catalog_order_is_stable_declaration_order() -> None:
    first = [definition.type for definition in list_step_definitions()]
    second = [definition.type for definition in list_step_definitions()]

    assert first == second
    assert first[0] is StepType.LINKEDIN_VISIT
    assert first[-2:] == [StepType.START, StepType.END]
    assert first != sorted(first, key=lambda step_type: step_type.value)


def test_list_by_category_keeps_declaration_order() -> None:
    linkedin = [definition.type for definition in list_by_category(StepCategory.LINKEDIN)]

    assert linkedin == [
        StepType.LINKEDIN_VISIT,
        StepType.LINKEDIN_FOLLOW,
        StepType.LINKEDIN_CONNECT,
        StepType.LINKEDIN_MESSAGE,
        StepType.LINKEDIN_SCRAPE_PROFILE,
        StepType.LINKEDIN_COMPANY_SEARCH,
        StepType.LINKEDIN_EMPLOYEE_LIST,
        StepType.LINKEDIN_AUTOPOST,
        StepType.LINKEDIN_COMMENT_REPLY,
    ]


def test_list_by_category_accepts_string_value() -> None:
    utility = [definition.type for definition in list_by_category("utility")]

    assert utility == [StepType.DELAY, StepType.CONDITION]


def test_list_by_unknown_category_raises_value_error() -> None:
    with pytest.raises(ValueError):
        list_by_category("fax")


@pytest.mark.parametrize("step_type", ["fax_send", "", "LINKEDIN_VISIT"])
def test_unknown_step_type_raises_not_found(step_type: str) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        get_step_definition(step_type)

    assert exc_info.value.entity_type == "StepType"


def test_get_step_definition_accepts_enum_and_value() -> None:
    assert get_step_definition(StepType.DELAY) is get_step_definition("delay")


def test_new_config_returns_private_copy() -> None:
    definition = get_step_definition(StepType.LINKEDIN_SCRAPE_PROFILE)

    config = definition.new_config()
    config["linkedinScrapeFields"].clear()

    assert definition.new_config()["linkedinScrapeFields"] == ["name", "title", "company", "location"]


def test_default_data_is_read_only() -> None:
    definition = get_step_definition(StepType.EMAIL_SEND)

    with pytest.raises(TypeError):
        definition.default_data["subject"] = "mutated"  # type: ignore[index]


def test_linkedin_connect_carries_quota_advisory() -> None:
    payload = get_step_definition(StepType.LINKEDIN_CONNECT).to_dict()

    assert payload["advisory"] == LINKEDIN_CONNECT_ADVISORY
    assert "advisory" not in get_step_definition(StepType.LINKEDIN_MESSAGE).to_dict()


def test_to_dict_wire_shape() -> None:
    payload = get_step_definition(StepType.DELAY).to_dict()

    assert payload["type"] == "delay"
    assert payload["category"] == "utility"
    assert payload["defaultData"] == {"title": "Delay", "delayDays": 0, "delayHours": 0, "delayMinutes": 0}
    assert {"label", "icon", "description"} <= payload.keys()


def test_palette_categories_exclude_sentinels() -> None:
    categories = palette_categories()

    assert categories[0] is StepCategory.LEADS
    assert StepCategory.START not in categories
    assert StepCategory.END not in categories
