"""StepValidator unit tests (required-field table + delay / linkedin_connect rules)."""

from __future__ import annotations

import math

import pytest

from campaign_builder.domain.entities.workflow import WorkflowGraph
from campaign_builder.domain.exceptions import NotFoundError
from campaign_builder.domain.services.step_catalog import get_step_definition, list_step_definitions
from campaign_builder.domain.services.step_validation_rules import (
    get_required_fields,
    get_step_contract,
    get_step_contracts,
)
from campaign_builder.domain.services.step_validator import (
    coerce_delay_value,
    compute_validity,
    is_delay_valid,
    is_field_valid,
    validate_workflow,
)
from campaign_builder.domain.value_objects.step_type import StepType


class TestIsFieldValid:
    @pytest.mark.parametrize("value", [None, "", "   ", [], float("nan")])
    def test_empty_values_are_invalid(self, value) -> None:
        assert is_field_valid(value) is False

    @pytest.mark.parametrize("value", ["x", 0, 50, ["name"], False, {"k": "v"}])
    def test_non_empty_values_are_valid(self, value) -> None:
        assert is_field_valid(value) is True


class TestCatalogDefaults:
    def test_every_type_has_a_contract(self) -> None:
        assert set(get_step_contracts()) == set(StepType)

    def test_filled_defaults_are_valid_except_delay(self) -> None:
        """默认配置中空白的必填字段补齐后：除 delay（全 0）外全部有效"""
        for definition in list_step_definitions():
            config = definition.new_config()
            for key in get_required_fields(definition.type):
                if not is_field_valid(config.get(key)):
                    config[key] = "filled"

            validity = compute_validity(definition.type, config)

            if definition.type is StepType.DELAY:
                assert validity.valid is False
            else:
                assert validity.valid is True, definition.type

    @pytest.mark.parametrize(
        ("step_type", "missing_fields"),
        [
            (StepType.LINKEDIN_EMPLOYEE_LIST, ("linkedinCompanyUrl",)),
            (StepType.LINKEDIN_AUTOPOST, ("linkedinPostContent",)),
            (StepType.VOICE_AGENT_CALL, ("voiceAgentId",)),
            (StepType.INSTAGRAM_LIKE, ("instagramPostUrl",)),
            (StepType.INSTAGRAM_AUTOPOST, ("instagramPostCaption", "instagramPostImageUrl")),
            (StepType.LEAD_GENERATION, ("leadGenerationQuery",)),
        ],
    )
    def test_blank_defaults_start_invalid(self, step_type, missing_fields) -> None:
        """默认值为空字符串的步骤：新建后需要操作员填写"""
        config = get_step_definition(step_type).new_config()

        validity = compute_validity(step_type, config)

        assert validity.valid is False
        assert validity.missing_fields == missing_fields

    def test_required_fields_keep_table_order(self) -> None:
        assert get_required_fields(StepType.EMAIL_SEND) == ("subject", "body")
        assert get_required_fields(StepType.INSTAGRAM_DM) == (
            "instagramUsername",
            "instagramDmMessage",
        )

    def test_unknown_type_raises_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            compute_validity("fax_send", {})
        with pytest.raises(NotFoundError):
            get_step_contract("fax_send")


class TestRequiredFields:
    def test_missing_fields_reported_in_table_order(self) -> None:
        validity = compute_validity(StepType.EMAIL_SEND, {"subject": " ", "body": ""})

        assert validity.valid is False
        assert validity.missing_fields == ("subject", "body")
        assert validity.invalid_fields == frozenset({"subject", "body"})
        assert validity.to_dict() == {"valid": False, "missingFields": ["subject", "body"]}

    def test_none_config_is_treated_as_empty(self) -> None:
        validity = compute_validity(StepType.WHATSAPP_SEND, None)

        assert validity.missing_fields == ("whatsappMessage",)

    def test_linkedin_connect_message_is_optional(self) -> None:
        assert compute_validity(StepType.LINKEDIN_CONNECT, {"message": ""}).valid is True

    def test_linkedin_message_requires_message(self) -> None:
        validity = compute_validity(StepType.LINKEDIN_MESSAGE, {"message": ""})

        assert validity.valid is False
        assert validity.missing_fields == ("message",)

    @pytest.mark.parametrize(
        "step_type",
        [StepType.START, StepType.END, StepType.LINKEDIN_VISIT, StepType.LINKEDIN_FOLLOW],
    )
    def test_zero_config_types_are_always_valid(self, step_type: StepType) -> None:
        assert compute_validity(step_type, {}).valid is True
        assert get_step_contract(step_type).always_valid is True

    def test_empty_scrape_field_list_is_invalid(self) -> None:
        validity = compute_validity(StepType.LINKEDIN_SCRAPE_PROFILE, {"linkedinScrapeFields": []})

        assert validity.missing_fields == ("linkedinScrapeFields",)

    def test_nan_lead_limit_is_invalid(self) -> None:
        validity = compute_validity(
            StepType.LEAD_GENERATION,
            {"leadGenerationQuery": "CTOs in Berlin", "leadGenerationLimit": math.nan},
        )

        assert validity.missing_fields == ("leadGenerationLimit",)

    def test_validity_ignores_unrelated_config_keys(self) -> None:
        validity = compute_validity(
            StepType.VOICE_AGENT_CALL,
            {"voiceAgentId": "agent_1", "x": 1, "position": {"x": 5}},
        )

        assert validity.valid is True


class TestDelayRule:
    @pytest.mark.parametrize(
        ("days", "hours", "minutes", "valid"),
        [
            (1, 0, 0, True),
            (0, 0, 0, False),
            (0, 0, 59, True),
            (0, 23, 0, True),
            (365, 0, 0, True),
        ],
    )
    def test_delay_window(self, days, hours, minutes, valid) -> None:
        config = {"delayDays": days, "delayHours": hours, "delayMinutes": minutes}

        assert compute_validity(StepType.DELAY, config).valid is valid
        assert is_delay_valid(config) is valid

    def test_all_zero_delay_flags_every_unit(self) -> None:
        validity = compute_validity(StepType.DELAY, {"delayDays": 0, "delayHours": 0, "delayMinutes": 0})

        assert validity.missing_fields == ("delayDays", "delayHours", "delayMinutes")

    def test_out_of_bound_unit_is_invalid(self) -> None:
        validity = compute_validity(StepType.DELAY, {"delayDays": 1, "delayHours": 24, "delayMinutes": 0})

        assert validity.valid is False
        assert validity.missing_fields == ("delayHours",)

    def test_negative_unit_is_invalid(self) -> None:
        validity = compute_validity(StepType.DELAY, {"delayDays": -1, "delayMinutes": 30})

        assert validity.missing_fields == ("delayDays",)

    def test_missing_units_default_to_zero(self) -> None:
        assert compute_validity(StepType.DELAY, {"delayHours": 2}).valid is True
        assert is_delay_valid(None) is False

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 0), (True, 0), (3, 3), (2.9, 2), ("5", 5), (" 12h", 12), ("abc", 0), (math.nan, 0), ([], 0)],
    )
    def test_coerce_delay_value(self, raw, expected) -> None:
        assert coerce_delay_value(raw) == expected

    def test_numeric_strings_are_accepted(self) -> None:
        assert compute_validity(StepType.DELAY, {"delayMinutes": "15"}).valid is True


def test_validate_workflow_is_keyed_by_node_id(linear_graph: WorkflowGraph) -> None:
    delay = linear_graph.add_node(StepType.DELAY)

    results = validate_workflow(linear_graph)

    assert list(results) == [node.id for node in linear_graph.nodes]
    assert results[delay.id].valid is False
    assert all(results[node.id].valid for node in linear_graph.nodes[:-1])
