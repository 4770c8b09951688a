"""测试：值对象（StepType / ConditionType / StepSelection）"""

from campaign_builder.domain.value_objects import (
    CONDITION_TYPES_BY_CATEGORY,
    ConditionType,
    StepSelection,
    StepType,
)


class TestStepType:
    def test_step_type_is_closed_enumeration(self):
        assert len(StepType) == 24
        assert StepType("linkedin_connect") is StepType.LINKEDIN_CONNECT

    def test_only_start_and_end_are_sentinels(self):
        sentinels = {step_type for step_type in StepType if step_type.is_sentinel}

        assert sentinels == {StepType.START, StepType.END}


class TestConditionType:
    def test_every_condition_type_is_grouped_once(self):
        grouped = [condition for group in CONDITION_TYPES_BY_CATEGORY.values() for condition in group]

        assert len(grouped) == len(set(grouped))
        assert set(grouped) == set(ConditionType)


class TestStepSelection:
    def test_empty_selection_prompts_operator(self):
        assert StepSelection().message == "Select a step to configure"

    def test_configurable_selection_has_no_message(self):
        selection = StepSelection(node_id="node_1", step_type=StepType.EMAIL_SEND, configurable=True)

        assert selection.message is None
