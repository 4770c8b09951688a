"""Domain 值对象

导出所有领域值对象，方便其他模块导入
"""

from campaign_builder.domain.value_objects.campaign_status import CampaignStatus
from campaign_builder.domain.value_objects.compiled_step import CompiledStep
from campaign_builder.domain.value_objects.condition_type import (
    CONDITION_TYPES_BY_CATEGORY,
    ConditionType,
)
from campaign_builder.domain.value_objects.position import Position
from campaign_builder.domain.value_objects.step_selection import StepSelection
from campaign_builder.domain.value_objects.step_type import StepCategory, StepType
from campaign_builder.domain.value_objects.step_validity import StepValidity

__all__ = [
    "CONDITION_TYPES_BY_CATEGORY",
    "CampaignStatus",
    "CompiledStep",
    "ConditionType",
    "Position",
    "StepCategory",
    "StepType",
    "StepSelection",
    "StepValidity",
]
