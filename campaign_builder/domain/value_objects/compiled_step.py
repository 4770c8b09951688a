"""CompiledStep 值对象 - 编译后交给外部执行服务的步骤

线上格式：
    { type: string, order: integer, title: string, description?: string, config: object }

CompiledStep 由编译器产出，之后不再修改；重新编译会产生新的列表。
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from campaign_builder.domain.value_objects.step_type import StepType


@dataclass(frozen=True, slots=True)
class CompiledStep:
    type: StepType
    order: int
    title: str
    description: str = ""
    config: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type.value,
            "order": self.order,
            "title": self.title,
            "config": copy.deepcopy(self.config),
        }
        if self.description:
            payload["description"] = self.description
        return payload
