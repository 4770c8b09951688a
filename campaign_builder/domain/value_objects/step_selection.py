"""StepSelection 值对象 - 当前选中节点的设置面板状态

业务规则：
- 未选中任何节点：面板提示"选择一个步骤"
- 选中 start / end 哨兵节点：不可配置，不暴露设置表单
"""

from dataclasses import dataclass

from campaign_builder.domain.value_objects.step_type import StepType


@dataclass(frozen=True, slots=True)
class StepSelection:
    node_id: str | None = None
    step_type: StepType | None = None
    configurable: bool = False

    @property
    def message(self) -> str | None:
        if self.node_id is None:
            return "Select a step to configure"
        if not self.configurable:
            return "This step cannot be edited"
        return None
