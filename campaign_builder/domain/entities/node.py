"""Node 实体 - campaign 工作流中的一个步骤（编译前的可编辑形态）

业务定义：
- Node 对应一个外联动作或控制流步骤（发送、等待、分支）
- 每个 Node 有类型、位置、配置
- config 存放该步骤类型特有的字段（message、subject、delayDays、voiceAgentId 等）

设计原则：
- 纯 Python 实现，不依赖任何框架（DDD 要求）
- 使用 dataclass 简化样板代码
- 通过工厂方法 create() 封装创建逻辑
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from campaign_builder.domain.value_objects.position import Position
from campaign_builder.domain.value_objects.step_type import StepType


@dataclass
class Node:
    """Node 实体

    属性说明：
    - id: 唯一标识符（node_ 前缀）
    - type: 步骤类型
    - position: 画布坐标（由前端布局引擎维护，领域核心不读取）
    - config: 步骤配置（不同类型的步骤字段不同）
    """

    id: str
    type: StepType
    position: Position = field(default_factory=Position)
    config: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        type: StepType,
        config: dict[str, Any] | None = None,
        position: Position | None = None,
    ) -> "Node":
        """创建 Node 的工厂方法

        参数：
            type: 步骤类型
            config: 步骤配置（调用方负责传入私有副本）
            position: 节点位置（可选）

        返回：
            Node 实例
        """
        return cls(
            id=f"node_{uuid4().hex[:8]}",
            type=StepType(type),
            position=position or Position(),
            config=config if config is not None else {},
        )

    @property
    def is_sentinel(self) -> bool:
        return self.type.is_sentinel

    def update_position(self, position: Position) -> None:
        """更新节点位置

        用于拖拽调整工作流时更新节点位置
        """
        self.position = position

    def update_config(self, partial_config: dict[str, Any]) -> None:
        """合并更新节点配置

        业务规则：
        - 浅合并：partial_config 中未出现的 key 保持原值
        - 设置面板每次只提交一个字段（{field: value}）

        参数：
            partial_config: 需要覆盖的字段
        """
        self.config = {**self.config, **partial_config}
