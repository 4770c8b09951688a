"""Edge 实体 - 步骤之间的执行顺序

业务定义：
- Edge 表示"target 在 source 之后执行"
- 条件步骤可以有多条出边（分支），分支的选择由外部执行服务负责

设计原则：
- 纯 Python 实现，不依赖任何框架（DDD 要求）
- 通过工厂方法 create() 封装创建逻辑
"""

from dataclasses import dataclass
from uuid import uuid4

from campaign_builder.domain.exceptions import InvalidEdgeError


@dataclass
class Edge:
    """Edge 实体

    属性说明：
    - id: 唯一标识符（edge_ 前缀）
    - source_node_id: 源节点 ID
    - target_node_id: 目标节点 ID
    """

    id: str
    source_node_id: str
    target_node_id: str

    @classmethod
    def create(cls, source_node_id: str, target_node_id: str) -> "Edge":
        """创建 Edge 的工厂方法

        抛出：
            InvalidEdgeError: 当节点 ID 为空或连接到自己时
        """
        if not source_node_id or not source_node_id.strip():
            raise InvalidEdgeError("source_node_id 不能为空")

        if not target_node_id or not target_node_id.strip():
            raise InvalidEdgeError("target_node_id 不能为空")

        if source_node_id.strip() == target_node_id.strip():
            raise InvalidEdgeError("不能连接到自己")

        return cls(
            id=f"edge_{uuid4().hex[:8]}",
            source_node_id=source_node_id.strip(),
            target_node_id=target_node_id.strip(),
        )

    def touches(self, node_id: str) -> bool:
        return self.source_node_id == node_id or self.target_node_id == node_id
