"""Position 值对象 - 节点在画布上的位置

业务定义：
- Position 由前端布局引擎维护，对领域核心是不透明的
- 校验、编译都不读取坐标，只在节点上原样保存

设计原则：
- 值对象：不可变，通过值比较相等性
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Position 值对象

    示例：
    >>> Position(x=400, y=300) == Position(x=400, y=300)
    True
    """

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}
