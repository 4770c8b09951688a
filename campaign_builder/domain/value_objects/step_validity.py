"""StepValidity 值对象 - 单个步骤的校验结果

前端设置面板据此渲染每个字段的 Required / Valid 标记，
因此校验结果总是以数据返回，而不是抛异常。
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StepValidity:
    """校验结果

    属性说明：
    - valid: 步骤是否可以保存
    - missing_fields: 缺失或非法的字段，保持规则表中的顺序
    """

    valid: bool
    missing_fields: tuple[str, ...] = ()

    @property
    def invalid_fields(self) -> frozenset[str]:
        return frozenset(self.missing_fields)

    def to_dict(self) -> dict[str, object]:
        return {"valid": self.valid, "missingFields": list(self.missing_fields)}
