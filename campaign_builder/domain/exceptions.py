"""领域层异常定义

为什么需要领域异常？
1. 业务语义清晰：DomainError 表示业务规则违反，不是技术错误
2. 异常分层：Domain 异常 vs Infrastructure 异常 vs API 异常
3. 统一处理：上层可以统一捕获 DomainError 并转换为 4xx 错误

异常层级：
- DomainError
  - NotFoundError：引用了不存在的节点 / 步骤类型（编程错误）
  - InvalidReferenceError：连线时端点节点不存在
  - InvalidEdgeError：自环或格式错误的连线
  - DomainValidationError：结构化的校验失败
    - CompileError：工作流无法编译为步骤序列
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class DomainError(Exception):
    """领域层异常基类

    用途：
    - 表示业务规则违反（如：campaign name 不能为空）
    - 表示领域不变式违反（如：边引用了不存在的节点）

    示例：
        if not name:
            raise DomainError("name 不能为空")
    """

    pass


class NotFoundError(DomainError):
    """实体不存在异常

    用途：
    - 表示引用的实体不存在（如：节点不存在、步骤类型未注册）
    - 步骤类型未注册属于编程错误，调用方不得静默吞掉

    参数：
        entity_type: 实体类型（如："Node"、"StepType"）
        entity_id: 实体 ID
    """

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} 不存在: {entity_id}")


class InvalidReferenceError(DomainError):
    """连线引用了不存在的节点

    与 NotFoundError 区分：这是操作员连线时的输入错误，
    而不是程序内部引用了错误的 ID。
    """

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"节点不存在: {node_id}")


class InvalidEdgeError(DomainError):
    """非法连线（自环、端点为空等）

    抛出时图不会发生任何变更。
    """

    pass


class DomainValidationError(DomainError):
    """结构化校验失败

    属性说明：
    - code: 机器可读的错误码（如 "workflow_invalid"）
    - errors: 错误明细列表，每项形如 {"code", "message", "path"?, "meta"?}
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "validation_error",
        errors: list[dict[str, Any]] | None = None,
    ):
        self.code = code
        self.errors = list(errors or [])
        super().__init__(message)


class CompileErrorKind(str, Enum):
    """编译失败的类别

    - EMPTY: 没有可执行步骤，或 campaign 名称为空
    - NOT_VALID: 至少一个节点未通过校验
    - DISCONNECTED: 入口节点不唯一（0 个或多个入度为 0 的节点）
    """

    EMPTY = "empty"
    NOT_VALID = "not_valid"
    DISCONNECTED = "disconnected"


class CompileError(DomainValidationError):
    """工作流编译失败

    属于操作员可修正的错误：在保存请求发往网络之前拦截，
    并以结构化的 errors 列表返回给前端。
    """

    def __init__(
        self,
        kind: CompileErrorKind,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.kind = kind
        super().__init__(message, code=f"compile_{kind.value}", errors=errors)


class CampaignServiceError(DomainError):
    """外部 campaign 服务调用失败（网络错误、4xx/5xx、响应格式错误）

    可恢复：图状态保持不变，操作员可以直接重试保存。
    """

    def __init__(self, message: str, *, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
