"""Editor DTO（Data Transfer Objects）

定义编辑会话相关的请求和响应模型
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from campaign_builder.application.services.editor_session import WorkflowEditorSession
from campaign_builder.domain.entities.edge import Edge
from campaign_builder.domain.entities.node import Node
from campaign_builder.domain.services.step_validator import compute_node_validity
from campaign_builder.domain.value_objects.compiled_step import CompiledStep
from campaign_builder.domain.value_objects.position import Position
from campaign_builder.domain.value_objects.step_selection import StepSelection
from campaign_builder.domain.value_objects.step_type import StepType
from campaign_builder.domain.value_objects.step_validity import StepValidity


class PositionDTO(BaseModel):
    """Position DTO

    注意：允许负坐标（画布可以有负坐标）
    """

    x: float = Field(..., description="横坐标")
    y: float = Field(..., description="纵坐标")

    def to_value_object(self) -> Position:
        return Position(x=self.x, y=self.y)

    model_config = ConfigDict(from_attributes=True)


class StepValidityDTO(BaseModel):
    valid: bool
    missingFields: list[str] = Field(default_factory=list, description="未通过校验的字段")

    @classmethod
    def from_value_object(cls, validity: StepValidity) -> "StepValidityDTO":
        return cls(valid=validity.valid, missingFields=list(validity.missing_fields))


class NodeDTO(BaseModel):
    """Node DTO

    注意：
    - 为了兼容画布前端（React Flow），配置使用 `data` 字段名
    - 后端 Domain 层仍使用 `config` 字段名
    - validity 随节点一起返回，前端直接渲染必填/有效徽标
    """

    id: str
    type: str
    data: dict = Field(default_factory=dict, description="步骤配置")
    position: PositionDTO
    validity: StepValidityDTO

    @classmethod
    def from_entity(cls, node: Node) -> "NodeDTO":
        return cls(
            id=node.id,
            type=node.type.value,
            data=node.config,  # config → data
            position=PositionDTO(x=node.position.x, y=node.position.y),
            validity=StepValidityDTO.from_value_object(compute_node_validity(node)),
        )


class EdgeDTO(BaseModel):
    """Edge DTO（source / target 对应 Domain 的 source_node_id / target_node_id）"""

    id: str
    source: str = Field(..., description="源节点 ID")
    target: str = Field(..., description="目标节点 ID")

    @classmethod
    def from_entity(cls, edge: Edge) -> "EdgeDTO":
        return cls(
            id=edge.id,
            source=edge.source_node_id,
            target=edge.target_node_id,
        )


class StepSelectionDTO(BaseModel):
    node_id: str | None = None
    step_type: str | None = None
    configurable: bool = False
    message: str | None = None

    @classmethod
    def from_value_object(cls, selection: StepSelection) -> "StepSelectionDTO":
        return cls(
            node_id=selection.node_id,
            step_type=selection.step_type.value if selection.step_type else None,
            configurable=selection.configurable,
            message=selection.message,
        )


class EditorSessionResponse(BaseModel):
    """编辑会话响应 DTO

    字段：
    - session_id: 编辑会话 ID
    - workflow_id: 工作流图 ID
    - campaign_id: 外部 campaign ID（新建且未保存时为 None）
    - name: campaign 名称
    - nodes / edges: 当前图
    - selection: 当前选中状态
    """

    session_id: str
    workflow_id: str
    campaign_id: str | None
    name: str
    nodes: list[NodeDTO]
    edges: list[EdgeDTO]
    selection: StepSelectionDTO
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_session(cls, session: WorkflowEditorSession) -> "EditorSessionResponse":
        graph = session.graph
        return cls(
            session_id=session.session_id,
            workflow_id=graph.id,
            campaign_id=graph.campaign_id,
            name=graph.name,
            nodes=[NodeDTO.from_entity(node) for node in graph.nodes],
            edges=[EdgeDTO.from_entity(edge) for edge in graph.edges],
            selection=StepSelectionDTO.from_value_object(graph.selection()),
            created_at=graph.created_at,
            updated_at=graph.updated_at,
        )


class CreateEditorSessionRequest(BaseModel):
    """打开编辑会话请求

    - name: 新 campaign 名称（可为空，保存时校验）
    - campaign_id: 传入时从外部服务加载已有 campaign（name 被忽略）
    """

    name: str = Field(default="", description="campaign 名称")
    campaign_id: str | None = Field(default=None, description="已有 campaign ID")


class RenameCampaignRequest(BaseModel):
    name: str = Field(..., description="campaign 名称")


class AddNodeRequest(BaseModel):
    type: StepType = Field(..., description="步骤类型")
    position: PositionDTO | None = Field(default=None, description="画布位置（可选）")


class UpdateNodeConfigRequest(BaseModel):
    config: dict[str, Any] = Field(..., description="需要覆盖的配置字段（浅合并）")


class InsertVariableRequest(BaseModel):
    field: str = Field(..., min_length=1, description="目标文本字段")
    variable: str = Field(..., min_length=1, description="模板变量名（如 first_name）")


class ConnectNodesRequest(BaseModel):
    source: str = Field(..., description="源节点 ID")
    target: str = Field(..., description="目标节点 ID")


class SelectNodeRequest(BaseModel):
    node_id: str | None = Field(default=None, description="选中的节点 ID（None 表示取消选中）")


class WorkflowValidityResponse(BaseModel):
    valid: bool
    nodes: dict[str, StepValidityDTO]


class CompiledStepDTO(BaseModel):
    """编译后的步骤（外部执行服务的线上格式）"""

    type: str
    order: int
    title: str
    description: str = ""
    config: dict = Field(default_factory=dict)

    @classmethod
    def from_value_object(cls, step: CompiledStep) -> "CompiledStepDTO":
        return cls(
            type=step.type.value,
            order=step.order,
            title=step.title,
            description=step.description,
            config=step.config,
        )


class CompileWorkflowResponse(BaseModel):
    steps: list[CompiledStepDTO]


class SaveCampaignResponse(BaseModel):
    campaign_id: str
    created: bool
    steps: list[CompiledStepDTO]
