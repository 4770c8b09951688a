"""Step catalog DTO（Data Transfer Objects）

定义步骤目录、模板变量、条件类型相关的响应模型。
字段名沿用编辑器前端的线上格式（defaultData / textFields / requiredFields）。
"""

from pydantic import BaseModel, ConfigDict, Field

from campaign_builder.domain.services.step_catalog import StepDefinition
from campaign_builder.domain.services.step_validation_rules import get_step_contract
from campaign_builder.domain.services.template_variables import get_template_variables


class StepDefinitionDTO(BaseModel):
    """StepDefinition DTO

    字段：
    - type / label / icon / description / category: 调色板展示信息
    - defaultData: 新节点的默认配置（每次返回独立副本）
    - textFields: 支持插入 {{variable}} 的文本字段
    - advisory: 渠道限制提示（如 LinkedIn 连接请求消息配额）
    - requiredFields: 保存前必须填写的字段
    - specialRule: 不能用必填字段表达的规则（如 delay_window）
    - templateVariables: 该步骤可用的模板变量
    """

    type: str
    label: str
    icon: str
    description: str
    category: str
    defaultData: dict = Field(default_factory=dict, description="默认配置")
    textFields: list[str] = Field(default_factory=list, description="可插入变量的文本字段")
    advisory: str | None = Field(default=None, description="渠道限制提示")
    requiredFields: list[str] = Field(default_factory=list, description="必填字段")
    specialRule: str | None = Field(default=None, description="特殊校验规则")
    templateVariables: list[str] = Field(default_factory=list, description="可用模板变量")

    @classmethod
    def from_entity(cls, definition: StepDefinition) -> "StepDefinitionDTO":
        contract = get_step_contract(definition.type)
        return cls(
            type=definition.type.value,
            label=definition.label,
            icon=definition.icon,
            description=definition.description,
            category=definition.category.value,
            defaultData=definition.new_config(),
            textFields=list(definition.text_fields),
            advisory=definition.advisory,
            requiredFields=list(contract.required_fields),
            specialRule=contract.special_rule,
            templateVariables=list(get_template_variables(definition.category)),
        )

    model_config = ConfigDict(from_attributes=True)


class StepDefinitionListResponse(BaseModel):
    """步骤目录响应

    - definitions: 按目录声明顺序排列
    - categories: 调色板分组顺序
    """

    definitions: list[StepDefinitionDTO]
    categories: list[str]


class TemplateVariablesResponse(BaseModel):
    """模板变量响应（按渠道分类）"""

    variables: dict[str, list[str]]


class ConditionTypesResponse(BaseModel):
    """条件类型响应（按渠道分类，仅供编辑器展示，不参与校验）"""

    condition_types: dict[str, list[str]]
