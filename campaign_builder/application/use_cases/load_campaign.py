"""LoadCampaignUseCase - 打开已有 campaign 进行编辑

业务流程：
1. 从外部 campaign 服务获取 campaign（包含 steps）
2. 按 order 重建线性工作流图
3. 为其打开新的编辑会话
"""

import logging
from dataclasses import dataclass

from campaign_builder.application.services.editor_session import (
    EditorSessionRegistry,
    WorkflowEditorSession,
)
from campaign_builder.domain.entities.workflow import WorkflowGraph
from campaign_builder.domain.exceptions import CampaignServiceError
from campaign_builder.domain.ports.campaign_service import CampaignServicePort

logger = logging.getLogger(__name__)


@dataclass
class LoadCampaignInput:
    campaign_id: str


class LoadCampaignUseCase:
    """LoadCampaign Use Case

    依赖：
    - EditorSessionRegistry: 编辑会话注册表
    - CampaignServicePort: 外部 campaign 服务接口
    """

    def __init__(
        self,
        session_registry: EditorSessionRegistry,
        campaign_service: CampaignServicePort,
    ):
        self.session_registry = session_registry
        self.campaign_service = campaign_service

    async def execute(self, input_data: LoadCampaignInput) -> WorkflowEditorSession:
        """执行 Use Case

        抛出：
            NotFoundError: campaign 不存在，或步骤类型未注册时
            CampaignServiceError: 远端服务失败，或响应缺少 steps 列表时
        """
        campaign = await self.campaign_service.get_campaign(input_data.campaign_id)

        steps = campaign.get("steps") or []
        if not isinstance(steps, list):
            raise CampaignServiceError("Campaign service returned malformed steps")

        graph = WorkflowGraph.from_steps(
            str(campaign.get("name") or ""),
            steps,
            campaign_id=input_data.campaign_id,
        )
        session = await self.session_registry.open(graph)

        logger.info(
            "campaign_loaded",
            extra={
                "session_id": session.session_id,
                "campaign_id": input_data.campaign_id,
                "step_count": len(steps),
            },
        )
        return session
