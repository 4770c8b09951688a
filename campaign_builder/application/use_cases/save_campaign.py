"""SaveCampaignUseCase - 编译并保存编辑中的 campaign

业务场景：
- 操作员在编辑器中点击保存
- 新 campaign：创建 campaign 并携带步骤列表
- 已有 campaign：先更新名称，再整体替换步骤列表

设计原则：
- 编译失败（CompileError）时绝不发起网络请求
- 同一会话的保存互斥：持有会话锁完成 compile + persist
- 远端失败时图保持不变，操作员可以直接重试
"""

import logging
from dataclasses import dataclass

from campaign_builder.application.services.editor_session import EditorSessionRegistry
from campaign_builder.domain.exceptions import CampaignServiceError
from campaign_builder.domain.ports.campaign_service import CampaignServicePort
from campaign_builder.domain.services.workflow_compiler import compile_workflow
from campaign_builder.domain.value_objects.campaign_status import CampaignStatus
from campaign_builder.domain.value_objects.compiled_step import CompiledStep

logger = logging.getLogger(__name__)


@dataclass
class SaveCampaignInput:
    """SaveCampaign 输入参数

    属性说明：
    - session_id: 编辑会话 ID
    """

    session_id: str


@dataclass(frozen=True)
class SaveCampaignOutput:
    """SaveCampaign 输出

    属性说明：
    - campaign_id: 远端 campaign ID
    - created: 本次是否新建了 campaign
    - steps: 本次提交的编译结果
    """

    campaign_id: str
    created: bool
    steps: list[CompiledStep]


class SaveCampaignUseCase:
    """SaveCampaign Use Case

    职责：
    1. 获取编辑会话（不存在抛出 NotFoundError）
    2. 持锁编译工作流（失败抛出 CompileError，不触发持久化）
    3. 调用外部 campaign 服务创建或更新

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

    async def execute(self, input_data: SaveCampaignInput) -> SaveCampaignOutput:
        """执行 Use Case

        抛出：
            NotFoundError: 会话不存在时
            CompileError: 工作流无法编译时
            CampaignServiceError: 远端服务失败时
        """
        session = await self.session_registry.get(input_data.session_id)

        async with session.lock:
            graph = session.graph
            steps = compile_workflow(graph)
            payload = [step.to_payload() for step in steps]

            created = graph.campaign_id is None
            try:
                if created:
                    campaign = await self.campaign_service.create_campaign(
                        {
                            "name": graph.name,
                            "status": CampaignStatus.DRAFT.value,
                            "steps": payload,
                        }
                    )
                    campaign_id = campaign.get("id")
                    if not isinstance(campaign_id, str) or not campaign_id:
                        raise CampaignServiceError("Campaign service response is missing campaign id")
                    graph.campaign_id = campaign_id
                else:
                    campaign_id = graph.campaign_id
                    await self.campaign_service.update_campaign(campaign_id, {"name": graph.name})
                    await self.campaign_service.update_campaign_steps(campaign_id, payload)
            except CampaignServiceError as exc:
                logger.warning(
                    "campaign_save_failed",
                    extra={
                        "session_id": session.session_id,
                        "campaign_id": graph.campaign_id,
                        "status_code": exc.status_code,
                        "error": str(exc),
                    },
                )
                raise

            session.last_saved_at = graph.updated_at

        logger.info(
            "campaign_saved",
            extra={
                "session_id": session.session_id,
                "campaign_id": campaign_id,
                "campaign_created": created,
                "step_count": len(steps),
            },
        )
        return SaveCampaignOutput(campaign_id=campaign_id, created=created, steps=steps)
