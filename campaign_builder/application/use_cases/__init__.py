"""Application 层用例 - 编辑会话与外部 campaign 服务之间的编排

设计原则：
- 单一职责：每个 Use Case 只做一件事
- 依赖倒置：依赖 Port 接口，不依赖具体实现
"""

from campaign_builder.application.use_cases.load_campaign import (
    LoadCampaignInput,
    LoadCampaignUseCase,
)
from campaign_builder.application.use_cases.save_campaign import (
    SaveCampaignInput,
    SaveCampaignOutput,
    SaveCampaignUseCase,
)

__all__ = [
    "LoadCampaignInput",
    "LoadCampaignUseCase",
    "SaveCampaignInput",
    "SaveCampaignOutput",
    "SaveCampaignUseCase",
]
