"""CampaignStatus 枚举 - campaign 在外部执行服务中的生命周期状态

状态转换（由外部服务维护，本模块只做映射）：
DRAFT → RUNNING ⇄ PAUSED → COMPLETED / STOPPED
"""

from enum import Enum


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"
