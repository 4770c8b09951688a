"""ConditionType 枚举 - 条件步骤可选的检查项

业务定义：
- 条件步骤检查"上一步"在某个渠道上的结果（已连接、已回复、已接听等）
- 条件的求值与分支选择由外部执行服务负责，这里只提供可选词表

注意：
- 校验引擎只检查 conditionType 是否填写，不检查取值是否在词表中
"""

from enum import Enum

from campaign_builder.domain.value_objects.step_type import StepCategory


class ConditionType(str, Enum):
    CONNECTED = "connected"
    LINKEDIN_REPLIED = "linkedin_replied"
    LINKEDIN_FOLLOWED = "linkedin_followed"
    OPENED = "opened"
    REPLIED = "replied"
    CLICKED = "clicked"
    WHATSAPP_DELIVERED = "whatsapp_delivered"
    WHATSAPP_READ = "whatsapp_read"
    WHATSAPP_REPLIED = "whatsapp_replied"
    VOICE_ANSWERED = "voice_answered"
    VOICE_NOT_ANSWERED = "voice_not_answered"
    VOICE_COMPLETED = "voice_completed"
    VOICE_BUSY = "voice_busy"
    VOICE_FAILED = "voice_failed"
    INSTAGRAM_FOLLOWED = "instagram_followed"
    INSTAGRAM_LIKED = "instagram_liked"
    INSTAGRAM_REPLIED = "instagram_replied"
    INSTAGRAM_COMMENTED = "instagram_commented"
    INSTAGRAM_STORY_VIEWED = "instagram_story_viewed"


# 面板按渠道分组展示（顺序即展示顺序）
CONDITION_TYPES_BY_CATEGORY: dict[StepCategory, tuple[ConditionType, ...]] = {
    StepCategory.LINKEDIN: (
        ConditionType.CONNECTED,
        ConditionType.LINKEDIN_REPLIED,
        ConditionType.LINKEDIN_FOLLOWED,
    ),
    StepCategory.EMAIL: (
        ConditionType.REPLIED,
        ConditionType.OPENED,
        ConditionType.CLICKED,
    ),
    StepCategory.WHATSAPP: (
        ConditionType.WHATSAPP_DELIVERED,
        ConditionType.WHATSAPP_READ,
        ConditionType.WHATSAPP_REPLIED,
    ),
    StepCategory.VOICE: (
        ConditionType.VOICE_ANSWERED,
        ConditionType.VOICE_NOT_ANSWERED,
        ConditionType.VOICE_COMPLETED,
        ConditionType.VOICE_BUSY,
        ConditionType.VOICE_FAILED,
    ),
    StepCategory.INSTAGRAM: (
        ConditionType.INSTAGRAM_FOLLOWED,
        ConditionType.INSTAGRAM_LIKED,
        ConditionType.INSTAGRAM_REPLIED,
        ConditionType.INSTAGRAM_COMMENTED,
        ConditionType.INSTAGRAM_STORY_VIEWED,
    ),
}
