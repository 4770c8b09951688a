"""StepType / StepCategory 枚举 - 外联步骤类型

业务定义：
- StepType 定义 campaign 工作流中支持的全部步骤类型（封闭集合）
- StepCategory 对步骤按渠道分组（LinkedIn、Email、WhatsApp 等）

设计原则：
- 使用枚举确保类型安全
- 继承 str 方便序列化（前端与外部执行服务都使用字符串值）
"""

from enum import Enum


class StepCategory(str, Enum):
    """步骤分类

    - start / end 只用于哨兵节点，不会出现在步骤面板中
    """

    LINKEDIN = "linkedin"
    EMAIL = "email"
    WHATSAPP = "whatsapp"
    VOICE = "voice"
    INSTAGRAM = "instagram"
    LEADS = "leads"
    UTILITY = "utility"
    START = "start"
    END = "end"


class StepType(str, Enum):
    """步骤类型枚举

    为什么继承 str？
    1. 序列化友好：可以直接转换为 JSON
    2. 兼容性好：可以和外部服务返回的字符串直接比较
    """

    # LinkedIn
    LINKEDIN_VISIT = "linkedin_visit"
    LINKEDIN_FOLLOW = "linkedin_follow"
    LINKEDIN_CONNECT = "linkedin_connect"
    LINKEDIN_MESSAGE = "linkedin_message"
    LINKEDIN_SCRAPE_PROFILE = "linkedin_scrape_profile"
    LINKEDIN_COMPANY_SEARCH = "linkedin_company_search"
    LINKEDIN_EMPLOYEE_LIST = "linkedin_employee_list"
    LINKEDIN_AUTOPOST = "linkedin_autopost"
    LINKEDIN_COMMENT_REPLY = "linkedin_comment_reply"

    # Email
    EMAIL_SEND = "email_send"
    EMAIL_FOLLOWUP = "email_followup"

    # WhatsApp
    WHATSAPP_SEND = "whatsapp_send"

    # Voice Agent
    VOICE_AGENT_CALL = "voice_agent_call"

    # Instagram
    INSTAGRAM_FOLLOW = "instagram_follow"
    INSTAGRAM_LIKE = "instagram_like"
    INSTAGRAM_DM = "instagram_dm"
    INSTAGRAM_AUTOPOST = "instagram_autopost"
    INSTAGRAM_COMMENT_REPLY = "instagram_comment_reply"
    INSTAGRAM_STORY_VIEW = "instagram_story_view"

    # Lead Generation
    LEAD_GENERATION = "lead_generation"

    # 控制流
    DELAY = "delay"
    CONDITION = "condition"

    # 哨兵节点
    START = "start"
    END = "end"

    @property
    def is_sentinel(self) -> bool:
        """start / end 哨兵节点：不可配置，也不会编译为可执行步骤"""
        return self in (StepType.START, StepType.END)
