"""CampaignService Port - 外部 campaign 持久化/执行服务接口

为什么需要 CampaignService Port？
1. 依赖倒置（DIP）：应用层只依赖接口，httpx 实现放在基础设施层
2. 可测试性：Use Case 可以使用内存实现或 Fake 进行单元测试
3. 编辑核心与远端服务解耦：编译在本地完成，远端只接收步骤列表

设计原则：
- 使用 Protocol（结构化子类型，不需要显式继承）
- 负载使用线上格式（dict），与远端服务契约保持一致
- 所有方法都是异步的：这是编辑器唯一的异步边界
"""

from typing import Any, Protocol


class CampaignServicePort(Protocol):
    """外部 campaign 服务接口

    失败语义：
    - 所有网络 / HTTP / 响应格式错误都转换为 CampaignServiceError
    - 远端不存在的 campaign 转换为 NotFoundError
    """

    async def create_campaign(self, payload: dict[str, Any]) -> dict[str, Any]:
        """创建 campaign

        参数：
            payload: {name, status?, config?, steps: [CompiledStep payload]}

        返回：
            远端返回的 campaign（至少包含 id）
        """
        ...

    async def update_campaign(self, campaign_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        """部分更新 campaign（如 name）"""
        ...

    async def update_campaign_steps(
        self, campaign_id: str, steps: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """整体替换 campaign 的步骤列表"""
        ...

    async def get_campaign(self, campaign_id: str) -> dict[str, Any]:
        """获取 campaign（包含 steps）

        抛出：
            NotFoundError: campaign 不存在时
        """
        ...
