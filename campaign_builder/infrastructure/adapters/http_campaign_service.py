"""HTTP Campaign Service Adapter - 通过 httpx 调用外部 campaign 服务

职责:
- 实现 CampaignServicePort
- 拼接 REST 路径、携带 Bearer token
- 解包远端响应信封 {success, data}
- 把 httpx 异常统一翻译为 CampaignServiceError / NotFoundError

路径映射:
- create_campaign        -> POST  /campaigns
- update_campaign        -> PATCH /campaigns/{id}
- update_campaign_steps  -> POST  /campaigns/{id}/steps   body: {steps}
- get_campaign           -> GET   /campaigns/{id}
"""

import json
import logging
from typing import Any

import httpx

from campaign_builder.domain.exceptions import CampaignServiceError, NotFoundError

logger = logging.getLogger(__name__)


class HttpCampaignServiceAdapter:
    """外部 campaign 服务的 httpx 实现"""

    def __init__(
        self,
        *,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    async def create_campaign(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._expect_object(await self._request("POST", "/campaigns", json_body=payload))

    async def update_campaign(self, campaign_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        return self._expect_object(
            await self._request("PATCH", f"/campaigns/{campaign_id}", json_body=updates)
        )

    async def update_campaign_steps(
        self, campaign_id: str, steps: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        data = await self._request(
            "POST",
            f"/campaigns/{campaign_id}/steps",
            json_body={"steps": steps},
        )
        if not isinstance(data, list):
            raise CampaignServiceError("Campaign service returned malformed steps")
        return data

    async def get_campaign(self, campaign_id: str) -> dict[str, Any]:
        try:
            data = await self._request("GET", f"/campaigns/{campaign_id}")
        except CampaignServiceError as exc:
            if exc.status_code == 404:
                raise NotFoundError("Campaign", campaign_id) from exc
            raise
        return self._expect_object(data)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._headers(),
                    json=json_body,
                )
                response.raise_for_status()
                body = response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "campaign_service_http_error",
                extra={"method": method, "url": url, "status_code": status_code},
            )
            raise CampaignServiceError(
                f"Campaign service error {status_code} for {method} {path}",
                status_code=status_code,
            ) from e

        except httpx.TimeoutException as e:
            logger.warning(
                "campaign_service_timeout",
                extra={"method": method, "url": url, "timeout": self.timeout},
            )
            raise CampaignServiceError(
                f"Campaign service timeout after {self.timeout}s: {method} {path}"
            ) from e

        except httpx.RequestError as e:
            logger.warning(
                "campaign_service_network_error",
                extra={"method": method, "url": url, "error": str(e)},
            )
            raise CampaignServiceError(f"Campaign service unreachable: {method} {path}") from e

        except json.JSONDecodeError as e:
            raise CampaignServiceError(f"Campaign service returned non-JSON body: {method} {path}") from e

        return self._unwrap(body, method=method, path=path)

    @staticmethod
    def _unwrap(body: Any, *, method: str, path: str) -> Any:
        if not isinstance(body, dict) or "data" not in body:
            raise CampaignServiceError(f"Campaign service returned malformed body: {method} {path}")
        if body.get("success") is False:
            message = body.get("error") or body.get("message") or "request rejected"
            raise CampaignServiceError(f"Campaign service rejected {method} {path}: {message}")
        return body["data"]

    @staticmethod
    def _expect_object(data: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise CampaignServiceError("Campaign service returned malformed campaign")
        return data
