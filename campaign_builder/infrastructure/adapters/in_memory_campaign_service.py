"""In-memory CampaignService adapter (Infrastructure).

Backs `campaign_service_backend="memory"` for local runs and tests. Stored shapes follow
the remote service: campaigns carry `id`, `name`, `status`, `config`, timestamps and a
`steps` list whose items gain `id` and `campaign_id`.
"""

from __future__ import annotations

import asyncio
import copy
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from campaign_builder.domain.exceptions import NotFoundError
from campaign_builder.domain.value_objects.campaign_status import CampaignStatus


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class InMemoryCampaignService:
    def __init__(self) -> None:
        self._campaigns: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def create_campaign(self, payload: dict[str, Any]) -> dict[str, Any]:
        campaign_id = f"camp_{uuid4().hex[:8]}"
        now = _now_iso()
        campaign = {
            "id": campaign_id,
            "name": payload.get("name", ""),
            "status": payload.get("status") or CampaignStatus.DRAFT.value,
            "config": copy.deepcopy(payload.get("config") or {}),
            "created_at": now,
            "updated_at": now,
            "steps": [],
        }
        campaign["steps"] = self._stored_steps(campaign_id, payload.get("steps") or [])

        async with self._lock:
            self._campaigns[campaign_id] = campaign
            return copy.deepcopy(campaign)

    async def update_campaign(self, campaign_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        async with self._lock:
            campaign = self._get(campaign_id)
            for key in ("name", "status", "config"):
                if key in updates:
                    campaign[key] = copy.deepcopy(updates[key])
            if "steps" in updates:
                campaign["steps"] = self._stored_steps(campaign_id, updates["steps"] or [])
            campaign["updated_at"] = _now_iso()
            return copy.deepcopy(campaign)

    async def update_campaign_steps(
        self, campaign_id: str, steps: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        async with self._lock:
            campaign = self._get(campaign_id)
            campaign["steps"] = self._stored_steps(campaign_id, steps)
            campaign["updated_at"] = _now_iso()
            return copy.deepcopy(campaign["steps"])

    async def get_campaign(self, campaign_id: str) -> dict[str, Any]:
        async with self._lock:
            return copy.deepcopy(self._get(campaign_id))

    def _get(self, campaign_id: str) -> dict[str, Any]:
        campaign = self._campaigns.get(campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign", campaign_id)
        return campaign

    @staticmethod
    def _stored_steps(campaign_id: str, steps: list[dict[str, Any]]) -> list[dict[str, Any]]:
        now = _now_iso()
        return [
            {
                **copy.deepcopy(step),
                "id": f"step_{uuid4().hex[:8]}",
                "campaign_id": campaign_id,
                "created_at": now,
                "updated_at": now,
            }
            for step in steps
        ]
